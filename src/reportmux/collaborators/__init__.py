"""Collaborator protocols and default implementations."""

from .base import (
    AuditRunner,
    CategoryRenderer,
    HtmlRenderer,
    ReportFeatures,
    ResultPreparer,
    RunnerResult,
    Translator,
)
from .dom import DomReportFeatures
from .lighthouse_cli import LighthouseCliRunner
from .mock import MockAuditRunner

__all__ = [
    "AuditRunner",
    "CategoryRenderer",
    "DomReportFeatures",
    "HtmlRenderer",
    "LighthouseCliRunner",
    "MockAuditRunner",
    "ReportFeatures",
    "ResultPreparer",
    "RunnerResult",
    "Translator",
]
