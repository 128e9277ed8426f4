"""Result document model: typed shapes, cloning, loading, and preparation.

A Result is plain JSON data (``dict``/``list``/scalars). The TypedDicts below
document the keys reportmux reads or writes; every other key is carried
through untouched.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, TypedDict

from reportmux.errors import ResultError

if TYPE_CHECKING:
    from collections.abc import Mapping

ScoreDisplayMode = Literal[
    "binary", "numeric", "error", "manual", "informative", "notApplicable"
]

PLUGIN_CATEGORY_ID = "lighthouse-plugin-someplugin"


class AuditDetails(TypedDict, total=False):
    """Tagged variant keyed by ``type`` (``screenshot``, ``treemap-data``, ...)."""

    type: str
    #: Data URI; present on ``screenshot`` details.
    data: str
    #: Present on ``full-page-screenshot`` details.
    screenshot: dict[str, Any]
    nodes: dict[str, Any]


class AuditResult(TypedDict, total=False):
    id: str
    title: str
    score: float | None
    scoreDisplayMode: ScoreDisplayMode
    warnings: list[str]
    errorMessage: str
    details: AuditDetails


class AuditRef(TypedDict, total=False):
    id: str
    weight: float
    group: str
    #: Attached by :func:`prepare_report_result`.
    result: AuditResult


class Category(TypedDict, total=False):
    id: str
    title: str
    score: float | None
    auditRefs: list[AuditRef]


class CategoryGroup(TypedDict, total=False):
    title: str
    description: str


class I18nBlock(TypedDict, total=False):
    rendererFormattedStrings: dict[str, str]
    icuMessagePaths: dict[str, list[Any]]


class Result(TypedDict, total=False):
    """The canonical audit-result document."""

    lighthouseVersion: str
    requestedUrl: str
    finalUrl: str
    fetchTime: str
    userAgent: str
    runWarnings: list[str]
    categories: dict[str, Category]
    audits: dict[str, AuditResult]
    categoryGroups: dict[str, CategoryGroup]
    configSettings: dict[str, Any]
    i18n: I18nBlock


def clone_result(result: Mapping[str, Any]) -> Result:
    """Return an independent copy of *result*.

    The copy shares no mutable containers with the input, so edits to either
    side are never visible through the other.
    """
    return copy.deepcopy(dict(result))  # type: ignore[return-value]


def parse_result(raw: str | bytes | Mapping[str, Any]) -> Result:
    """Accept a Result as a mapping or a JSON document and validate its shape."""
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ResultError(
                f"Result is not valid JSON: {e.msg}",
                hint=f"line {e.lineno}, column {e.colno}",
            ) from e
        except UnicodeDecodeError as e:
            raise ResultError(
                f"Result is not valid {e.encoding.upper()}: {e.reason}",
                hint=f"byte offset {e.start}; save the file as UTF-8 JSON.",
            ) from e
    else:
        data = raw

    if not isinstance(data, dict):
        raise ResultError(
            f"Result must be a JSON object, got {type(data).__name__}",
        )
    for key in ("categories", "audits"):
        if not isinstance(data.get(key), dict):
            raise ResultError(
                f"Result is missing {key!r}",
                hint="Pass a complete Result document (the JSON output of an audit run).",
            )
    return data  # type: ignore[return-value]


def load_result(path: str | Path) -> Result:
    """Read and validate a Result JSON file."""
    p = Path(path)
    if not p.is_file():
        raise ResultError(f"Result file not found: {p}")
    return parse_result(p.read_bytes())


def prepare_report_result(result: Mapping[str, Any]) -> Result:
    """Resolve audit references into the shape renderers expect.

    Works on a copy: every ``auditRefs[i]`` gains a ``result`` key holding
    the audit it names, and ``categoryGroups`` is carried along. An audit
    reference that does not resolve is fatal.
    """
    prepared = clone_result(parse_result(result))
    audits = prepared["audits"]

    for category_id, category in prepared["categories"].items():
        if category is None:
            continue
        for ref in category.get("auditRefs", []):
            audit = audits.get(ref.get("id", ""))
            if audit is None:
                raise ResultError(
                    f"Category {category_id!r} references unknown audit {ref.get('id')!r}",
                    hint="Every auditRefs[].id must be a key of 'audits'.",
                )
            ref["result"] = audit

    return prepared


def add_plugin_category(result: Mapping[str, Any]) -> Result:
    """Return a copy of *result* with a demo plugin category appended."""
    clone = clone_result(result)
    clone["categories"][PLUGIN_CATEGORY_ID] = {
        "id": PLUGIN_CATEGORY_ID,
        "title": "Plugin",
        "score": 0.5,
        "auditRefs": [],
    }
    return clone
