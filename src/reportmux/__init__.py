"""reportmux: Build every rendered variant of an audit Result.

Public API:
    - build_sample_reports(): Write the {Result x flavor} matrix to disk
    - prepare_lab_data() / install_features(): Embeddable lab-data fragments
    - narrow_to_performance(): Single-category Result for embedding
    - Config: Configuration dataclass
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from reportmux.config import Config
from reportmux.error_lhr import generate_error_lhr
from reportmux.errors import (
    AuditRunError,
    ConfigurationError,
    PreconditionError,
    ReportmuxError,
    ResultError,
)
from reportmux.execute import BuildTrace, execute_plan
from reportmux.lhr import add_plugin_category, clone_result, load_result, parse_result
from reportmux.locales import CatalogTranslator
from reportmux.narrow import narrow_to_performance
from reportmux.plan import build_plan, collect_named_results
from reportmux.psi import LabDataBundle, install_features, prepare_lab_data
from reportmux.report_html import ReportAssets, StandaloneReportRenderer

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reportmux.collaborators.base import AuditRunner, HtmlRenderer, Translator

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("reportmux")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("reportmux").addHandler(logging.NullHandler())

logger = logging.getLogger(__name__)


async def build_sample_reports(
    result: str | Mapping[str, Any],
    *,
    config: Config,
    translator: Translator | None = None,
    renderer: HtmlRenderer | None = None,
    audit_runner: AuditRunner | None = None,
    assets: ReportAssets | None = None,
) -> BuildTrace:
    """Render every variant of *result* and write it under ``config.dist_dir``.

    Variants are the base Result, one per configured locale, a synthetic
    error Result, and a performance-only Result, each in every flavor.

    Args:
        result: The base Result (mapping or JSON text). Never modified.
        config: Build configuration.
        translator: Locale swapper; defaults to the packaged catalogs.
        renderer: Standalone report renderer; defaults to the packaged template.
        audit_runner: Audit-only executor for the error Result; defaults to
            the ``lighthouse`` CLI, or a mock when ``config.use_mock``.
        assets: Templates and payloads; loaded from ``config.assets_dir``
            (or the package) when *None*.

    Returns:
        BuildTrace listing every file written, in build order.

    Example:
        config = Config(dist_dir=Path("dist/now"), use_mock=True)
        trace = await build_sample_reports(load_result("sample.json"), config=config)
    """
    assets = assets or ReportAssets.load(config.assets_dir)
    renderer = renderer or StandaloneReportRenderer(assets)
    translator = translator or CatalogTranslator()
    audit_runner = audit_runner or _get_audit_runner(config)

    lhr = parse_result(result)
    base = add_plugin_category(lhr) if config.include_plugin_category else clone_result(lhr)

    error_lhr = await generate_error_lhr(
        audit_runner, scratch_dir=config.scratch_dir, url=config.error_url
    )

    named_results = collect_named_results(
        base, error_lhr, translator=translator, config=config
    )
    plan = build_plan(named_results, config.output_dir)
    trace = execute_plan(plan, renderer=renderer, assets=assets)
    logger.info("Wrote %d report(s) in %.2fs", len(trace.written), trace.duration_s)
    return trace


def _get_audit_runner(config: Config) -> AuditRunner:
    """Get the audit-only executor the configuration asks for."""
    if config.use_mock:
        from reportmux.collaborators.mock import MockAuditRunner

        return MockAuditRunner()

    from reportmux.collaborators.lighthouse_cli import LighthouseCliRunner

    return LighthouseCliRunner(
        config.lighthouse_bin or "lighthouse", timeout_s=config.audit_timeout_s
    )


__all__ = [
    "AuditRunError",
    "BuildTrace",
    "Config",
    "ConfigurationError",
    "LabDataBundle",
    "PreconditionError",
    "ReportAssets",
    "ReportmuxError",
    "ResultError",
    "build_sample_reports",
    "install_features",
    "load_result",
    "narrow_to_performance",
    "prepare_lab_data",
]
