"""Synthetic error-path Result for exercising failure rendering.

An "empty" artifacts file is written to a scratch directory and audited in
audit-only mode; the resulting Result is then decorated with illustrative
warnings so the renderer has something to show for each failure style.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
from pathlib import Path
import shutil
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from reportmux.errors import PreconditionError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from reportmux.collaborators.base import AuditRunner
    from reportmux.lhr import Result

logger = logging.getLogger(__name__)

ARTIFACTS_FILENAME = "artifacts.json"
ERROR_USER_AGENT = "Mozilla/5.0 ErrorUserAgent Chrome/66"
NO_FCP_WARNING = (
    "Something went wrong with recording the trace over your page load. "
    "Please run Lighthouse again. (NO_FCP)"
)

#: Settings an audit run uses when none are configured.
DEFAULT_SETTINGS: dict[str, Any] = {
    "output": "json",
    "maxWaitForFcp": 30_000,
    "maxWaitForLoad": 45_000,
    "formFactor": "mobile",
    "throttling": {
        "rttMs": 150,
        "throughputKbps": 1638.4,
        "requestLatencyMs": 562.5,
        "downloadThroughputKbps": 1474.56,
        "uploadThroughputKbps": 675,
        "cpuSlowdownMultiplier": 4,
    },
    "throttlingMethod": "simulate",
    "screenEmulation": {
        "mobile": True,
        "width": 360,
        "height": 640,
        "deviceScaleFactor": 2.625,
        "disabled": False,
    },
    "emulatedUserAgent": (
        "Mozilla/5.0 (Linux; Android 7.0; Moto G (4)) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/88.0.4324.175 Mobile Safari/537.36 "
        "Chrome-Lighthouse"
    ),
    "auditMode": False,
    "gatherMode": False,
    "disableStorageReset": False,
    "channel": "node",
    "budgets": None,
    "locale": "en-US",
    "blockedUrlPatterns": None,
    "additionalTraceCategories": None,
    "extraHeaders": None,
    "precomputedLanternData": None,
    "onlyAudits": None,
    "onlyCategories": None,
    "skipAudits": None,
}

FONT_DISPLAY_WARNINGS: tuple[str, ...] = (
    "Lighthouse was unable to automatically check the font-display value for the "
    "following URL: https://secure-ds.serving-sys.com/resources/PROD/html5/105657/"
    "20190307/1074580285/43862346571980472/fonts/IBMPlexSans-Light-Latin1.woff.",
    "Lighthouse was unable to automatically check the font-display value for the "
    "following URL: https://secure-ds.serving-sys.com/resources/PROD/html5/105657/"
    "20190307/1074580285/43862346571980472/fonts/IBMPlexSans-Bold-Latin1.woff.",
)

#: Audits shown as passing-with-a-warning: audit id -> the single warning.
PASSING_WITH_WARNING: dict[str, str] = {
    "offscreen-images": (
        "Invalid image sizing information: "
        "https://cdn.cnn.com/cnn/.e1mo/img/4.0/vr/vr_new_asset.png"
    ),
    "apple-touch-icon": (
        "`apple-touch-icon-precomposed` is out of date; "
        "`apple-touch-icon` is preferred."
    ),
}


class ArtifactsUrl(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    requested_url: str = Field(alias="requestedUrl")
    final_url: str = Field(alias="finalUrl")


class BaseArtifacts(BaseModel):
    """Raw page-collection output for a load that never painted.

    Serialized with the collection engine's field names (``by_alias=True``)
    so an audit-only run can pick it up from disk.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    fetch_time: str = Field(alias="fetchTime")
    lighthouse_run_warnings: list[str] = Field(alias="LighthouseRunWarnings")
    host_form_factor: Literal["desktop", "mobile"] = Field(alias="HostFormFactor")
    host_user_agent: str = Field(alias="HostUserAgent")
    network_user_agent: str = Field(alias="NetworkUserAgent")
    benchmark_index: int = Field(alias="BenchmarkIndex")
    web_app_manifest: dict[str, Any] | None = Field(default=None, alias="WebAppManifest")
    installability_errors: dict[str, Any] = Field(
        default_factory=lambda: {"errors": []}, alias="InstallabilityErrors"
    )
    stacks: list[Any] = Field(default_factory=list, alias="Stacks")
    settings: dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_SETTINGS))
    url: ArtifactsUrl = Field(alias="URL")
    timing: list[Any] = Field(default_factory=list, alias="Timing")
    page_load_error: dict[str, Any] | None = Field(default=None, alias="PageLoadError")
    devtools_logs: dict[str, Any] = Field(default_factory=dict, alias="devtoolsLogs")
    traces: dict[str, Any] = Field(default_factory=dict)


def build_error_artifacts(url: str) -> BaseArtifacts:
    """Return the fixed artifacts of a page load that failed before FCP."""
    return BaseArtifacts(
        fetch_time="2019-06-26T23:56:58.381Z",
        lighthouse_run_warnings=[NO_FCP_WARNING],
        host_form_factor="desktop",
        host_user_agent=ERROR_USER_AGENT,
        network_user_agent=ERROR_USER_AGENT,
        benchmark_index=1000,
        url=ArtifactsUrl(requested_url=url, final_url=url),
    )


@contextmanager
def scratch_directory(path: Path) -> Iterator[Path]:
    """Create *path* and remove it recursively on every exit path.

    When the body raises, a removal failure is logged and the body's
    exception propagates.
    """
    path.mkdir(parents=True, exist_ok=True)
    try:
        yield path
    except BaseException:
        try:
            shutil.rmtree(path)
        except OSError as exc:
            logger.warning("Scratch cleanup failed for %s: %s", path, exc)
        raise
    shutil.rmtree(path)


async def generate_error_lhr(
    runner: AuditRunner,
    *,
    scratch_dir: Path,
    url: str = "http://fakeurl.com",
) -> Result:
    """Build an error Result by auditing empty artifacts in audit-only mode.

    Raises:
        PreconditionError: If the run returns nothing, or the Result lacks an
            audit that gets decorated.
    """
    artifacts = build_error_artifacts(url)

    with scratch_directory(scratch_dir) as tmp:
        (tmp / ARTIFACTS_FILENAME).write_text(
            artifacts.model_dump_json(by_alias=True), encoding="utf-8"
        )
        logger.debug("Running audit-only mode over %s", tmp)
        runner_result = await runner.run_audits_only(
            artifacts.url.requested_url, audit_mode=tmp
        )

    if not runner_result:
        raise PreconditionError(
            "Failed to run audits on empty artifacts",
            hint="The audit-only executor returned no result.",
        )

    error_lhr = runner_result.lhr
    audits = error_lhr.get("audits", {})

    _require_audit(audits, "font-display")["warnings"] = list(FONT_DISPLAY_WARNINGS)

    for audit_id, warning in PASSING_WITH_WARNING.items():
        audit = _require_audit(audits, audit_id)
        audit["warnings"] = [warning]
        audit.pop("errorMessage", None)
        audit["scoreDisplayMode"] = "binary"
        audit["score"] = 1

    return error_lhr


def _require_audit(audits: dict[str, Any], audit_id: str) -> dict[str, Any]:
    audit = audits.get(audit_id)
    if not isinstance(audit, dict):
        raise PreconditionError(
            f"Error Result is missing the {audit_id!r} audit",
            hint="The audit-only run must use a config that includes it.",
        )
    return audit
