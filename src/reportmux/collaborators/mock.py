"""Mock audit-only executor for offline builds and testing."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from reportmux.collaborators.base import RunnerResult

if TYPE_CHECKING:
    from pathlib import Path

#: Audits the mock run reports, in performance-category order.
_ERRORED_AUDITS: tuple[tuple[str, str], ...] = (
    ("first-contentful-paint", "First Contentful Paint"),
    ("largest-contentful-paint", "Largest Contentful Paint"),
    ("final-screenshot", "Final Screenshot"),
    ("offscreen-images", "Defer offscreen images"),
    ("font-display", "All text remains visible during webfont loads"),
    ("apple-touch-icon", "Provides a valid `apple-touch-icon`"),
)


class MockAuditRunner:
    """Audit-only executor that needs no browser or CLI.

    Reads the saved artifacts and returns a deterministic Result in which
    every audit errored the way a page that never painted would.
    """

    def __init__(self, *, lighthouse_version: str = "0.0.0-mock") -> None:
        self.lighthouse_version = lighthouse_version
        self.calls = 0

    async def run_audits_only(self, url: str, *, audit_mode: Path) -> RunnerResult | None:
        """Return a synthetic error Result for the artifacts in *audit_mode*."""
        self.calls += 1
        artifacts: dict[str, Any] = json.loads(
            (audit_mode / "artifacts.json").read_text(encoding="utf-8")
        )
        run_warnings = list(artifacts.get("LighthouseRunWarnings", []))
        error_message = run_warnings[0] if run_warnings else "Audit could not run."

        audits = {
            audit_id: {
                "id": audit_id,
                "title": title,
                "score": None,
                "scoreDisplayMode": "error",
                "errorMessage": error_message,
                "warnings": [],
            }
            for audit_id, title in _ERRORED_AUDITS
        }
        perf_refs = [
            {"id": audit_id, "weight": 0}
            for audit_id, _ in _ERRORED_AUDITS
            if audit_id != "apple-touch-icon"
        ]
        lhr: dict[str, Any] = {
            "lighthouseVersion": self.lighthouse_version,
            "requestedUrl": url,
            "finalUrl": artifacts.get("URL", {}).get("finalUrl", url),
            "fetchTime": artifacts.get("fetchTime"),
            "userAgent": artifacts.get("HostUserAgent"),
            "runWarnings": run_warnings,
            "configSettings": dict(artifacts.get("settings", {})),
            "categories": {
                "performance": {
                    "id": "performance",
                    "title": "Performance",
                    "score": None,
                    "auditRefs": perf_refs,
                },
                "pwa": {
                    "id": "pwa",
                    "title": "Progressive Web App",
                    "score": None,
                    "auditRefs": [{"id": "apple-touch-icon", "weight": 1}],
                },
            },
            "audits": audits,
            "categoryGroups": {
                "metrics": {"title": "Metrics"},
            },
            "i18n": {"rendererFormattedStrings": {}},
        }
        return RunnerResult(lhr=lhr)  # type: ignore[arg-type]
