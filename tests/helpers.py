"""Test helpers (small, reusable builders and doubles).

Keep this file purpose-built: Result builders plus one double per
collaborator protocol, so suites do not grow bespoke fakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup, Tag

from reportmux.collaborators.base import RunnerResult

FCP_TITLE_MESSAGE = "lighthouse-core/audits/metrics/first-contentful-paint.js | title"
PERF_TITLE_MESSAGE = "lighthouse-core/config/default-config.js | performanceCategoryTitle"


def make_lhr(
    *,
    final_screenshot_mode: str = "informative",
    with_final_screenshot: bool = True,
    with_full_page_screenshot: bool = True,
    with_treemap: bool = True,
) -> dict[str, Any]:
    """Return a small but complete Result."""
    audits: dict[str, Any] = {
        "first-contentful-paint": {
            "id": "first-contentful-paint",
            "title": "First Contentful Paint",
            "score": 0.9,
            "scoreDisplayMode": "numeric",
            "warnings": [],
        },
        "performance-budget": {
            "id": "performance-budget",
            "title": "Performance budget",
            "score": None,
            "scoreDisplayMode": "notApplicable",
        },
        "timing-budget": {
            "id": "timing-budget",
            "title": "Timing budget",
            "score": None,
            "scoreDisplayMode": "notApplicable",
        },
        "document-title": {
            "id": "document-title",
            "title": "Document has a `<title>` element",
            "score": 1,
            "scoreDisplayMode": "binary",
        },
    }
    perf_refs: list[dict[str, Any]] = [
        {"id": "first-contentful-paint", "weight": 10, "group": "metrics"},
        {"id": "performance-budget", "weight": 0, "group": "budgets"},
        {"id": "timing-budget", "weight": 0, "group": "budgets"},
    ]
    if with_final_screenshot:
        audits["final-screenshot"] = {
            "id": "final-screenshot",
            "title": "Final Screenshot",
            "score": None,
            "scoreDisplayMode": final_screenshot_mode,
            "details": {"type": "screenshot", "data": "abc"},
        }
        perf_refs.append({"id": "final-screenshot", "weight": 0})
    if with_full_page_screenshot:
        audits["full-page-screenshot"] = {
            "id": "full-page-screenshot",
            "score": None,
            "scoreDisplayMode": "informative",
            "details": {
                "type": "full-page-screenshot",
                "screenshot": {"data": "data:image/webp;base64,fps", "width": 412, "height": 2000},
                "nodes": {},
            },
        }
    if with_treemap:
        audits["script-treemap-data"] = {
            "id": "script-treemap-data",
            "score": None,
            "scoreDisplayMode": "informative",
            "details": {"type": "treemap-data", "nodes": []},
        }

    return {
        "lighthouseVersion": "7.0.0",
        "requestedUrl": "https://example.com/",
        "finalUrl": "https://example.com/",
        "fetchTime": "2021-01-01T00:00:00.000Z",
        "runWarnings": [],
        "categories": {
            "performance": {
                "id": "performance",
                "title": "Performance",
                "score": 0.87,
                "auditRefs": perf_refs,
            },
            "seo": {
                "id": "seo",
                "title": "SEO",
                "score": 1,
                "auditRefs": [{"id": "document-title", "weight": 1}],
            },
        },
        "audits": audits,
        "categoryGroups": {
            "metrics": {"title": "Metrics"},
            "budgets": {"title": "Budgets"},
        },
        "configSettings": {"locale": "en-US"},
        "i18n": {
            "rendererFormattedStrings": {"labDataTitle": "Lab Data"},
            "icuMessagePaths": {
                PERF_TITLE_MESSAGE: ["categories.performance.title"],
                FCP_TITLE_MESSAGE: ["audits[first-contentful-paint].title"],
            },
        },
    }


def make_error_lhr() -> dict[str, Any]:
    """Return what an audit-only run over empty artifacts looks like."""

    def errored(audit_id: str) -> dict[str, Any]:
        return {
            "id": audit_id,
            "score": None,
            "scoreDisplayMode": "error",
            "errorMessage": "NO_FCP",
            "warnings": [],
        }

    return {
        "categories": {
            "performance": {
                "id": "performance",
                "title": "Performance",
                "score": None,
                "auditRefs": [{"id": "offscreen-images", "weight": 0}],
            }
        },
        "audits": {
            audit_id: errored(audit_id)
            for audit_id in ("font-display", "offscreen-images", "apple-touch-icon")
        },
        "categoryGroups": {},
        "configSettings": {"locale": "en-US"},
        "i18n": {"rendererFormattedStrings": {}},
    }


@dataclass
class FakeTranslator:
    """Translator double that edits the Result it is handed, in place."""

    calls: list[str] = field(default_factory=list)
    error: BaseException | None = None

    def translate(self, result: dict[str, Any], locale: str) -> dict[str, Any]:
        self.calls.append(locale)
        if self.error is not None:
            raise self.error
        result.setdefault("configSettings", {})["locale"] = locale
        result["categories"]["performance"]["title"] = f"Performance [{locale}]"
        return result


@dataclass
class FakeAuditRunner:
    """Audit-only executor double that records what it saw on disk."""

    lhr: dict[str, Any] | None = field(default_factory=make_error_lhr)
    error: BaseException | None = None
    calls: int = 0
    audit_mode: Path | None = None
    artifacts_text: str | None = None

    async def run_audits_only(self, url: str, *, audit_mode: Path) -> RunnerResult | None:
        del url
        self.calls += 1
        self.audit_mode = audit_mode
        self.artifacts_text = (audit_mode / "artifacts.json").read_text(encoding="utf-8")
        if self.error is not None:
            raise self.error
        if self.lhr is None:
            return None
        return RunnerResult(lhr=self.lhr)  # type: ignore[arg-type]


_CATEGORY_MARKUP = """
<div class="lh-category">
  <div class="lh-score__gauge">
    <a class="lh-gauge__wrapper lh-gauge__wrapper--pass" href="#performance">
      <div class="lh-gauge__percentage">87</div>
    </a>
  </div>
  <div class="lh-audit-group lh-audit-group--metrics">
    <div class="lh-audit" id="first-contentful-paint">
      <div class="lh-element-screenshot"></div>
    </div>
  </div>
</div>
"""


@dataclass
class FakeCategoryRenderer:
    """Category renderer double emitting the standard report structure."""

    emit_gauge: bool = True
    emit_scorescale: bool = True
    calls: list[dict[str, Any]] = field(default_factory=list)

    def render(
        self,
        category: dict[str, Any],
        category_groups: dict[str, Any],
        environment: str,
        *,
        full_page_screenshot: dict[str, Any] | None = None,
    ) -> Tag:
        self.calls.append(
            {
                "category": category,
                "category_groups": category_groups,
                "environment": environment,
                "full_page_screenshot": full_page_screenshot,
            }
        )
        soup = BeautifulSoup(_CATEGORY_MARKUP, "html.parser")
        if not self.emit_gauge:
            soup.select_one(".lh-score__gauge").decompose()
        return soup.select_one(".lh-category")

    def create_component(self, name: str) -> Tag:
        assert name == "scorescale"
        if not self.emit_scorescale:
            return BeautifulSoup("<div></div>", "html.parser")
        return BeautifulSoup(
            '<div class="lh-scorescale"><span>0-49</span><span>50-89</span>'
            "<span>90-100</span></div>",
            "html.parser",
        )


@dataclass
class RecordingFeatures:
    """ReportFeatures double that records calls in order."""

    calls: list[tuple[str, Any]] = field(default_factory=list)
    handlers: list[Any] = field(default_factory=list)
    opened: list[dict[str, Any]] = field(default_factory=list)

    def install_full_page_screenshot(self, el: Tag, screenshot: dict[str, Any]) -> None:
        self.calls.append(("install_full_page_screenshot", el))
        del screenshot

    def install_overlay_feature(
        self,
        *,
        document: BeautifulSoup,
        report_el: Tag,
        overlay_container_el: Tag,
        full_page_screenshot: dict[str, Any],
    ) -> None:
        del document, full_page_screenshot
        self.calls.append(("install_overlay_feature", (report_el, overlay_container_el)))

    def add_button(self, *, container: Tag, text: str, icon: str, on_click: Any) -> Tag:
        self.calls.append(("add_button", (container, text, icon)))
        self.handlers.append(on_click)
        return container

    def open_treemap(self, result: dict[str, Any]) -> None:
        self.opened.append(result)


def host_document() -> BeautifulSoup:
    """Return a faux PSI host page with an attached report container."""
    return BeautifulSoup(
        "<html><body>"
        '<section class="psi-lab-data"></section>'
        '<div class="element-screenshots-container"></div>'
        "</body></html>",
        "html.parser",
    )
