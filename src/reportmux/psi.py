"""Lab data for embedding a performance report in a host page (PSI).

A two-phase protocol keeps the host in charge of timing:

    bundle = prepare_lab_data(lhr_json, document, renderer=renderer)
    host_el.append(bundle.perf_category_el)   # attach fragments first
    install_features(bundle, host_el)         # then wire features, once

Neither phase modifies the Result passed in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any

from reportmux.collaborators.dom import DomReportFeatures
from reportmux.errors import PreconditionError
from reportmux.i18n import I18n
from reportmux.lhr import parse_result, prepare_report_result

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bs4 import BeautifulSoup, Tag

    from reportmux.collaborators.base import (
        CategoryRenderer,
        ReportFeatures,
        ResultPreparer,
    )
    from reportmux.lhr import Category, Result

logger = logging.getLogger(__name__)

#: Tells the category renderer to omit the category header and permalink.
PSI_ENVIRONMENT = "PSI"

FULL_PAGE_SCREENSHOT_AUDIT_ID = "full-page-screenshot"
FINAL_SCREENSHOT_AUDIT_ID = "final-screenshot"
TREEMAP_AUDIT_ID = "script-treemap-data"

SCREENSHOTS_CONTAINER_SELECTOR = ".element-screenshots-container"
METRICS_BUTTON_CONTAINER_SELECTOR = ".lh-audit-group--metrics"


@dataclass
class LabDataBundle:
    """Renderable fragments plus what :func:`install_features` needs later.

    The caller owns the bundle and decides when, and whether, to install.
    """

    score_gauge_el: Tag
    perf_category_el: Tag
    final_screenshot_data_uri: str | None
    score_scale_el: Tag
    i18n: I18n
    document: BeautifulSoup
    #: The Result as passed in, untrimmed; detail views are opened over it.
    result: Result
    features: ReportFeatures
    full_page_screenshot: dict[str, Any] | None = None
    installed: bool = field(default=False, init=False)


def prepare_lab_data(
    lh_result: str | Mapping[str, Any],
    document: BeautifulSoup,
    *,
    renderer: CategoryRenderer,
    features: ReportFeatures | None = None,
    i18n: I18n | None = None,
    prepare: ResultPreparer = prepare_report_result,
) -> LabDataBundle:
    """Render the lab-data fragments for *lh_result*.

    Args:
        lh_result: A Result, or its JSON serialization.
        document: The host page the fragments will live in.
        renderer: Renders the performance category and template components.
        features: Installs interactive features; defaults to
            :class:`~reportmux.collaborators.dom.DomReportFeatures`.
        i18n: Formatting context; built from the Result when *None*. The
            context used is returned on the bundle.
        prepare: Normalizes the raw Result for rendering.

    Raises:
        PreconditionError: If the Result has no performance category or no
            category groups, or the rendered fragments lack the score gauge
            or score scale.
    """
    lhr = parse_result(lh_result)
    report_lhr = prepare(lhr)
    i18n = i18n or I18n.from_result(report_lhr)

    perf_category = report_lhr["categories"].get("performance")
    if not perf_category:
        raise PreconditionError("No performance category. Can't make lab data section")
    category_groups = report_lhr.get("categoryGroups")
    if category_groups is None:
        raise PreconditionError("No category groups found.")

    metrics_group = category_groups.get("metrics")
    if metrics_group is not None:
        metrics_group["title"] = i18n.get("labDataTitle")
        metrics_group["description"] = i18n.get("lsPerformanceCategoryDescription")

    full_page_screenshot = _get_full_page_screenshot(report_lhr)

    perf_category_el = renderer.render(
        perf_category,
        category_groups,
        PSI_ENVIRONMENT,
        full_page_screenshot=full_page_screenshot,
    )

    score_gauge_el = _find(".lh-score__gauge", perf_category_el)
    score_gauge_el.extract()
    gauge_wrapper_el = _find(".lh-gauge__wrapper", score_gauge_el)
    _add_class(gauge_wrapper_el, "lh-gauge__wrapper--huge")
    # No navigation from the gauge in the embedded page.
    if "href" in gauge_wrapper_el.attrs:
        del gauge_wrapper_el["href"]

    score_scale_el = _find(".lh-scorescale", renderer.create_component("scorescale"))

    return LabDataBundle(
        score_gauge_el=score_gauge_el,
        perf_category_el=perf_category_el,
        final_screenshot_data_uri=get_final_screenshot(perf_category),
        score_scale_el=score_scale_el,
        i18n=i18n,
        document=document,
        result=lhr,
        features=features or DomReportFeatures(),
        full_page_screenshot=full_page_screenshot,
    )


def install_features(bundle: LabDataBundle, report_el: Tag) -> None:
    """Install interactive features for *bundle* under *report_el*.

    Call after the fragments are attached to the host document, and at most
    once per bundle.

    Raises:
        PreconditionError: On a second call, or when a full-page screenshot
            exists but the host page has no screenshot overlay container.
    """
    if bundle.installed:
        raise PreconditionError(
            "Lab-data features are already installed",
            hint="Prepare a new bundle to install into another container.",
        )
    bundle.installed = True

    features = bundle.features
    full_page_screenshot = bundle.full_page_screenshot
    if full_page_screenshot:
        features.install_full_page_screenshot(report_el, full_page_screenshot["screenshot"])

        # The overlay lives outside report_el so sticky report headers
        # cannot bleed through it.
        screenshots_container = bundle.document.select_one(SCREENSHOTS_CONTAINER_SELECTOR)
        if screenshots_container is None:
            raise PreconditionError(f"missing {SCREENSHOTS_CONTAINER_SELECTOR}")

        screenshot_el = bundle.document.new_tag("div")
        screenshots_container.append(screenshot_el)
        features.install_overlay_feature(
            document=bundle.document,
            report_el=report_el,
            overlay_container_el=screenshot_el,
            full_page_screenshot=full_page_screenshot,
        )
        # Not under report_el, so it needs its own screenshot backing.
        features.install_full_page_screenshot(
            screenshot_el, full_page_screenshot["screenshot"]
        )

    original = bundle.result
    treemap_audit = original.get("audits", {}).get(TREEMAP_AUDIT_ID)
    button_container = report_el.select_one(METRICS_BUTTON_CONTAINER_SELECTOR)
    if treemap_audit and treemap_audit.get("details") and button_container is not None:
        features.add_button(
            container=button_container,
            text=bundle.i18n.get("viewTreemapLabel"),
            icon="treemap",
            on_click=lambda: features.open_treemap(original),
        )
    else:
        logger.debug("Treemap button not installed")


def get_final_screenshot(perf_category: Category) -> str | None:
    """Return the final screenshot data URI, or *None* when unavailable."""
    audit_ref = next(
        (ref for ref in perf_category.get("auditRefs", []) if ref.get("id") == FINAL_SCREENSHOT_AUDIT_ID),
        None,
    )
    if not audit_ref or not audit_ref.get("result"):
        return None
    audit = audit_ref["result"]
    if audit.get("scoreDisplayMode") == "error":
        return None
    details = audit.get("details")
    if not details or details.get("type") != "screenshot":
        return None
    return details.get("data")


def _get_full_page_screenshot(report_lhr: Result) -> dict[str, Any] | None:
    audit = report_lhr.get("audits", {}).get(FULL_PAGE_SCREENSHOT_AUDIT_ID)
    details = audit.get("details") if audit else None
    if details and details.get("type") == "full-page-screenshot":
        return dict(details)
    return None


def _find(selector: str, el: Tag) -> Tag:
    found = el.select_one(selector)
    if found is None:
        raise PreconditionError(
            f"Rendered fragment has no element matching {selector!r}",
            hint="The category renderer must emit the standard report structure.",
        )
    return found


def _add_class(el: Tag, name: str) -> None:
    classes = el.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if name not in classes:
        el["class"] = [*classes, name]
