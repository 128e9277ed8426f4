"""Collaborator protocols: the boundaries reportmux delegates across."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from bs4 import BeautifulSoup, Tag

    from reportmux.lhr import Category, CategoryGroup, Result

#: Normalizes a raw Result for rendering (see ``lhr.prepare_report_result``).
ResultPreparer = Callable[["Result"], "Result"]


@dataclass(frozen=True)
class RunnerResult:
    """Output of an audit-only run."""

    lhr: Result
    report: str | None = None


@runtime_checkable
class Translator(Protocol):
    """Produces a locale-swapped copy of a Result."""

    def translate(self, result: Result, locale: str) -> Result:
        """Return *result* translated into *locale*."""
        ...


@runtime_checkable
class HtmlRenderer(Protocol):
    """Turns a whole Result into a standalone HTML document."""

    def render_html(self, result: Result) -> str:
        """Return the report markup for *result*."""
        ...


@runtime_checkable
class CategoryRenderer(Protocol):
    """Renders a single category into a DOM fragment."""

    def render(
        self,
        category: Category,
        category_groups: dict[str, CategoryGroup],
        environment: str,
        *,
        full_page_screenshot: dict[str, Any] | None = None,
    ) -> Tag:
        """Render *category*; *environment* controls which chrome is emitted."""
        ...

    def create_component(self, name: str) -> Tag:
        """Return a fresh copy of the named template component."""
        ...


@runtime_checkable
class AuditRunner(Protocol):
    """Runs the scoring engine over artifacts saved on disk."""

    async def run_audits_only(self, url: str, *, audit_mode: Path) -> RunnerResult | None:
        """Audit the artifacts in *audit_mode* without collecting from *url*."""
        ...


@runtime_checkable
class ReportFeatures(Protocol):
    """Interactive report features installed into a live host document."""

    def install_full_page_screenshot(self, el: Tag, screenshot: dict[str, Any]) -> None:
        """Back element thumbnails under *el* with the page-level screenshot."""
        ...

    def install_overlay_feature(
        self,
        *,
        document: BeautifulSoup,
        report_el: Tag,
        overlay_container_el: Tag,
        full_page_screenshot: dict[str, Any],
    ) -> None:
        """Wire element thumbnails in *report_el* to the zoom overlay."""
        ...

    def add_button(
        self,
        *,
        container: Tag,
        text: str,
        icon: str,
        on_click: Callable[[], None],
    ) -> Tag:
        """Append an activatable control to *container*."""
        ...

    def open_treemap(self, result: Result) -> None:
        """Open the script size-breakdown view over *result*."""
        ...
