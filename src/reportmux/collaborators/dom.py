"""Report UI features applied to a BeautifulSoup host document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bs4 import BeautifulSoup

if TYPE_CHECKING:
    from collections.abc import Callable

    from bs4 import Tag

    from reportmux.lhr import Result

logger = logging.getLogger(__name__)

SCREENSHOT_URL_PROPERTY = "--element-screenshot-url"
ELEMENT_SCREENSHOT_SELECTOR = ".lh-element-screenshot"


class DomReportFeatures:
    """Static-DOM rendition of the report's interactive features.

    Screenshot backing is expressed as an inline CSS custom property,
    overlay wiring as ``data-`` attributes, and buttons as ``<button>``
    elements whose handlers are kept here until :meth:`activate` is called.
    """

    def __init__(self, treemap_opener: Callable[[dict[str, Any]], None] | None = None) -> None:
        self.treemap_opener = treemap_opener
        self._handlers: dict[str, Callable[[], None]] = {}
        self._overlay_count = 0

    def install_full_page_screenshot(self, el: Tag, screenshot: dict[str, Any]) -> None:
        """Expose the screenshot to every thumbnail rendered under *el*."""
        declaration = f"{SCREENSHOT_URL_PROPERTY}: url('{screenshot.get('data', '')}')"
        existing = str(el.get("style", "")).strip().rstrip(";")
        el["style"] = f"{existing}; {declaration}" if existing else declaration

    def install_overlay_feature(
        self,
        *,
        document: BeautifulSoup,
        report_el: Tag,
        overlay_container_el: Tag,
        full_page_screenshot: dict[str, Any],
    ) -> None:
        """Point each element thumbnail in *report_el* at the overlay container."""
        del document
        if not overlay_container_el.get("id"):
            self._overlay_count += 1
            overlay_container_el["id"] = f"lh-screenshot-overlay-{self._overlay_count}"
        overlay_id = str(overlay_container_el["id"])

        screenshot = full_page_screenshot.get("screenshot", {})
        overlay_container_el["data-screenshot-width"] = str(screenshot.get("width", ""))
        overlay_container_el["data-screenshot-height"] = str(screenshot.get("height", ""))
        for thumb in report_el.select(ELEMENT_SCREENSHOT_SELECTOR):
            thumb["data-overlay-target"] = overlay_id

    def add_button(
        self,
        *,
        container: Tag,
        text: str,
        icon: str,
        on_click: Callable[[], None],
    ) -> Tag:
        """Append a button to *container* and remember its handler."""
        button_id = f"lh-button-{icon}-{len(self._handlers) + 1}"
        button = BeautifulSoup("", "html.parser").new_tag(
            "button",
            attrs={"class": f"lh-button lh-button--{icon}", "id": button_id},
        )
        button.string = text
        container.append(button)
        self._handlers[button_id] = on_click
        return button

    def activate(self, button: Tag) -> None:
        """Run the handler registered for *button*."""
        self._handlers[str(button["id"])]()

    def open_treemap(self, result: Result) -> None:
        """Hand the Result to the configured size-breakdown viewer."""
        if self.treemap_opener is None:
            logger.warning("No treemap opener configured; ignoring request")
            return
        self.treemap_opener({"lhr": result})
