"""Formatting context passed explicitly to the lab-data extractor."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_LOCALE = "en-US"

#: English renderer strings used wherever a Result does not supply its own.
UI_STRINGS: Mapping[str, str] = MappingProxyType(
    {
        "labDataTitle": "Lab Data",
        "lsPerformanceCategoryDescription": (
            "[Lighthouse](https://developers.google.com/web/tools/lighthouse/) "
            "analysis of the current page on an emulated mobile network. "
            "Values are estimated and may vary."
        ),
        "viewTreemapLabel": "View Treemap",
        "warningHeader": "Warnings: ",
        "errorLabel": "Error!",
        "passedAuditsGroupTitle": "Passed audits",
        "scorescaleLabel": "Score scale:",
    }
)


@dataclass(frozen=True)
class I18n:
    """Locale plus the renderer strings to format with."""

    locale: str = DEFAULT_LOCALE
    strings: Mapping[str, str] = field(default_factory=lambda: dict(UI_STRINGS))

    @classmethod
    def from_result(cls, result: Mapping[str, Any]) -> I18n:
        """Build the context a Result asks for, defaulting missing strings."""
        locale = result.get("configSettings", {}).get("locale") or DEFAULT_LOCALE
        formatted = result.get("i18n", {}).get("rendererFormattedStrings", {})
        return cls(locale=locale, strings={**UI_STRINGS, **formatted})

    def get(self, key: str) -> str:
        return self.strings.get(key, UI_STRINGS.get(key, key))
