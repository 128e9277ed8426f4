"""Locale variants: translated copies of a base Result."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import re
from typing import TYPE_CHECKING, Any

from reportmux.errors import ConfigurationError
from reportmux.lhr import clone_result

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from reportmux.collaborators.base import Translator
    from reportmux.lhr import Result

logger = logging.getLogger(__name__)

PACKAGED_CATALOG_DIR = Path(__file__).parent / "assets" / "locales"

_PATH_SEGMENT_RE = re.compile(r"([^.\[\]]+)|\[([^\]]+)\]")
_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class LocaleVariant:
    """A translated Result and the name it is written under."""

    name: str
    locale: str
    result: Result


def expand_locales(
    result: Mapping[str, Any],
    locales: Sequence[tuple[str, str]],
    translator: Translator,
) -> list[LocaleVariant]:
    """Translate *result* once per ``(name, locale)`` pair.

    The translator always receives its own copy, so *result* is unchanged
    whatever the translator does. Translator failures propagate.
    """
    variants: list[LocaleVariant] = []
    for name, locale in locales:
        translated = translator.translate(clone_result(result), locale)
        logger.debug("Translated base Result into %s as %r", locale, name)
        variants.append(LocaleVariant(name=name, locale=locale, result=translated))
    return variants


class CatalogTranslator:
    """Translator backed by per-locale JSON catalogs.

    A catalog (``<locale>.json``) holds ``rendererFormattedStrings`` merged
    over the Result's own, and ``messages`` keyed by message id. Message ids
    are located in the Result through ``i18n.icuMessagePaths``.
    """

    def __init__(self, catalog_dir: Path | None = None) -> None:
        self.catalog_dir = Path(catalog_dir) if catalog_dir else PACKAGED_CATALOG_DIR
        self._catalogs: dict[str, dict[str, Any]] = {}

    def supported_locales(self) -> list[str]:
        return sorted(p.stem for p in self.catalog_dir.glob("*.json"))

    def load_catalog(self, locale: str) -> dict[str, Any]:
        if locale not in self._catalogs:
            path = self.catalog_dir / f"{locale}.json"
            if not path.is_file():
                raise ConfigurationError(
                    f"Unsupported locale: {locale!r}",
                    hint=f"Available: {', '.join(self.supported_locales()) or 'none'}",
                )
            self._catalogs[locale] = json.loads(path.read_text(encoding="utf-8"))
        return self._catalogs[locale]

    def translate(self, result: Result, locale: str) -> Result:
        """Return a copy of *result* with strings swapped into *locale*."""
        catalog = self.load_catalog(locale)
        messages: dict[str, str] = catalog.get("messages", {})
        clone = clone_result(result)

        clone.setdefault("configSettings", {})["locale"] = locale
        i18n = clone.setdefault("i18n", {})
        i18n["rendererFormattedStrings"] = {
            **i18n.get("rendererFormattedStrings", {}),
            **catalog.get("rendererFormattedStrings", {}),
        }

        missing: list[str] = []
        for message_id, entries in i18n.get("icuMessagePaths", {}).items():
            translated = messages.get(message_id)
            if translated is None:
                missing.append(message_id)
                continue
            for entry in entries:
                if isinstance(entry, dict):
                    values = entry.get("values", {})
                    text = _PLACEHOLDER_RE.sub(
                        lambda m, v=values: str(v.get(m.group(1), m.group(0))),
                        translated,
                    )
                    _set_path(clone, entry["path"], text)
                else:
                    _set_path(clone, entry, translated)

        if missing:
            logger.debug("%d message(s) have no %s translation", len(missing), locale)
        return clone


def _set_path(obj: Any, path: str, value: str) -> None:
    """Set ``obj[a][b]...`` for a path like ``audits[fcp].title``.

    Paths that do not resolve to an existing container are skipped.
    """
    keys = [m.group(1) or m.group(2) for m in _PATH_SEGMENT_RE.finditer(path)]
    target = obj
    for key in keys[:-1]:
        if isinstance(target, dict):
            target = target.get(key)
        elif isinstance(target, list) and key.isdigit() and int(key) < len(target):
            target = target[int(key)]
        else:
            target = None
        if target is None:
            logger.debug("Skipping unresolved message path %s", path)
            return
    if isinstance(target, dict) and keys:
        target[keys[-1]] = value
    elif isinstance(target, list) and keys and keys[-1].isdigit() and int(keys[-1]) < len(target):
        target[int(keys[-1])] = value
