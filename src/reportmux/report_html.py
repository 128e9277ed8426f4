"""HTML report generation from templates and a Result.

Templates carry three placeholder tokens which are substituted in one pass;
replacement text is never rescanned, so a Result containing a token string
cannot inject into a later substitution.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from reportmux.errors import ConfigurationError
from reportmux.narrow import narrow_to_performance

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from reportmux.lhr import Result

JSON_TOKEN = "%%LIGHTHOUSE_JSON%%"
JAVASCRIPT_TOKEN = "%%LIGHTHOUSE_JAVASCRIPT%%"
CSS_TOKEN = "/*%%LIGHTHOUSE_CSS%%*/"

PACKAGED_ASSETS_DIR = Path(__file__).parent / "assets"

_ASSET_FILES: dict[str, str] = {
    "report_template": "standalone-template.html",
    "report_javascript": "report.js",
    "report_css": "report.css",
    "psi_template": "faux-psi-template.html",
    "psi_javascript": "psi.js",
    "faux_psi_javascript": "faux-psi.js",
}


def sanitize_json(obj: Any) -> str:
    """Serialize *obj* so it is safe to inline inside a ``<script>`` element."""
    return (
        json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
        .replace("<", "\\u003c")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def replace_strings(source: str, replacements: Sequence[tuple[str, str]]) -> str:
    """Replace each ``(search, replacement)`` pair in order, without rescanning.

    The source is split on the first search string, the remaining pairs are
    applied to each piece, and the pieces are joined with the replacement.
    """
    if not replacements:
        return source
    (search, replacement), rest = replacements[0], replacements[1:]
    return replacement.join(replace_strings(part, rest) for part in source.split(search))


@dataclass(frozen=True)
class ReportAssets:
    """Templates and payloads substituted into rendered reports."""

    report_template: str
    report_javascript: str
    report_css: str
    psi_template: str
    psi_javascript: str
    faux_psi_javascript: str

    @classmethod
    def load(cls, assets_dir: Path | None = None) -> ReportAssets:
        """Read assets from *assets_dir*, falling back to the packaged copies.

        A file missing from *assets_dir* is taken from the package; a file
        missing from both is a configuration error.
        """
        contents: dict[str, str] = {}
        for field_name, filename in _ASSET_FILES.items():
            candidates = [PACKAGED_ASSETS_DIR / filename]
            if assets_dir is not None:
                candidates.insert(0, Path(assets_dir) / filename)
            path = next((p for p in candidates if p.is_file()), None)
            if path is None:
                raise ConfigurationError(
                    f"Report asset not found: {filename}",
                    hint=f"Looked in: {', '.join(str(p.parent) for p in candidates)}",
                )
            contents[field_name] = path.read_text(encoding="utf-8")
        return cls(**contents)


def generate_report_html(result: Mapping[str, Any], assets: ReportAssets) -> str:
    """Render the standalone report for *result*."""
    sanitized_javascript = assets.report_javascript.replace("</", "\\u003c/")
    return replace_strings(
        assets.report_template,
        [
            (JSON_TOKEN, sanitize_json(result)),
            (JAVASCRIPT_TOKEN, sanitized_javascript),
            (CSS_TOKEN, assets.report_css),
        ],
    )


def generate_psi_report_html(result: Mapping[str, Any], assets: ReportAssets) -> str:
    """Render *result* narrowed to performance inside the faux PSI host page."""
    sanitized_json = sanitize_json(narrow_to_performance(result))
    psi_javascript = f"\n{assets.psi_javascript};\n{assets.faux_psi_javascript};\n  "
    return replace_strings(
        assets.psi_template,
        [
            (JSON_TOKEN, sanitized_json),
            (JAVASCRIPT_TOKEN, psi_javascript),
            (CSS_TOKEN, assets.report_css),
        ],
    )


class StandaloneReportRenderer:
    """Default :class:`~reportmux.collaborators.base.HtmlRenderer`."""

    def __init__(self, assets: ReportAssets) -> None:
        self.assets = assets

    def render_html(self, result: Result) -> str:
        return generate_report_html(result, self.assets)
