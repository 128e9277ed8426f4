"""Environment flavors: one markup rendering per target environment."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from reportmux.report_html import generate_psi_report_html

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reportmux.collaborators.base import HtmlRenderer
    from reportmux.report_html import ReportAssets

Flavor = Literal["plain", "devtools-embed", "psi-embed"]

#: Build order of flavors for every named Result.
FLAVORS: tuple[Flavor, ...] = ("plain", "devtools-embed", "psi-embed")

FLAVOR_PREFIXES: dict[Flavor, str] = {
    "plain": "",
    "devtools-embed": "⌣.cdt.",
    "psi-embed": "⌣.psi.",
}

ROOT_CLASS_MARKUP = '"lh-root lh-vars"'
DEVTOOLS_ROOT_CLASS_MARKUP = '"lh-root lh-vars lh-devtools"'


def render_flavor(
    result: Mapping[str, Any],
    flavor: Flavor,
    *,
    renderer: HtmlRenderer,
    assets: ReportAssets,
) -> str:
    """Render *result* for *flavor*.

    ``psi-embed`` bypasses *renderer* and fills the PSI host template with
    the performance-only Result instead.
    """
    if flavor == "psi-embed":
        return generate_psi_report_html(result, assets)

    html = renderer.render_html(result)  # type: ignore[arg-type]
    if flavor == "devtools-embed":
        # TODO: emulate the DevTools panel container (overflowing vbox parent, constrained default size).
        html = html.replace(ROOT_CLASS_MARKUP, DEVTOOLS_ROOT_CLASS_MARKUP, 1)
    return html


def variant_path(dist_dir: Path, name: str, flavor: Flavor) -> Path:
    """Return ``<dist_dir>/<flavor prefix><name>/index.html``."""
    return Path(dist_dir) / f"{FLAVOR_PREFIXES[flavor]}{name}" / "index.html"
