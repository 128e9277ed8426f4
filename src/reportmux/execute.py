"""Phase 2: Plan execution: render each variant and write it to disk."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import TYPE_CHECKING

from reportmux.variants import render_flavor

if TYPE_CHECKING:
    from pathlib import Path

    from reportmux.collaborators.base import HtmlRenderer
    from reportmux.plan import BuildPlan
    from reportmux.report_html import ReportAssets
    from reportmux.variants import Flavor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WrittenReport:
    name: str
    flavor: Flavor
    path: Path
    n_bytes: int


@dataclass
class BuildTrace:
    """Files written by a build, in plan order."""

    written: list[WrittenReport] = field(default_factory=list)
    duration_s: float = 0.0

    @property
    def paths(self) -> list[Path]:
        return [w.path for w in self.written]


def execute_plan(
    plan: BuildPlan, *, renderer: HtmlRenderer, assets: ReportAssets
) -> BuildTrace:
    """Render and write every planned variant.

    Existing files are overwritten. The first render or write failure aborts
    the build; files already written are left in place.
    """
    start_time = time.perf_counter()
    trace = BuildTrace()
    logger.debug("Writing %d file(s) under %s", plan.n_files, plan.dist_dir)

    for variant in plan.variants:
        html = render_flavor(
            variant.result, variant.flavor, renderer=renderer, assets=assets
        )
        data = html.encode("utf-8")
        variant.path.parent.mkdir(parents=True, exist_ok=True)
        variant.path.write_bytes(data)
        logger.info("✅ %s written.", variant.path)
        trace.written.append(
            WrittenReport(
                name=variant.name,
                flavor=variant.flavor,
                path=variant.path,
                n_bytes=len(data),
            )
        )

    trace.duration_s = time.perf_counter() - start_time
    return trace
