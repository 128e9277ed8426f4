"""Phase 1: Build planning.

Enumerates every (named Result, flavor) pair in a fixed order and resolves
each to its output path. Nothing is rendered here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from reportmux.config import ERROR_VARIANT_NAME, SINGLE_CATEGORY_VARIANT_NAME
from reportmux.locales import expand_locales
from reportmux.narrow import narrow_to_performance
from reportmux.variants import FLAVORS, variant_path

if TYPE_CHECKING:
    from pathlib import Path

    from reportmux.collaborators.base import Translator
    from reportmux.config import Config
    from reportmux.lhr import Result
    from reportmux.variants import Flavor


@dataclass(frozen=True)
class NamedResult:
    """A Result and the name its outputs are written under."""

    name: str
    result: Result


@dataclass(frozen=True)
class Variant:
    """One output file to produce."""

    name: str
    flavor: Flavor
    result: Result
    path: Path


@dataclass(frozen=True)
class BuildPlan:
    """Ordered variants for one build."""

    dist_dir: Path
    variants: tuple[Variant, ...]

    @property
    def n_files(self) -> int:
        return len(self.variants)


def collect_named_results(
    base: Result,
    error_lhr: Result,
    *,
    translator: Translator,
    config: Config,
) -> tuple[NamedResult, ...]:
    """Return base, each locale variant, error, and single-category, in order."""
    locale_variants = expand_locales(base, config.locales, translator)
    return (
        NamedResult(config.base_name, base),
        *(NamedResult(v.name, v.result) for v in locale_variants),
        NamedResult(ERROR_VARIANT_NAME, error_lhr),
        NamedResult(SINGLE_CATEGORY_VARIANT_NAME, narrow_to_performance(base)),
    )


def build_plan(named_results: tuple[NamedResult, ...], dist_dir: Path) -> BuildPlan:
    """Cross *named_results* with every flavor."""
    variants = tuple(
        Variant(
            name=named.name,
            flavor=flavor,
            result=named.result,
            path=variant_path(dist_dir, named.name, flavor),
        )
        for named in named_results
        for flavor in FLAVORS
    )
    return BuildPlan(dist_dir=dist_dir, variants=variants)
