"""Configuration: Frozen Config for a sample-report build."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import cast

from dotenv import load_dotenv

from reportmux.errors import ConfigurationError

load_dotenv()

#: Names the orchestrator assigns itself; locale variants may not reuse them.
ERROR_VARIANT_NAME = "error"
SINGLE_CATEGORY_VARIANT_NAME = "single-category"

DEFAULT_LOCALES: tuple[tuple[str, str], ...] = (
    ("espanol", "es"),
    ("ɑrabic", "ar"),
    ("xl-accented", "en-XL"),
)

_DIST_DIR_ENV_VAR = "REPORTMUX_DIST_DIR"
_LIGHTHOUSE_BIN_ENV_VAR = "REPORTMUX_LIGHTHOUSE_BIN"
_PATH_SEPARATORS = ("/", "\\")


@dataclass(frozen=True)
class Config:
    """Immutable configuration for one sample-report build.

    Unset paths are auto-resolved from ``REPORTMUX_*`` environment
    variables, then from built-in defaults.

    Example:
        config = Config(dist_dir=Path("dist/now"), use_mock=True)
    """

    #: Auto-resolved from ``REPORTMUX_DIST_DIR`` when *None*.
    dist_dir: Path | None = None
    base_name: str = "english"
    #: Ordered ``(variant name, locale tag)`` pairs.
    locales: tuple[tuple[str, str], ...] = DEFAULT_LOCALES
    include_plugin_category: bool = True
    #: Directory overriding the packaged templates and scripts.
    assets_dir: Path | None = None
    #: Auto-resolved from ``REPORTMUX_LIGHTHOUSE_BIN`` when *None*.
    lighthouse_bin: str | None = None
    audit_timeout_s: float | None = None
    error_url: str = "http://fakeurl.com"
    use_mock: bool = False

    def __post_init__(self) -> None:
        """Auto-resolve paths and validate configuration."""
        if self.dist_dir is None:
            resolved = os.environ.get(_DIST_DIR_ENV_VAR) or "dist/now"
            object.__setattr__(self, "dist_dir", Path(resolved))
        elif not isinstance(self.dist_dir, Path):
            object.__setattr__(self, "dist_dir", Path(self.dist_dir))

        if self.lighthouse_bin is None:
            resolved_bin = os.environ.get(_LIGHTHOUSE_BIN_ENV_VAR) or "lighthouse"
            object.__setattr__(self, "lighthouse_bin", resolved_bin)

        if self.assets_dir is not None and not isinstance(self.assets_dir, Path):
            object.__setattr__(self, "assets_dir", Path(self.assets_dir))

        object.__setattr__(
            self, "locales", tuple((name, tag) for name, tag in self.locales)
        )

        if self.audit_timeout_s is not None and self.audit_timeout_s <= 0:
            raise ConfigurationError(
                f"audit_timeout_s must be > 0, got {self.audit_timeout_s}",
                hint="Pass None to let the audit-only run take as long as it needs.",
            )

        names = [self.base_name, *(name for name, _ in self.locales)]
        for name in names:
            if not name or not name.strip():
                raise ConfigurationError(
                    "Variant names must be non-empty",
                    hint="Each name becomes an output directory under dist_dir.",
                )
            if name in (".", "..") or any(sep in name for sep in _PATH_SEPARATORS):
                raise ConfigurationError(
                    f"Variant name {name!r} is not a single directory name",
                    hint="Names may not contain path separators or be '.' or '..'.",
                )
            if name in (ERROR_VARIANT_NAME, SINGLE_CATEGORY_VARIANT_NAME):
                raise ConfigurationError(
                    f"Variant name {name!r} is reserved",
                    hint=(
                        f"{ERROR_VARIANT_NAME!r} and "
                        f"{SINGLE_CATEGORY_VARIANT_NAME!r} are built automatically."
                    ),
                )
        if len(set(names)) != len(names):
            raise ConfigurationError(
                "Variant names must be unique",
                hint=f"Got {names!r}",
            )

        for _, tag in self.locales:
            if not tag or not tag.strip():
                raise ConfigurationError(
                    "Locale tags must be non-empty",
                    hint="Pass pairs like ('espanol', 'es').",
                )

    @property
    def output_dir(self) -> Path:
        """The resolved ``dist_dir``."""
        return cast("Path", self.dist_dir)

    @property
    def scratch_dir(self) -> Path:
        """Scratch location used by the error-path build."""
        return self.output_dir / ".tmp"

    @property
    def variant_names(self) -> tuple[str, ...]:
        """All variant names in build order."""
        return (
            self.base_name,
            *(name for name, _ in self.locales),
            ERROR_VARIANT_NAME,
            SINGLE_CATEGORY_VARIANT_NAME,
        )
