"""Pytest configuration and fixtures.

Provides environment isolation (REPORTMUX_* variables, including any that a
.env file loaded at import), logging configuration, and the shared
Result and collaborator fixtures. Isolation fixtures are autouse.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import pytest

from reportmux.config import Config
from tests.helpers import (
    FakeAuditRunner,
    FakeCategoryRenderer,
    FakeTranslator,
    RecordingFeatures,
    make_lhr,
)

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_reportmux_env(request, monkeypatch):
    """Clear REPORTMUX_* env vars so Config defaults are predictable.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("REPORTMUX_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# =============================================================================
# Results and Collaborators
# =============================================================================


@pytest.fixture
def lhr() -> dict[str, Any]:
    """A fresh, complete Result."""
    return make_lhr()


@pytest.fixture
def translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture
def audit_runner() -> FakeAuditRunner:
    return FakeAuditRunner()


@pytest.fixture
def category_renderer() -> FakeCategoryRenderer:
    return FakeCategoryRenderer()


@pytest.fixture
def features() -> RecordingFeatures:
    return RecordingFeatures()


@pytest.fixture
def config(tmp_path) -> Config:
    """Config writing under a per-test dist directory."""
    return Config(dist_dir=tmp_path / "dist")
