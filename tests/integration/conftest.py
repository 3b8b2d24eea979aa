"""Integration test fixtures.

Provides an AppState with default settings, and the environment for
subprocess-based MCP wire tests.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from foldcycle.config import Settings
from foldcycle.state import AppState

_SRC_DIR = Path(__file__).resolve().parents[2] / "src"


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Makes the source tree importable and forces settings that a local
    foldcycle.yaml could otherwise change.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(_SRC_DIR), env.get("PYTHONPATH")]))
    env["FOLDCYCLE__CYCLE__DOCUMENT_KIND"] = "mixed"
    env["FOLDCYCLE__LOGGING__LEVEL"] = "WARNING"
    return env


@pytest.fixture()
def app_state() -> AppState:
    return AppState(settings=Settings())
