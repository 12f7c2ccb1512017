"""
Repository-level pytest configuration.

Why this exists:
  - Load the ui_harness plugin (session fixtures, screenshot hooks)
  - Provide safe defaults for local runs (no secrets embedded)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


pytest_plugins = ["ui_harness.pytest_plugin"]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _local_env_defaults() -> Generator[None, None, None]:
    """
    Set local defaults if not already provided by the user/CI.
    """
    defaults = {
        "UI_BASE_URL": "http://localhost:3000",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
