"""
Fixtures for harness unit tests.
"""

from pathlib import Path

import pytest

from ui_harness.config_loader import ConfigProvider
from ui_harness.element_actions import ElementActions
from ui_harness.session import SessionRegistry

from testsuites.unit.fakes import FakePage, FakePlaywrightFactory, RecordingReporter, make_session


# Environment variables the ConfigProvider would pick up from the host
HARNESS_ENV_VARS = [
    "BROWSER",
    "HEADLESS",
    "ENVIRONMENT",
    "ENV",
    "HARNESS_CONFIG",
    "GRID_URL",
    "REMOTE_BROWSER",
    "BROWSER_IMPLICIT_WAIT",
    "BROWSER_EXPLICIT_WAIT",
    "BROWSER_PAGE_LOAD_TIMEOUT",
    "BASE_URL",
    "SCREENSHOT_ON_FAILURE",
    "REPORT_SCREENSHOTS_ON_PASS",
    "LOGGING_LEVEL",
    "LOGGING_FILE",
]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in HARNESS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a YAML config file and return a ConfigProvider reading it."""

    def _write(text: str, environment: str = None) -> ConfigProvider:
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return ConfigProvider(config_path=path, environment=environment)

    return _write


@pytest.fixture
def default_config(tmp_path: Path) -> ConfigProvider:
    """Built-in defaults only."""
    return ConfigProvider(config_path=tmp_path / "missing.yaml")


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def actions(registry: SessionRegistry, reporter: RecordingReporter, page: FakePage) -> ElementActions:
    """ElementActions for unit 'w1' with an active fake session (0.2s explicit wait)."""
    registry.set("w1", make_session(page, explicit_wait=0.2))
    return ElementActions(registry, "w1", reporter)


@pytest.fixture
def playwright_factory() -> FakePlaywrightFactory:
    return FakePlaywrightFactory()
