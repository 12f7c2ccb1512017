import re
from types import SimpleNamespace

import pytest

from ui_harness.pytest_plugin import capture_outcome_screenshot, execution_unit_id
from ui_harness.screenshots import ScreenshotCapture

from testsuites.unit.fakes import PNG_BYTES, make_session


@pytest.fixture
def capture(registry, tmp_path):
    return ScreenshotCapture(registry, directory=tmp_path / "shots")


def test_take_writes_png(capture, registry, page, tmp_path):
    registry.set("w1", make_session(page))

    path = capture.take("w1", "search results: Eiffel Tower")

    assert path.parent == tmp_path / "shots"
    assert re.fullmatch(r"search_results__Eiffel_Tower_\d{8}_\d{6}\.png", path.name)
    assert path.read_bytes() == PNG_BYTES


def test_take_failure_prefix(capture, registry, page):
    registry.set("w1", make_session(page))

    path = capture.take_failure("w1", "test_search[chrome]")

    assert path.name.startswith("FAILED_test_search_chrome__")


def test_no_session_returns_none(capture, tmp_path):
    assert capture.take("ghost", "anything") is None
    assert not (tmp_path / "shots").exists()


def test_capture_error_returns_none(capture, registry, page):
    page.screenshot_error = RuntimeError("Target page, context or browser has been closed")
    registry.set("w1", make_session(page))

    assert capture.take("w1", "broken") is None


# ================================================================================
# Outcome screenshots taken by the pytest plugin
# ================================================================================

def _item(outcome: str):
    report = SimpleNamespace(failed=outcome == "failed", passed=outcome == "passed")
    return SimpleNamespace(name="test_search", rep_call=report)


def test_failed_test_gets_screenshot_attached(capture, registry, page, reporter, default_config):
    registry.set("w1", make_session(page))

    capture_outcome_screenshot(_item("failed"), "w1", default_config, reporter, capture)

    [attached] = reporter.of("screenshot")
    assert "FAILED_test_search_" in attached


def test_passed_test_screenshot_is_opt_in(capture, registry, page, reporter, write_config):
    registry.set("w1", make_session(page))

    capture_outcome_screenshot(_item("passed"), "w1", write_config(""), reporter, capture)
    assert reporter.of("screenshot") == []

    config = write_config("report.screenshots.on.pass: true\n")
    capture_outcome_screenshot(_item("passed"), "w1", config, reporter, capture)
    [attached] = reporter.of("screenshot")
    assert "test_search_PASSED_" in attached


def test_failure_screenshot_can_be_disabled(capture, registry, page, reporter, write_config):
    registry.set("w1", make_session(page))
    config = write_config("screenshot.on.failure: false\n")

    capture_outcome_screenshot(_item("failed"), "w1", config, reporter, capture)

    assert reporter.events == []


def test_no_call_report_means_no_screenshot(capture, reporter, default_config):
    item = SimpleNamespace(name="test_search")

    capture_outcome_screenshot(item, "w1", default_config, reporter, capture)

    assert reporter.events == []


def test_execution_unit_id(monkeypatch):
    monkeypatch.setenv("PYTEST_XDIST_WORKER", "gw3")
    assert execution_unit_id("tests/test_a.py::test_x") == "gw3::tests/test_a.py::test_x"

    monkeypatch.delenv("PYTEST_XDIST_WORKER")
    assert execution_unit_id("tests/test_a.py::test_x") == "master::tests/test_a.py::test_x"
