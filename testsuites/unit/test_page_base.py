from ui_harness.locators import Locator
from ui_harness.page_base import BasePage

from testsuites.unit.fakes import FakeElement


class MapsPage(BasePage):
    URL_PATH = "/maps"
    PAGE_TITLE = "Fake"

    search_box = Locator.id("searchboxinput")

    def search(self, place: str) -> None:
        self.actions.enter_text(self.search_box, place)


def test_open_navigates_to_full_url(actions, page):
    maps = MapsPage(actions, base_url="https://www.google.com/")

    assert maps.open() is maps
    assert page.visits == ["https://www.google.com/maps"]
    assert maps.current_url() == "https://www.google.com/maps"


def test_base_url_from_environment(actions, monkeypatch):
    monkeypatch.setenv("UI_BASE_URL", "http://app.local:8080")

    assert MapsPage(actions).url == "http://app.local:8080/maps"


def test_navigate_to_path(actions, page):
    MapsPage(actions, base_url="https://www.google.com").navigate_to("/search?q=paris")

    assert page.visits == ["https://www.google.com/search?q=paris"]


def test_is_loaded_checks_title(actions):
    assert MapsPage(actions, base_url="https://x").is_loaded() is True

    class OtherPage(BasePage):
        PAGE_TITLE = "Dashboard"

    assert OtherPage(actions, base_url="https://x").is_loaded() is False


def test_page_methods_use_actions(actions, page):
    field = FakeElement("input")
    page.add(MapsPage.search_box, field)

    MapsPage(actions, base_url="https://x").search("Eiffel Tower")

    assert field.value == "Eiffel Tower"
