import pytest

from ui_harness.config_loader import ConfigProvider
from ui_harness.exceptions import ConfigurationError


def test_defaults_when_file_missing(default_config):
    assert default_config.get("browser") == "chrome"
    assert default_config.get_bool("headless") is False
    assert default_config.get_int("browser.implicit.wait") == 10
    assert default_config.get_int("browser.explicit.wait") == 20
    assert default_config.get_int("browser.page.load.timeout") == 30
    assert default_config.get("grid.url", "http://localhost:4444/wd/hub") == "http://localhost:4444/wd/hub"


def test_flat_and_nested_keys(write_config):
    config = write_config(
        "browser: firefox\n"
        "browser.explicit.wait: 5\n"
        "grid:\n"
        "  url: http://grid.local:4444/wd/hub\n"
    )
    assert config.get("browser") == "firefox"
    assert config.get_int("browser.explicit.wait") == 5
    assert config.get("grid.url") == "http://grid.local:4444/wd/hub"
    # Untouched keys still fall back to defaults
    assert config.get_int("browser.implicit.wait") == 10


def test_env_var_overrides_file(write_config, monkeypatch):
    config = write_config("browser.explicit.wait: 5\nheadless: false\n")
    monkeypatch.setenv("BROWSER_EXPLICIT_WAIT", "7")
    monkeypatch.setenv("HEADLESS", "yes")

    assert config.get_int("browser.explicit.wait") == 7
    assert config.get_bool("headless") is True


def test_get_env_prefers_environment_qualified_key(write_config):
    text = "base.url: https://prod.example.com\nstaging.base.url: https://staging.example.com\n"

    assert write_config(text, environment="staging").get_env("base.url") == "https://staging.example.com"
    assert write_config(text, environment="qa").get_env("base.url") == "https://prod.example.com"


def test_environment_from_env_var(tmp_path, monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "staging")
    config = ConfigProvider(config_path=tmp_path / "missing.yaml")
    assert config.environment == "staging"

    monkeypatch.delenv("ENVIRONMENT")
    assert ConfigProvider(config_path=tmp_path / "missing.yaml").environment == "dev"


def test_get_int_errors(write_config):
    config = write_config("browser.explicit.wait: soon\n")

    with pytest.raises(ConfigurationError):
        config.get_int("browser.explicit.wait")
    with pytest.raises(ConfigurationError):
        config.get_int("no.such.key")
    assert config.get_int("no.such.key", 3) == 3


def test_get_bool_parsing(write_config):
    config = write_config("a: 'on'\nb: 'false'\nc: 1\n")
    assert config.get_bool("a") is True
    assert config.get_bool("b") is False
    assert config.get_bool("c") is True
    assert config.get_bool("missing") is False


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("browser: [chrome\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigProvider(config_path=path)


def test_reload_updates_values(write_config, tmp_path):
    config = write_config("browser.explicit.wait: 5\n")
    assert config.get_int("browser.explicit.wait") == 5

    (tmp_path / "config.yaml").write_text("browser.explicit.wait: 15\n", encoding="utf-8")
    config.reload()
    assert config.get_int("browser.explicit.wait") == 15


def test_harness_config_env_var_selects_file(tmp_path, monkeypatch):
    path = tmp_path / "other.yaml"
    path.write_text("browser: edge\n", encoding="utf-8")
    monkeypatch.setenv("HARNESS_CONFIG", str(path))

    assert ConfigProvider().get("browser") == "edge"
