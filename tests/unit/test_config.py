"""Test configuration loading."""

import pytest
from slide_presenter.config import (
    CONFIG_ENV_VAR,
    PresenterConfig,
    config_from_dict,
    find_config_file,
    load_config,
)
from slide_presenter.exceptions import ConfigError


def test_defaults():
    config = PresenterConfig()

    assert config.heading_marker == "#"
    assert config.keys.next == ["n"]
    assert config.keys.previous == ["p"]
    assert config.keys.quit == ["q"]
    assert config.keys.mode == "n"
    assert config.options == {"cmdheight": 0}
    assert config.source_label is None


def test_option_overrides_are_fresh_records():
    config = PresenterConfig(options={"cmdheight": 0, "cursor": 0})

    overrides = config.option_overrides()
    assert [(o.option_id, o.present_value, o.original_value) for o in overrides] == [
        ("cmdheight", 0, None),
        ("cursor", 0, None),
    ]
    assert config.option_overrides() is not overrides


def test_load_yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "heading_marker: '=='\n"
        "keys:\n"
        "  next: [n, KEY_RIGHT]\n"
        "  quit: esc\n"
        "options:\n"
        "  cmdheight: 0\n"
        "  cursor: 0\n"
        "source_label: Review\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.heading_marker == "=="
    assert config.keys.next == ["n", "KEY_RIGHT"]
    assert config.keys.previous == ["p"]
    assert config.keys.quit == ["esc"]
    assert config.options == {"cmdheight": 0, "cursor": 0}
    assert config.source_label == "Review"


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "absent.yaml") == PresenterConfig()


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == PresenterConfig()


def test_broken_yaml_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("keys: [unclosed\n", encoding="utf-8")

    assert load_config(path) == PresenterConfig()


@pytest.mark.parametrize("data", [
    {"heading_marker": ""},
    {"heading_marker": 3},
    {"keys": ["n"]},
    {"keys": {"next": []}},
    {"keys": {"quit": [1]}},
    {"options": ["cmdheight"]},
])
def test_invalid_values_raise(data):
    with pytest.raises(ConfigError):
        config_from_dict(data)


def test_non_mapping_file_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_unknown_keys_are_ignored(caplog):
    config = config_from_dict({"theme": "dark", "source_label": "x"})

    assert config.source_label == "x"
    assert "theme" in caplog.text


def test_env_var_locates_config(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("source_label: from env\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert find_config_file() == path
    assert load_config().source_label == "from env"


def test_no_config_anywhere(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert find_config_file() is None
    assert load_config() == PresenterConfig()
