import json
from pathlib import Path

import pytest

from cn_browser.config.loader import ENV_DATA_FILE, ENV_FILTER_LIST_URL, load_global_config
from cn_browser.config.model import DEFAULT_FILTER_LIST_URL, DEFAULT_SEARCH_LIMIT, DEFAULT_UI_TITLE
from cn_browser.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv(ENV_DATA_FILE, raising=False)
    monkeypatch.delenv(ENV_FILTER_LIST_URL, raising=False)


def _write_global(root: Path, payload) -> None:
    root.mkdir(parents=True, exist_ok=True)
    text = payload if isinstance(payload, str) else json.dumps(payload)
    (root / "global.json").write_text(text)


def test_load_global_config_resolves_relative_data_file(tmp_path):
    # Arrange: root/global.json pointing at data/cn.csv
    config_root = tmp_path / "config"
    _write_global(
        config_root,
        {
            "ui_title": "Test Browser",
            "data_file": "data/cn.csv",
            "search_limit": 5,
        },
    )

    # Act
    cfg = load_global_config(config_root)

    # Assert
    assert cfg.config_root == config_root
    assert cfg.ui_title == "Test Browser"
    assert cfg.data_file == (config_root / "data" / "cn.csv").resolve()
    assert cfg.search_limit == 5
    assert cfg.filter_list_base_url == DEFAULT_FILTER_LIST_URL


def test_load_global_config_defaults(tmp_path):
    _write_global(tmp_path, {"data_file": "cn.csv"})

    cfg = load_global_config(str(tmp_path))

    assert cfg.ui_title == DEFAULT_UI_TITLE
    assert cfg.search_limit == DEFAULT_SEARCH_LIMIT


def test_load_global_config_keeps_urls_and_absolute_paths(tmp_path):
    _write_global(tmp_path, {"data_file": "https://example.org/cn.csv"})
    assert load_global_config(tmp_path).data_file == "https://example.org/cn.csv"

    absolute = tmp_path / "elsewhere" / "cn.csv"
    _write_global(tmp_path, {"data_file": str(absolute)})
    assert load_global_config(tmp_path).data_file == absolute


def test_environment_overrides_file(tmp_path, monkeypatch):
    _write_global(
        tmp_path,
        {"data_file": "cn.csv", "filter_list_base_url": "https://lists.example.org"},
    )
    monkeypatch.setenv(ENV_DATA_FILE, "https://example.org/other.csv")
    monkeypatch.setenv(ENV_FILTER_LIST_URL, "http://localhost:8000")

    cfg = load_global_config(tmp_path)

    assert cfg.data_file == "https://example.org/other.csv"
    assert cfg.filter_list_base_url == "http://localhost:8000"


def test_missing_global_json_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_global_config(tmp_path)


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        "[1, 2, 3]",
        {"ui_title": "No data file"},
        {"data_file": "cn.csv", "search_limit": "many"},
    ],
)
def test_invalid_global_json_raises_config_error(tmp_path, payload):
    _write_global(tmp_path, payload)

    with pytest.raises(ConfigError):
        load_global_config(tmp_path)
