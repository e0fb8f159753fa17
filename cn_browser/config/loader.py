from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Union

from cn_browser.config.model import (
    DEFAULT_FILTER_LIST_URL,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_UI_TITLE,
    GlobalConfig,
)
from cn_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_DATA_FILE = "CN_BROWSER_DATA_FILE"
ENV_FILTER_LIST_URL = "CN_BROWSER_FILTER_LIST_URL"


def _resolve_data_file(raw: str, root: Path) -> Union[Path, str]:
    """
    URLs are passed through untouched. Absolute paths are used as-is, relative
    paths are resolved against the config root directory.
    """
    if raw.startswith(("http://", "https://")):
        return raw
    path = Path(raw)
    if path.is_absolute():
        return path
    return (root / path).resolve()


def load_global_config(root: Union[Path, str]) -> GlobalConfig:
    """
    Load configuration from a directory containing 'global.json'.

    Recognised keys:

    - data_file: copy-number CSV (path relative to root, absolute path or URL)
    - ui_title / subtitle: navbar text
    - filter_list_base_url: curated filter-list API root
    - search_limit: number of search suggestions

    Environment variables CN_BROWSER_DATA_FILE and CN_BROWSER_FILTER_LIST_URL
    take precedence over the file.

    :raises FileNotFoundError: if global.json does not exist
    :raises ConfigError: if the file is not valid JSON or no data file is configured
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    data_file_raw = os.getenv(ENV_DATA_FILE) or raw.get("data_file")
    if not data_file_raw:
        raise ConfigError(
            f"No data file configured: set 'data_file' in {global_path} or {ENV_DATA_FILE}"
        )

    try:
        search_limit = int(raw.get("search_limit", DEFAULT_SEARCH_LIMIT))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"search_limit must be an integer, got {raw.get('search_limit')!r}") from e

    cfg = GlobalConfig(
        config_root=root,
        data_file=_resolve_data_file(str(data_file_raw), root),
        ui_title=raw.get("ui_title", DEFAULT_UI_TITLE),
        subtitle=raw.get("subtitle", GlobalConfig.subtitle),
        filter_list_base_url=(
            os.getenv(ENV_FILTER_LIST_URL)
            or raw.get("filter_list_base_url")
            or DEFAULT_FILTER_LIST_URL
        ),
        search_limit=search_limit,
    )

    logger.info(
        "Global config loaded",
        extra={"config_root": str(root), "data_file": str(cfg.data_file)},
    )
    return cfg
