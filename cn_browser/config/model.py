from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

DEFAULT_UI_TITLE = "Copy Number Browser"
DEFAULT_FILTER_LIST_URL = "https://curtain-backend.omics.quest"
DEFAULT_SEARCH_LIMIT = 10


@dataclass(frozen=True)
class GlobalConfig:
    """
    Parsed global.json (plus environment overrides).

    - data_file: local path or http(s) URL of the copy-number CSV
    - filter_list_base_url: root of the curated filter-list API
    - search_limit: max suggestions returned per keystroke
    """
    config_root: Path
    data_file: Union[Path, str]
    ui_title: str = DEFAULT_UI_TITLE
    subtitle: str = "Proteomics copy numbers across cell lines"
    filter_list_base_url: str = DEFAULT_FILTER_LIST_URL
    search_limit: int = DEFAULT_SEARCH_LIMIT
