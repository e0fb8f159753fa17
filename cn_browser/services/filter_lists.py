from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import requests

from cn_browser.core.exceptions import FilterListError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://curtain-backend.omics.quest"
UNLIMITED = 100000000

_ITEM_SEPARATORS = re.compile(r"[;,]")


@dataclass(frozen=True)
class FilterList:
    """
    A curated identifier list from the remote filter-list service.
    `data` is the raw list text (see parse_filter_list_data).
    """
    id: int
    name: str
    data: str
    default: bool = False
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> FilterList:
        return cls(
            id=int(raw["id"]),
            name=str(raw.get("name", "")),
            data=str(raw.get("data") or ""),
            default=bool(raw.get("default", False)),
            category=raw.get("category"),
        )

    @property
    def identifiers(self) -> List[str]:
        return parse_filter_list_data(self.data)


def parse_filter_list_data(data: Optional[str]) -> List[str]:
    """
    Split pasted or fetched list text into identifiers.

    Lines are split on newlines, then each line on ',' and ';'. Items are
    trimmed and empty ones dropped. Never fails; blank input gives [].

        "GENE1\\nGENE2,GENE3;GENE4\\n\\n" -> ["GENE1", "GENE2", "GENE3", "GENE4"]
    """
    if not data:
        return []
    items: List[str] = []
    for line in data.replace("\r", "").split("\n"):
        for item in _ITEM_SEPARATORS.split(line):
            item = item.strip()
            if item:
                items.append(item)
    return items


def filter_lists_matching(
    lists: Iterable[FilterList],
    category: Optional[str] = None,
    query: Optional[str] = None,
) -> List[FilterList]:
    """Local category / case-insensitive name filter over fetched lists."""
    needle = (query or "").lower()
    return [
        fl for fl in lists
        if (not category or fl.category == category)
        and (not needle or needle in fl.name.lower())
    ]


class FilterListClient:
    """
    Thin client for the curated filter-list API.

    Endpoints:
    - GET /data_filter_list/                      -> paginated {"results": [...]}
    - GET /data_filter_list/<id>/                 -> single list
    - GET /data_filter_list/get_all_category/     -> list of category names
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Filter list request failed", extra={"url": url, "error": str(e)})
            raise FilterListError(f"Request to {url} failed: {e}") from e

    def get_filter_lists(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        name_exact: Optional[str] = None,
        category_exact: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[FilterList]:
        params: Dict[str, str] = {}
        if name:
            params["name"] = name
        if category:
            params["category"] = category
        if name_exact:
            params["name_exact"] = name_exact
        if category_exact:
            params["category_exact"] = category_exact
        params["limit"] = str(limit if limit else UNLIMITED)

        payload = self._get("/data_filter_list/", params=params)
        if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
            raise FilterListError("Unexpected filter list response: missing 'results'")

        lists = [FilterList.from_dict(raw) for raw in payload["results"]]
        logger.info("Fetched filter lists", extra={"n_lists": len(lists), "params": params})
        return lists

    def get_filter_list(self, list_id: int) -> FilterList:
        return FilterList.from_dict(self._get(f"/data_filter_list/{int(list_id)}/"))

    def get_all_categories(self) -> List[str]:
        payload = self._get("/data_filter_list/get_all_category/")
        if not isinstance(payload, list):
            raise FilterListError("Unexpected category response: expected a list")
        return [str(c) for c in payload]
