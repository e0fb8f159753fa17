from __future__ import annotations

__all__ = ["IDs", "filter_list_item_id"]


class IDs:
    class Store:
        VIEW_STATE = "view-state"
        LOAD_STATUS = "load-status"
        FILTER_LISTS = "filter-lists"
        BATCH_RESULT = "batch-result"

    class Control:
        # Loading
        LOAD_POLL = "load-poll"
        LOAD_BADGE = "load-badge"
        DATASET_META = "dataset-meta"

        # Core selectors
        VIEW_SELECT = "view-select"
        SEARCH_MODE = "search-mode"
        GENE_SELECT = "gene-select"

        CELL_LINE_SEARCH = "cell-line-search"
        CELL_LINE_CHECKLIST = "cell-line-checklist"
        CELL_LINE_ALL_BTN = "cell-line-all-btn"
        CELL_LINE_CLEAR_BTN = "cell-line-clear-btn"

        # Graph + downloads
        MAIN_GRAPH = "main-graph"
        DETAIL_TABLE = "detail-table"
        DOWNLOAD_DATA = "download-data"
        DOWNLOAD_DATA_BTN = "download-data-btn"
        DOWNLOAD_TABLE = "download-table"
        DOWNLOAD_TABLE_BTN = "download-table-btn"

    class Batch:
        OPEN_BTN = "batch-open-btn"
        CLOSE_BTN = "batch-close-btn"
        MODAL = "batch-modal"
        MODE = "batch-mode"
        TABS = "batch-tabs"

        CATEGORY_SELECT = "batch-category-select"
        NAME_SEARCH = "batch-name-search"
        SEARCH_BTN = "batch-search-btn"
        LISTS = "batch-lists"
        ERROR = "batch-error"

        CUSTOM_TEXT = "batch-custom-text"
        APPLY_CUSTOM_BTN = "batch-apply-custom-btn"
        REPORT = "batch-report"


FILTER_LIST_ITEM = "filter-list-item"


def filter_list_item_id(list_id: int) -> dict:
    """Pattern-matching id for one curated list entry in the batch modal."""
    return {"type": FILTER_LIST_ITEM, "index": list_id}
