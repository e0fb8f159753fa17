from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import dash
from dash import Input, Output

from cn_browser.core.store import LoadStatus
from cn_browser.ui.ids import IDs

if TYPE_CHECKING:
    from cn_browser.ui.context import AppContext

logger = logging.getLogger(__name__)

_BADGE = {
    LoadStatus.IDLE.value: ("Idle", "secondary"),
    LoadStatus.LOADING.value: ("Loading…", "info"),
    LoadStatus.LOADED.value: ("Loaded", "success"),
    LoadStatus.ERROR.value: ("Load failed", "danger"),
}


def register_load_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Poll the data store until the load finishes or fails
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.LOAD_STATUS, "data"),
        Output(IDs.Control.LOAD_POLL, "disabled"),
        Input(IDs.Control.LOAD_POLL, "n_intervals"),
    )
    def poll_load_status(_n_intervals: int | None):
        store = ctx.store
        if store.status is LoadStatus.IDLE:
            store.start_background_load()

        status = store.status
        data: dict[str, Any] = {
            "status": status.value,
            "error": store.error_message,
            "n_records": len(store.dataset),
            "n_cell_lines": len(store.dataset.cell_lines),
        }
        finished = status in (LoadStatus.LOADED, LoadStatus.ERROR)
        return data, finished

    @app.callback(
        Output(IDs.Control.LOAD_BADGE, "children"),
        Output(IDs.Control.LOAD_BADGE, "color"),
        Output(IDs.Control.DATASET_META, "children"),
        Input(IDs.Store.LOAD_STATUS, "data"),
    )
    def update_load_badge(data: dict[str, Any] | None):
        data = data or {}
        label, color = _BADGE.get(data.get("status"), _BADGE[LoadStatus.IDLE.value])
        if data.get("status") == LoadStatus.ERROR.value:
            return label, color, data.get("error") or ""
        if data.get("status") == LoadStatus.LOADED.value:
            meta = f"{data.get('n_records', 0)} proteins · {data.get('n_cell_lines', 0)} cell lines"
            return label, color, meta
        return label, color, ""
