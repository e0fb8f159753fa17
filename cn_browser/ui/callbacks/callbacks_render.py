from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import dash
import pandas as pd
from dash import Input, Output, State, dcc

from cn_browser.core.store import LoadStatus
from cn_browser.core.view_state import ViewState
from cn_browser.ui.callbacks.callbacks_utils import (
    build_detail_table,
    error_figure,
    message_figure,
    table_export_frame,
)
from cn_browser.ui.ids import IDs
from cn_browser.views import RankScatterView

if TYPE_CHECKING:
    from cn_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_render_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Main figure: ViewState -> figure (+ detail table for the scatter)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.MAIN_GRAPH, "figure"),
        Output(IDs.Control.DETAIL_TABLE, "children"),
        Input(IDs.Store.VIEW_STATE, "data"),
        Input(IDs.Store.LOAD_STATUS, "data"),
    )
    def update_main_graph(vs_data: dict[str, Any] | None, _load_status):
        store = ctx.store

        if store.status is LoadStatus.ERROR:
            return message_figure(store.error_message or "Failed to load data", "Check the logs for details."), None
        if store.dataset.is_empty:
            if store.status is LoadStatus.LOADED:
                return message_figure("The copy-number table has no measured proteins."), None
            return message_figure("Loading copy-number data…"), None
        if vs_data is None:
            return message_figure("No view selected."), None

        try:
            state = ViewState.from_dict(vs_data)
        except Exception:
            logger.exception("Invalid view state in main graph callback: %r", vs_data)
            return error_figure("Internal error: invalid view state."), None

        try:
            view = ctx.registry.create(state.view_id, store.dataset)

            logger.info(
                "render_start",
                extra={
                    "view_id": state.view_id,
                    "n_cell_lines": len(state.cell_lines),
                    "n_genes": len(state.genes),
                },
            )

            data = view.timed_compute(state)
            fig = view.render_figure(data, state)

            table = None
            if view.id == RankScatterView.id:
                table = build_detail_table(store.dataset, state)
            return fig, table

        except Exception:
            logger.exception("Error in update_main_graph", extra={"view_state": vs_data})
            return error_figure(
                "The app hit an unexpected error. "
                "If this keeps happening, grab the logs and open an issue."
            ), None

    # ---------------------------------------------------------
    # Download CSV of current view data
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_DATA, "data"),
        Input(IDs.Control.DOWNLOAD_DATA_BTN, "n_clicks"),
        State(IDs.Store.VIEW_STATE, "data"),
        prevent_initial_call=True,
    )
    def download_view_data(_n_clicks, vs_data):
        store = ctx.store
        if not vs_data or store.dataset.is_empty:
            raise dash.exceptions.PreventUpdate

        state = ViewState.from_dict(vs_data)
        view = ctx.registry.create(state.view_id, store.dataset)
        data = view.compute_data(state)
        if not isinstance(data, pd.DataFrame) or data.empty:
            raise dash.exceptions.PreventUpdate

        return dcc.send_data_frame(data.to_csv, f"{state.view_id}.csv", index=False)

    # ---------------------------------------------------------
    # Download the copy-number table for the selected cell lines
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_TABLE, "data"),
        Input(IDs.Control.DOWNLOAD_TABLE_BTN, "n_clicks"),
        State(IDs.Store.VIEW_STATE, "data"),
        prevent_initial_call=True,
    )
    def download_table(_n_clicks, vs_data):
        store = ctx.store
        if store.dataset.is_empty:
            raise dash.exceptions.PreventUpdate

        state = ViewState.from_dict(vs_data or {})
        data = table_export_frame(store.dataset, state.cell_lines)
        logger.info("Table export", extra={"n_rows": len(data), "n_columns": len(data.columns)})
        return dcc.send_data_frame(data.to_csv, "copy_numbers.csv", index=False)
