from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State

from cn_browser.core.view_state import ViewState
from cn_browser.ui.callbacks.callbacks_utils import build_gene_options, genes_from_click
from cn_browser.ui.ids import IDs

if TYPE_CHECKING:
    from cn_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_selection_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Live gene / accession search (keeps selected genes)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.GENE_SELECT, "options"),
        Input(IDs.Control.GENE_SELECT, "search_value"),
        Input(IDs.Control.SEARCH_MODE, "value"),
        State(IDs.Control.GENE_SELECT, "value"),
    )
    def update_gene_options(search_value, mode, selected_genes):
        return build_gene_options(
            ctx.store.resolver,
            search_value,
            mode,
            selected_genes,
            limit=ctx.global_config.search_limit,
        )

    # ---------------------------------------------------------
    # Clicking a scatter point highlights its gene
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.GENE_SELECT, "value", allow_duplicate=True),
        Output(IDs.Control.GENE_SELECT, "options", allow_duplicate=True),
        Input(IDs.Control.MAIN_GRAPH, "clickData"),
        State(IDs.Control.GENE_SELECT, "value"),
        prevent_initial_call=True,
    )
    def add_clicked_gene(click_data, selected_genes):
        genes = genes_from_click(click_data, selected_genes)
        if genes is None:
            raise dash.exceptions.PreventUpdate

        logger.info("Gene added from plot click", extra={"gene": genes[-1], "n_genes": len(genes)})
        return genes, [{"label": g, "value": g} for g in genes]

    # ---------------------------------------------------------
    # Cell-line checklist: options follow the loaded data + filter text
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.CELL_LINE_CHECKLIST, "options"),
        Input(IDs.Control.CELL_LINE_SEARCH, "value"),
        Input(IDs.Store.LOAD_STATUS, "data"),
    )
    def update_cell_line_options(query: str | None, _load_status):
        needle = (query or "").lower()
        return [
            {"label": cl, "value": cl}
            for cl in dict.fromkeys(ctx.store.cell_lines)
            if not needle or needle in cl.lower()
        ]

    @app.callback(
        Output(IDs.Control.CELL_LINE_CHECKLIST, "value"),
        Input(IDs.Control.CELL_LINE_ALL_BTN, "n_clicks"),
        Input(IDs.Control.CELL_LINE_CLEAR_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def select_all_or_clear(_all_clicks, _clear_clicks):
        if dash.ctx.triggered_id == IDs.Control.CELL_LINE_ALL_BTN:
            return list(dict.fromkeys(ctx.store.cell_lines))
        return []

    # ---------------------------------------------------------
    # UI controls -> ViewState store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_STATE, "data"),
        Input(IDs.Control.VIEW_SELECT, "value"),
        Input(IDs.Control.CELL_LINE_CHECKLIST, "value"),
        Input(IDs.Control.GENE_SELECT, "value"),
    )
    def update_view_state(view_id, cell_lines, genes):
        state = ViewState(
            view_id=view_id,
            cell_lines=list(cell_lines or []),
            genes=list(genes or []),
        )
        return state.to_dict()
