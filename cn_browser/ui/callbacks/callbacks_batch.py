from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any, List

import dash
from dash import ALL, Input, Output, State

from cn_browser.core.exceptions import FilterListError
from cn_browser.services.filter_lists import FilterList, filter_lists_matching, parse_filter_list_data
from cn_browser.ui.callbacks.callbacks_utils import apply_identifiers, format_batch_report
from cn_browser.ui.ids import FILTER_LIST_ITEM, IDs
from cn_browser.ui.layout.build_batch_modal import build_filter_list_items

if TYPE_CHECKING:
    from cn_browser.ui.context import AppContext

logger = logging.getLogger(__name__)

LIST_PAGE_SIZE = 10


def register_batch_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Open / close the modal (closes after a successful apply)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Batch.MODAL, "is_open"),
        Output(IDs.Batch.MODE, "value"),
        Input(IDs.Batch.OPEN_BTN, "n_clicks"),
        Input(IDs.Batch.CLOSE_BTN, "n_clicks"),
        Input(IDs.Store.BATCH_RESULT, "data"),
        State(IDs.Control.SEARCH_MODE, "value"),
        prevent_initial_call=True,
    )
    def toggle_batch_modal(_open_clicks, _close_clicks, _result, search_mode):
        if dash.ctx.triggered_id == IDs.Batch.OPEN_BTN:
            return True, search_mode
        return False, dash.no_update

    # ---------------------------------------------------------
    # Fetch curated lists (and categories, once) from the remote service
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.FILTER_LISTS, "data"),
        Output(IDs.Batch.LISTS, "children"),
        Output(IDs.Batch.CATEGORY_SELECT, "options"),
        Output(IDs.Batch.ERROR, "children"),
        Output(IDs.Batch.ERROR, "is_open"),
        Input(IDs.Batch.MODAL, "is_open"),
        Input(IDs.Batch.CATEGORY_SELECT, "value"),
        Input(IDs.Batch.SEARCH_BTN, "n_clicks"),
        State(IDs.Batch.NAME_SEARCH, "value"),
        State(IDs.Batch.CATEGORY_SELECT, "options"),
        prevent_initial_call=True,
    )
    def load_filter_lists(is_open, category, _search_clicks, name, category_options):
        if not is_open:
            raise dash.exceptions.PreventUpdate

        client = ctx.filter_client

        if not category_options:
            try:
                categories = client.get_all_categories()
            except FilterListError:
                categories = []
            category_options = [{"label": c, "value": c} for c in categories]

        try:
            lists = client.get_filter_lists(name=name or None, category=category or None, limit=LIST_PAGE_SIZE)
        except FilterListError:
            return [], build_filter_list_items([]), category_options, "Failed to load filter lists", True

        lists = filter_lists_matching(lists, category=category, query=name)
        return [asdict(fl) for fl in lists], build_filter_list_items(lists), category_options, None, False

    # ---------------------------------------------------------
    # Apply a curated list or the pasted custom list
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.GENE_SELECT, "value"),
        Output(IDs.Control.GENE_SELECT, "options", allow_duplicate=True),
        Output(IDs.Store.BATCH_RESULT, "data"),
        Output(IDs.Batch.REPORT, "children"),
        Input({"type": FILTER_LIST_ITEM, "index": ALL}, "n_clicks"),
        Input(IDs.Batch.APPLY_CUSTOM_BTN, "n_clicks"),
        State(IDs.Batch.CUSTOM_TEXT, "value"),
        State(IDs.Batch.MODE, "value"),
        State(IDs.Control.GENE_SELECT, "value"),
        State(IDs.Store.FILTER_LISTS, "data"),
        prevent_initial_call=True,
    )
    def apply_batch_selection(_item_clicks, _custom_clicks, custom_text, mode, selected, lists_data):
        triggered = dash.ctx.triggered_id
        # list items re-render with n_clicks=0, which also fires this callback
        if triggered is None or not dash.ctx.triggered[0].get("value"):
            raise dash.exceptions.PreventUpdate

        if triggered == IDs.Batch.APPLY_CUSTOM_BTN:
            identifiers: List[str] = parse_filter_list_data(custom_text)
            source = "Custom list"
        else:
            fl = next(
                (FilterList(**raw) for raw in (lists_data or []) if raw.get("id") == triggered["index"]),
                None,
            )
            if fl is None:
                raise dash.exceptions.PreventUpdate
            identifiers = fl.identifiers
            source = fl.name

        if not identifiers:
            raise dash.exceptions.PreventUpdate

        genes, result = apply_identifiers(ctx.store.resolver, identifiers, mode, selected)
        logger.info(
            "Batch selection applied",
            extra={
                "source": source,
                "mode": mode,
                "n_identifiers": len(identifiers),
                "n_matched": len(result.matched),
                "n_unmatched": len(result.unmatched),
            },
        )

        options = [{"label": g, "value": g} for g in genes]
        payload: dict[str, Any] = {"source": source, "matched": result.matched, "unmatched": result.unmatched}
        return genes, options, payload, format_batch_report(result, source)
