from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from cn_browser.core.view_state import ViewState
from cn_browser.ui.ids import IDs
from cn_browser.ui.layout.build_batch_modal import build_batch_modal
from cn_browser.ui.layout.build_navbar import build_navbar
from cn_browser.ui.layout.build_plot_panel import build_plot_panel
from cn_browser.ui.layout.build_selection_panel import build_selection_panel

if TYPE_CHECKING:
    from cn_browser.ui.context import AppContext


def build_layout(ctx: AppContext) -> dbc.Container:
    view_classes = ctx.registry.all_classes()
    default_state = ViewState(view_id=view_classes[0].id if view_classes else None)

    return dbc.Container(
        fluid=True,
        className="cnb-root",
        children=[
            build_navbar(ctx.global_config),

            # App-level stores
            dcc.Store(id=IDs.Store.VIEW_STATE, data=default_state.to_dict()),
            dcc.Store(id=IDs.Store.LOAD_STATUS),
            dcc.Store(id=IDs.Store.FILTER_LISTS, data=[]),
            dcc.Store(id=IDs.Store.BATCH_RESULT),
            dcc.Interval(id=IDs.Control.LOAD_POLL, interval=500, n_intervals=0),

            dbc.Row(
                [
                    dbc.Col(build_selection_panel(ctx.registry), md=3, className="mt-3"),
                    dbc.Col(build_plot_panel(), md=9, className="mt-3"),
                ],
                className="gx-3",
            ),
            build_batch_modal(),
        ],
    )
