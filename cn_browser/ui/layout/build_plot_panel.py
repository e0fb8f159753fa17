from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from cn_browser.ui.ids import IDs


def build_plot_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(html.Strong("Plot"), className="p-2"),
            dbc.CardBody(
                [
                    dcc.Loading(
                        id="main-graph-loading",
                        type="default",
                        children=dcc.Graph(
                            id=IDs.Control.MAIN_GRAPH,
                            style={"minHeight": "600px"},
                            config={
                                "responsive": True,
                                "displayModeBar": True,
                                "modeBarButtonsToRemove": ["lasso2d", "select2d"],
                            },
                        ),
                    ),
                    html.Div(id=IDs.Control.DETAIL_TABLE, className="mt-3"),
                    html.Div(
                        [
                            dbc.Button(
                                "Download data (CSV)",
                                id=IDs.Control.DOWNLOAD_DATA_BTN,
                                color="secondary",
                                size="sm",
                                className="mt-2 ms-auto me-2",
                            ),
                            dcc.Download(id=IDs.Control.DOWNLOAD_DATA),
                            dbc.Button(
                                "Download table (CSV)",
                                id=IDs.Control.DOWNLOAD_TABLE_BTN,
                                color="secondary",
                                outline=True,
                                size="sm",
                                className="mt-2 me-2",
                            ),
                            dcc.Download(id=IDs.Control.DOWNLOAD_TABLE),
                        ],
                        className="d-flex justify-content-end align-items-center",
                    ),
                ]
            ),
        ],
        className="cnb-maincard",
    )
