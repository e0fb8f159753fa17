from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from cn_browser.config.model import GlobalConfig
from cn_browser.ui.ids import IDs


def build_navbar(global_config: GlobalConfig) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(global_config.subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    [
                        dbc.Badge("Idle", id=IDs.Control.LOAD_BADGE, color="secondary", className="me-2"),
                        html.Small(id=IDs.Control.DATASET_META, className="text-muted"),
                    ],
                    className="ms-auto d-flex align-items-center",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm cnb-navbar",
    )
