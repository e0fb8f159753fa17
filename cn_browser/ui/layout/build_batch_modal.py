from __future__ import annotations

from typing import Iterable, List

import dash_bootstrap_components as dbc
from dash import dcc, html

from cn_browser.services.filter_lists import FilterList
from cn_browser.ui.ids import IDs, filter_list_item_id
from cn_browser.ui.layout.build_selection_panel import SEARCH_MODE_OPTIONS


def build_filter_list_items(lists: Iterable[FilterList]) -> List:
    items = [
        dbc.ListGroupItem(
            [
                html.Div(fl.name, className="fw-semibold"),
                html.Small(
                    f"{fl.category or 'Uncategorised'} · {len(fl.identifiers)} identifiers",
                    className="text-muted",
                ),
            ],
            id=filter_list_item_id(fl.id),
            action=True,
            n_clicks=0,
        )
        for fl in lists
    ]
    if not items:
        return [dbc.ListGroupItem("No lists found", disabled=True)]
    return items


def build_batch_modal() -> dbc.Modal:
    lists_tab = dbc.Tab(
        label="Curated lists",
        tab_id="lists",
        children=[
            dbc.Row(
                [
                    dbc.Col(
                        dcc.Dropdown(
                            id=IDs.Batch.CATEGORY_SELECT,
                            options=[],
                            placeholder="All categories",
                        ),
                        md=5,
                    ),
                    dbc.Col(
                        dbc.Input(id=IDs.Batch.NAME_SEARCH, placeholder="Search list names", type="text"),
                        md=5,
                    ),
                    dbc.Col(dbc.Button("Search", id=IDs.Batch.SEARCH_BTN, color="primary"), md=2),
                ],
                className="g-2 my-2",
            ),
            dbc.Alert(id=IDs.Batch.ERROR, color="danger", is_open=False),
            dcc.Loading(dbc.ListGroup(id=IDs.Batch.LISTS, className="cnb-filter-lists")),
        ],
    )

    custom_tab = dbc.Tab(
        label="Custom list",
        tab_id="custom",
        children=[
            dbc.Textarea(
                id=IDs.Batch.CUSTOM_TEXT,
                placeholder="One identifier per line, or separated by commas / semicolons",
                style={"height": "200px"},
                className="my-2",
            ),
            dbc.Button("Apply", id=IDs.Batch.APPLY_CUSTOM_BTN, color="primary"),
        ],
    )

    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Batch select")),
            dbc.ModalBody(
                [
                    dbc.RadioItems(
                        id=IDs.Batch.MODE,
                        options=SEARCH_MODE_OPTIONS,
                        value=SEARCH_MODE_OPTIONS[0]["value"],
                        inline=True,
                        className="mb-2",
                    ),
                    dbc.Tabs([lists_tab, custom_tab], id=IDs.Batch.TABS, active_tab="lists"),
                ]
            ),
            dbc.ModalFooter(dbc.Button("Close", id=IDs.Batch.CLOSE_BTN, color="secondary")),
        ],
        id=IDs.Batch.MODAL,
        size="lg",
        is_open=False,
    )
