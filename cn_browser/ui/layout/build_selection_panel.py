from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from cn_browser.core.resolver import SearchMode
from cn_browser.core.view_registry import ViewRegistry
from cn_browser.ui.ids import IDs

SEARCH_MODE_OPTIONS = [
    {"label": "Gene name", "value": SearchMode.GENE.value},
    {"label": "Accession ID", "value": SearchMode.ACCESSION.value},
]


def build_selection_panel(registry: ViewRegistry) -> dbc.Card:
    view_options = [{"label": cls.label, "value": cls.id} for cls in registry.all_classes()]
    default_view = view_options[0]["value"] if view_options else None

    return dbc.Card(
        [
            dbc.CardHeader("Selection", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Label("View", className="form-label"),
                    dbc.RadioItems(
                        id=IDs.Control.VIEW_SELECT,
                        options=view_options,
                        value=default_view,
                        className="mb-3",
                    ),
                    html.Hr(),

                    html.Label("Search by", className="form-label"),
                    dbc.RadioItems(
                        id=IDs.Control.SEARCH_MODE,
                        options=SEARCH_MODE_OPTIONS,
                        value=SearchMode.GENE.value,
                        inline=True,
                        className="mb-2",
                    ),
                    dcc.Dropdown(
                        id=IDs.Control.GENE_SELECT,
                        options=[],
                        value=[],
                        multi=True,
                        searchable=True,
                        placeholder="Type at least 2 characters",
                        className="mb-2",
                    ),
                    dbc.Button(
                        "Batch select",
                        id=IDs.Batch.OPEN_BTN,
                        color="secondary",
                        size="sm",
                        className="mb-2",
                    ),
                    html.Div(id=IDs.Batch.REPORT, className="small mb-3"),
                    html.Hr(),

                    html.Label("Cell lines", className="form-label"),
                    dbc.Input(
                        id=IDs.Control.CELL_LINE_SEARCH,
                        placeholder="Filter cell lines",
                        type="text",
                        debounce=True,
                        size="sm",
                        className="mb-2",
                    ),
                    html.Div(
                        [
                            dbc.Button("Select all", id=IDs.Control.CELL_LINE_ALL_BTN, size="sm", color="link"),
                            dbc.Button("Clear", id=IDs.Control.CELL_LINE_CLEAR_BTN, size="sm", color="link"),
                        ],
                        className="d-flex",
                    ),
                    dbc.Checklist(
                        id=IDs.Control.CELL_LINE_CHECKLIST,
                        options=[],
                        value=[],
                        className="cnb-cell-line-list",
                    ),
                ]
            ),
        ],
        className="cnb-sidebar",
    )
