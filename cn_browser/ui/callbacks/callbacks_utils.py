"""
Pure helpers behind the callbacks, kept free of Dash context so they can be
unit-tested directly.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import dash_bootstrap_components as dbc
import pandas as pd
import plotly.graph_objs as go
from dash import html

from cn_browser.core.dataset import Dataset
from cn_browser.core.resolver import (
    MIN_SEARCH_LENGTH,
    IdentifierResolver,
    ResolutionResult,
    SearchMode,
)
from cn_browser.core.series import selected_proteins_table, to_frame
from cn_browser.core.view_state import ViewState

MAX_UNMATCHED_SHOWN = 20


def message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def error_figure(details: str) -> go.Figure:
    return message_figure("Something went wrong while rendering this view.", details)


def build_gene_options(
    resolver: IdentifierResolver,
    search_value: Optional[str],
    mode: str,
    selected: Optional[Sequence[str]],
    limit: int,
) -> List[Dict[str, str]]:
    """
    Dropdown options: the already selected genes first, then suggestions for
    the current search text. Option values are always primary gene symbols,
    labels keep the raw identifier so client-side filtering still matches.
    """
    selected = list(selected or [])
    options = [{"label": g, "value": g} for g in selected]
    seen = set(selected)

    query = str(search_value or "")
    if len(query) < MIN_SEARCH_LENGTH:
        return options

    search_mode = SearchMode(mode)
    for raw in resolver.search(query, search_mode, limit=limit):
        value = resolver.display_gene_for(raw, search_mode)
        if value in seen:
            continue
        seen.add(value)
        label = raw if search_mode is SearchMode.GENE else f"{raw} ({value})"
        options.append({"label": label, "value": value})

    return options


def apply_identifiers(
    resolver: IdentifierResolver,
    identifiers: Sequence[str],
    mode: str,
    selected: Optional[Sequence[str]],
) -> Tuple[List[str], ResolutionResult]:
    """Resolve a batch and append newly matched genes to the current selection."""
    result = resolver.resolve_many(identifiers, SearchMode(mode))
    merged = ViewState(view_id="", genes=list(selected or [])).with_genes(result.matched)
    return merged.genes, result


def genes_from_click(
    click_data: Optional[Dict[str, Any]],
    selected: Optional[Sequence[str]],
) -> Optional[List[str]]:
    """
    Selection after clicking a scatter point: the point's primary gene
    (carried in customdata) appended to the current genes.
    None when the click carries no gene or the gene is already selected.
    """
    points = (click_data or {}).get("points") or []
    if not points:
        return None

    gene = points[0].get("customdata")
    if isinstance(gene, (list, tuple)):
        gene = gene[0] if gene else None
    if not gene:
        return None

    current = list(selected or [])
    if gene in current:
        return None
    return ViewState(view_id="", genes=current).with_genes([str(gene)]).genes


def format_batch_report(result: ResolutionResult, source: str) -> List[Any]:
    children: List[Any] = [
        html.Div(f"{source}: {len(result.matched)} matched, {len(result.unmatched)} unmatched"),
    ]
    if result.unmatched:
        shown = result.unmatched[:MAX_UNMATCHED_SHOWN]
        more = len(result.unmatched) - len(shown)
        text = ", ".join(shown) + (f" and {more} more" if more > 0 else "")
        children.append(html.Div(f"Not found: {text}", className="text-muted"))
    return children


def table_export_frame(dataset: Dataset, cell_lines: Optional[Sequence[str]]) -> pd.DataFrame:
    """
    Copy-number matrix for CSV export, limited to the selected cell lines
    (all of them when none are selected). Proteins with no value in any of
    those cell lines are left out.
    """
    df = dataset.to_frame()
    available = list(dict.fromkeys(dataset.cell_lines))
    wanted = [cl for cl in dict.fromkeys(cell_lines or []) if cl in available] or available
    meta = [c for c in df.columns if c not in available]

    out = df[meta + wanted]
    return out[out[wanted].notna().any(axis=1)].reset_index(drop=True)


def build_detail_table(dataset: Dataset, state: ViewState):
    """Highlighted proteins across the selected cell lines, highest copy number first."""
    rows = selected_proteins_table(dataset, state.genes, state.cell_lines)
    if not rows:
        return None

    df = to_frame(rows).rename(
        columns={
            "gene": "Gene",
            "cell_line": "Cell line",
            "copy_number": "Copy number",
            "accession": "Accession",
        }
    )
    df["Copy number"] = df["Copy number"].round(0).astype("int64")
    return html.Div(
        dbc.Table.from_dataframe(df, striped=True, bordered=False, hover=True, size="sm"),
        style={"maxHeight": "320px", "overflowY": "auto"},
    )
