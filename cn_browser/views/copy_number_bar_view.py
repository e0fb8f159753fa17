from __future__ import annotations

import pandas as pd
import plotly.graph_objs as go
from plotly.subplots import make_subplots

from cn_browser.core.base_view import BaseView
from cn_browser.core.series import bar_series, to_frame
from cn_browser.core.view_state import ViewState

BAR_COLUMNS = ["cell_line", "copy_number", "gene_names"]


class CopyNumberBarView(BaseView):
    """
    Copy number distribution:
    One bar chart per selected gene, bars = selected cell lines sorted by
    copy number (highest first). Cell lines without a measurement are left out.
    """

    id = "copy_number_bar"
    label = "Copy Number Distribution"

    def compute_data(self, state: ViewState) -> pd.DataFrame:
        if not state.genes or not state.cell_lines:
            return pd.DataFrame()

        frames = []
        for gene in state.genes:
            entries = bar_series(self.dataset, gene, state.cell_lines)
            if not entries:
                continue
            df = to_frame(entries, BAR_COLUMNS)
            df["gene"] = gene
            # display order only; the series itself follows the selection order
            frames.append(df.sort_values("copy_number", ascending=False, kind="mergesort"))

        if not frames:
            return pd.DataFrame()

        return pd.concat(frames, ignore_index=True)

    def render_figure(self, data: pd.DataFrame, state: ViewState) -> go.Figure:
        if data is None or data.empty:
            return self.empty_figure("Select genes and cell lines")

        genes = list(dict.fromkeys(data["gene"]))
        fig = make_subplots(
            rows=len(genes),
            cols=1,
            subplot_titles=[f"Copy Number: {g}" for g in genes],
        )

        for row, gene in enumerate(genes, start=1):
            sub = data[data["gene"] == gene]
            fig.add_trace(
                go.Bar(
                    x=sub["cell_line"],
                    y=sub["copy_number"],
                    name=gene,
                    marker=dict(color=[self.color_for(cl) for cl in sub["cell_line"]]),
                    text=[f"{c:.0f}" for c in sub["copy_number"]],
                    textposition="outside",
                    textfont=dict(size=9),
                    hovertext=[
                        f"{cl}<br>{g}<br>Copy#: {c:.0f}"
                        for cl, g, c in zip(sub["cell_line"], sub["gene_names"], sub["copy_number"])
                    ],
                    hoverinfo="text",
                ),
                row=row,
                col=1,
            )
            fig.update_xaxes(title_text="Cell Line", tickangle=-45, tickfont=dict(size=8), row=row, col=1)
            fig.update_yaxes(title_text="Copy Number", tickfont=dict(size=9), row=row, col=1)

        fig.update_layout(
            height=max(400, 350 * len(genes)),
            margin=dict(l=50, r=20, t=40, b=80),
            showlegend=False,
            hovermode="closest",
        )
        return fig
