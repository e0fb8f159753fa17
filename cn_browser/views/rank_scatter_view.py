from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.graph_objs as go

from cn_browser.core.base_view import BaseView
from cn_browser.core.series import highlight_mask, scatter_series, to_frame
from cn_browser.core.view_state import ViewState

SCATTER_COLUMNS = ["rank", "log_copy_number", "gene_names", "copy_number"]


class RankScatterView(BaseView):
    """
    Rank vs copy number:
    One point per protein and selected cell line, x = rank by copy number
    (1 = most abundant), y = log10(copy number). Highlighted genes are drawn
    on top as labelled diamonds.
    """

    id = "rank_scatter"
    label = "Rank vs Copy Number"

    def compute_data(self, state: ViewState) -> pd.DataFrame:
        if not state.cell_lines:
            return pd.DataFrame()

        frames = []
        for cell_line in state.cell_lines:
            points = scatter_series(self.dataset, cell_line)
            if not points:
                continue
            df = to_frame(points, SCATTER_COLUMNS)
            df["cell_line"] = cell_line
            df["primary_gene"] = [p.primary_gene for p in points]
            df["highlighted"] = highlight_mask(points, state.genes)
            frames.append(df)

        if not frames:
            return pd.DataFrame()

        return pd.concat(frames, ignore_index=True)

    def render_figure(self, data: pd.DataFrame, state: ViewState) -> go.Figure:
        if data is None or data.empty:
            return self.empty_figure("Select one or more cell lines")

        fig = go.Figure()
        cell_lines = list(dict.fromkeys(data["cell_line"]))

        # Normal points first so highlighted traces render on top
        for cell_line in cell_lines:
            sub = data[(data["cell_line"] == cell_line) & ~data["highlighted"]]
            fig.add_trace(
                go.Scattergl(
                    x=sub["rank"],
                    y=sub["log_copy_number"],
                    mode="markers",
                    name=cell_line,
                    marker=dict(size=4, color=self.color_for(cell_line), opacity=0.7),
                    text=[
                        f"{g}<br>Copy#: {c:.0f}<br>Rank: {r}"
                        for g, c, r in zip(sub["gene_names"], sub["copy_number"], sub["rank"])
                    ],
                    customdata=np.asarray(sub["primary_gene"]),
                    hoverinfo="text",
                )
            )

        for cell_line in cell_lines:
            sub = data[(data["cell_line"] == cell_line) & data["highlighted"]]
            if sub.empty:
                continue
            color = self.color_for(cell_line)
            fig.add_trace(
                go.Scatter(
                    x=sub["rank"],
                    y=sub["log_copy_number"],
                    mode="markers+text",
                    name=f"{cell_line} (selected)",
                    marker=dict(size=10, color=color, symbol="diamond"),
                    text=list(sub["primary_gene"]),
                    textposition="top center",
                    textfont=dict(size=9, color=color),
                    hovertext=[
                        f"{cell_line}<br>{g}<br>Copy#: {c:.0f}<br>Rank: {r}"
                        for g, c, r in zip(sub["gene_names"], sub["copy_number"], sub["rank"])
                    ],
                    customdata=np.asarray(sub["primary_gene"]),
                    hoverinfo="text",
                )
            )

        fig.update_layout(
            title=dict(text="Copy # vs Protein Rank", font=dict(size=16)),
            xaxis=dict(title=dict(text="Rank", font=dict(size=12))),
            yaxis=dict(title=dict(text="log10(Copy Number)", font=dict(size=12))),
            margin=dict(l=60, r=20, t=50, b=50),
            showlegend=True,
            legend=dict(x=1, y=1, xanchor="right", font=dict(size=10)),
            hovermode="closest",
            height=600,
        )
        return fig
