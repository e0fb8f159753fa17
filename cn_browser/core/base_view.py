from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

import plotly.colors
import plotly.graph_objs as go

from .dataset import Dataset
from .view_state import ViewState

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#6366f1"


def cell_line_colors(cell_lines: Sequence[str]) -> Dict[str, str]:
    """
    Assign a palette colour to each cell line in header order, cycling when
    there are more cell lines than colours.
    """
    palette: List[str] = plotly.colors.qualitative.Dark24
    colors: Dict[str, str] = {}
    for idx, cell_line in enumerate(cell_lines):
        colors.setdefault(cell_line, palette[idx % len(palette)])
    return colors


class BaseView(ABC):
    """
    Abstract base class for all plot views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally
    - expose a 'label' - used for UI/human-readable applications
    - implement 'compute_data' - used to compute the data given the current ViewState
    - implement 'render_figure' - used to render the figure using Plotly
    """

    id: str = None
    label: str = None

    def __init__(self, dataset: Dataset):
        self.dataset = dataset
        self.colors = cell_line_colors(dataset.cell_lines)

    @abstractmethod
    def compute_data(self, state: ViewState) -> Any:
        """
        Compute the data given the current ViewState
        :param state: the current {@link ViewState} - which cell lines and genes the user picked
        :return: data: a dataframe containing the data as per the ViewState
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any, state: ViewState) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :param state: the current {@link ViewState}
        :return: the Plotly figure for these parameters
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def timed_compute(self, state: ViewState) -> Any:
        """compute_data with a debug log of how long it took."""
        start = time.perf_counter()
        data = self.compute_data(state)
        logger.debug(
            "compute_data finished",
            extra={"view_id": self.id, "elapsed_ms": round((time.perf_counter() - start) * 1000, 2)},
        )
        return data

    def color_for(self, cell_line: str) -> str:
        return self.colors.get(cell_line, DEFAULT_COLOR)

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
