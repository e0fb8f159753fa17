from .rank_scatter_view import RankScatterView
from .copy_number_bar_view import CopyNumberBarView

__all__ = ["RankScatterView", "CopyNumberBarView"]
