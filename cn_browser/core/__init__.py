"""
Core domain layer: copy-number dataset, identifier resolution, series
derivation, the session data store, view base class and the view registry
"""

from .dataset import Dataset
from .record import ProteinRecord
from .resolver import IdentifierResolver, ResolutionResult, SearchMode
from .store import DataStore, LoadStatus
from .view_state import ViewState
from .base_view import BaseView
from .view_registry import ViewRegistry

__all__ = [
    "Dataset",
    "ProteinRecord",
    "IdentifierResolver",
    "ResolutionResult",
    "SearchMode",
    "DataStore",
    "LoadStatus",
    "ViewState",
    "BaseView",
    "ViewRegistry",
]
