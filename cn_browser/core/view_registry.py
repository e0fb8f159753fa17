from __future__ import annotations
from typing import Dict, List, Type

from .dataset import Dataset
from .base_view import BaseView


class ViewRegistry:
    """
    The plot types offered in the sidebar's view switcher, keyed by view id.

    Classes are kept rather than instances: a view is built fresh for every
    render against the store's current Dataset, so nothing here goes stale
    when the table finishes loading. Registration order is the order the
    switcher lists them in, and the first one is the default view.
    """

    def __init__(self):
        self._views: Dict[str, Type[BaseView]] = {}

    def register(self, view_cls: Type[BaseView]) -> None:
        """
        Add a plot type. Rejects anything that is not a BaseView subclass
        (TypeError) and a second class claiming an existing id (ValueError).
        """
        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"{view_cls!r} is not a BaseView subclass")

        if view_cls.id in self._views:
            raise ValueError(f"A view with id '{view_cls.id}' is already registered")

        self._views[view_cls.id] = view_cls

    def create(self, view_id: str, dataset: Dataset) -> BaseView:
        """Build the view the switcher selected; KeyError for an unknown id."""
        if view_id not in self._views:
            raise KeyError(f"Unknown view '{view_id}'")
        return self._views[view_id](dataset)

    def all_classes(self) -> List[Type[BaseView]]:
        return list(self._views.values())
