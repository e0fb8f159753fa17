from __future__ import annotations

from dataclasses import dataclass

from cn_browser.config.model import GlobalConfig
from cn_browser.core.store import DataStore
from cn_browser.core.view_registry import ViewRegistry
from cn_browser.services.filter_lists import FilterListClient


@dataclass
class AppContext:
    """
    Holds shared state for the Dash app: config, the session data store,
    the view registry and the filter-list client. This is passed into layout +
    callback registration functions instead of using module-level globals.
    """
    global_config: GlobalConfig
    store: DataStore
    registry: ViewRegistry
    filter_client: FilterListClient

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.registry is None or not self.registry.all_classes():
            raise RuntimeError("AppContext.registry must have at least one view registered.")
        if self.store is None:
            raise RuntimeError("AppContext.store must be initialized.")
