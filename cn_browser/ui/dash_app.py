from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from cn_browser.config.loader import load_global_config
from cn_browser.core.store import DataStore
from cn_browser.core.view_registry import ViewRegistry
from cn_browser.services.filter_lists import FilterListClient
from cn_browser.ui.callbacks import (
    register_batch_callbacks,
    register_load_callbacks,
    register_render_callbacks,
    register_selection_callbacks,
)
from cn_browser.ui.context import AppContext
from cn_browser.ui.layout import build_layout

logger = logging.getLogger(__name__)


def _build_view_registry() -> ViewRegistry:
    from cn_browser.views import CopyNumberBarView, RankScatterView

    registry = ViewRegistry()
    registry.register(RankScatterView)
    registry.register(CopyNumberBarView)
    return registry


def create_dash_app(
    config_root: Path | str = Path("config"),
    store: Optional[DataStore] = None,
    filter_client: Optional[FilterListClient] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Session data store; parsing starts in the background right away
    if store is None:
        store = DataStore(global_config.data_file)
    store.start_background_load()

    # 3) App Context
    ctx = AppContext(
        global_config=global_config,
        store=store,
        registry=_build_view_registry(),
        filter_client=filter_client or FilterListClient(global_config.filter_list_base_url),
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = global_config.ui_title
    app.layout = build_layout(ctx)

    # Register callbacks
    register_load_callbacks(app, ctx)
    register_selection_callbacks(app, ctx)
    register_batch_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    logger.info("Dash app created", extra={"config_root": str(config_root), "data_file": str(global_config.data_file)})
    return app
