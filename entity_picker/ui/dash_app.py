from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from entity_picker.config.loader import load_entity_frame, load_picker_config
from entity_picker.listing.provider import DataFrameListingProvider
from entity_picker.ui.layout.build_layout import build_layout
from entity_picker.ui.callbacks.callbacks_listing import register_listing_callbacks
from entity_picker.ui.callbacks.callbacks_selection import register_selection_callbacks
from entity_picker.ui.callbacks.callbacks_commit import register_commit_callbacks

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    picker_config = load_picker_config(config_root)

    # 2) Listing Provider
    frame = load_entity_frame(picker_config)
    provider = DataFrameListingProvider(frame)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        picker_config=picker_config,
        provider=provider,
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = picker_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_listing_callbacks(app, ctx)
    register_selection_callbacks(app, ctx)
    register_commit_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"config_root": str(config_root), "n_entities": len(frame)},
    )
    return app
