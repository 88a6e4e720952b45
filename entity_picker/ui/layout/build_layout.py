from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from entity_picker.ui.layout.build_navbar import build_navbar
from entity_picker.ui.layout.build_results_panel import build_results_panel
from entity_picker.ui.layout.build_select_modal import build_select_modal

if TYPE_CHECKING:
    from entity_picker.ui.config import AppConfig


def build_layout(ctx: AppConfig) -> dbc.Container:
    picker_config = ctx.picker_config

    return dbc.Container(
        fluid=True,
        className="ep-root",
        children=[
            build_navbar(picker_config),

            # App-level stores
            dcc.Store(id="selection-state", storage_type="session"),
            dcc.Store(id="table-state", storage_type="local"),
            dcc.Store(id="commit-result", storage_type="session"),

            build_results_panel(),
            build_select_modal(picker_config),
        ],
    )
