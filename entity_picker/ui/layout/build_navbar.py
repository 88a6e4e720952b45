from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from entity_picker.config.model import PickerConfig


def build_navbar(picker_config: PickerConfig) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(picker_config.ui_title, className="mb-0"),
                        html.Small(
                            "Choose entities and hand them to the next step",
                            className="text-muted",
                        ),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                dbc.Button(
                    picker_config.title,
                    id="open-picker-btn",
                    color="primary",
                    className="ms-auto",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm ep-navbar",
    )
