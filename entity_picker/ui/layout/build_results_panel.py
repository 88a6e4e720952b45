from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html


def build_results_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader("Committed selection", className="fw-semibold"),
            dbc.CardBody(
                html.Div(
                    "Nothing selected yet.",
                    id="result-list",
                    className="text-muted",
                ),
            ),
        ],
        className="mt-3 ep-results-card",
    )
