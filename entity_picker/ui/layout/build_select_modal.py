from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, html

from entity_picker.config.model import PickerConfig
from entity_picker.core.table_state import PAGINATION_SERVER


def build_entity_table(picker_config: PickerConfig) -> dash_table.DataTable:
    """
    Listing table. Sorting, filtering and paging are 'custom' so every change
    goes through the listing provider; the rows are only the visible set.
    """
    server_paging = picker_config.pagination_mode == PAGINATION_SERVER

    return dash_table.DataTable(
        id="entity-table",
        columns=[{"name": c.label, "id": c.id} for c in picker_config.columns],
        data=[],
        row_selectable="multi",
        selected_row_ids=[],
        sort_action="custom",
        sort_mode="multi",
        sort_by=[],
        filter_action="custom",
        filter_query="",
        page_action="custom" if server_paging else "none",
        page_current=0,
        page_size=picker_config.page_size,
        style_table={"maxHeight": "200px", "overflowY": "auto"},
        style_as_list_view=True,
        style_cell={
            "fontSize": "13px",
            "padding": "6px 8px",
            "textAlign": "left",
            "whiteSpace": "nowrap",
            "textOverflow": "ellipsis",
        },
        style_header={
            "fontWeight": "600",
            "backgroundColor": "#f3f4f6",
            "borderBottom": "1px solid #e5e7eb",
        },
    )


def build_select_modal(picker_config: PickerConfig) -> dbc.Modal:
    body = []
    if picker_config.description:
        body.append(html.P(picker_config.description, id="picker-description"))

    body.extend(
        [
            build_entity_table(picker_config),
            html.Small(id="listing-status", className="text-muted"),
            dbc.Row(
                [
                    dbc.Col(
                        dbc.Checkbox(
                            id="select-all-checkbox",
                            label="Select all",
                            value=False,
                        ),
                        width=6,
                    ),
                    dbc.Col(
                        html.Div(
                            "0 selected",
                            id="selected-total",
                            className="text-end",
                        ),
                        width=6,
                    ),
                ],
                className="mt-2",
            ),
            dbc.Alert(
                id="picker-alert",
                color="danger",
                is_open=False,
                dismissable=True,
                className="mt-2 mb-0",
            ),
        ]
    )

    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle(picker_config.title)),
            dbc.ModalBody(body),
            dbc.ModalFooter(
                [
                    dbc.Button("Cancel", id="picker-cancel-btn", color="secondary", outline=True),
                    dbc.Button("Continue", id="picker-continue-btn", color="primary"),
                ]
            ),
        ],
        id="picker-modal",
        is_open=False,
        size="lg",
        backdrop="static",
    )
