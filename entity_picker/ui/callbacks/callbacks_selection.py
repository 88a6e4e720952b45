from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple

import dash
from dash import Input, Output, State, exceptions

from entity_picker.core.commit_gate import SelectionWorkflow
from entity_picker.core.entity import EntityId, entities_from_records
from entity_picker.core.exceptions import WorkflowClosedError
from entity_picker.core.selection import SelectionStatus
from entity_picker.ui.ids import IDs

if TYPE_CHECKING:
    from entity_picker.ui.config import AppConfig

logger = logging.getLogger(__name__)

SELECT_SOME_CLASS = "ep-select-some"

TABLE_TICKS = f"{IDs.Control.ENTITY_TABLE}.selected_row_ids"
TABLE_DATA = f"{IDs.Control.ENTITY_TABLE}.data"
SELECT_ALL_VALUE = f"{IDs.Control.SELECT_ALL}.value"


def apply_selection_event(
        workflow_data: Optional[Dict[str, Any]],
        visible_records: Optional[List[Dict[str, Any]]],
        triggered_props: Iterable[str],
        table_selected_ids: Optional[List[EntityId]],
        select_all_value: Optional[bool],
) -> Tuple[Dict[str, Any], List[EntityId], bool]:
    """
    Pure helper applying one UI event to the stored workflow.

    - A row tick in the table toggles each visible id whose ticked state
      differs from the selection.
    - The "select all" box selects or unselects every visible id.
    - A new visible set (table data) changes nothing, even when the table
      reports stale ticks alongside it; the outputs are recomputed against it.

    Returns (workflow payload, ticked row ids for the table, "select all"
    checked state).

    :raises WorkflowClosedError: if the stored workflow is no longer open.
    """
    workflow = SelectionWorkflow.from_dict(workflow_data)
    visible = entities_from_records(visible_records)

    triggered = set(triggered_props or ())

    if TABLE_DATA in triggered:
        # new visible set, nothing to apply
        triggered = set()

    if TABLE_TICKS in triggered:
        ticked = set(table_selected_ids or [])
        for entity in visible:
            if (entity.id in ticked) != workflow.selection.is_selected(entity.id):
                workflow.toggle(entity.id)
    elif SELECT_ALL_VALUE in triggered:
        workflow.set_all_visible(visible, bool(select_all_value))

    status = workflow.status(visible)
    return (
        workflow.to_dict(),
        workflow.selection.visible_selected_ids(visible),
        status == SelectionStatus.ALL,
    )


def selection_summary(
        workflow_data: Optional[Dict[str, Any]],
        visible_records: Optional[List[Dict[str, Any]]],
) -> Tuple[str, SelectionStatus]:
    """Counter text ("N selected") and aggregate status for the visible set."""
    workflow = SelectionWorkflow.from_dict(workflow_data)
    visible = entities_from_records(visible_records)
    return f"{workflow.selection.count()} selected", workflow.status(visible)


def register_selection_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Row ticks / select all / visible set change -> selection
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.SELECTION, "data"),
        Output(IDs.Control.ENTITY_TABLE, "selected_row_ids"),
        Output(IDs.Control.SELECT_ALL, "value"),
        Input(IDs.Control.ENTITY_TABLE, "selected_row_ids"),
        Input(IDs.Control.SELECT_ALL, "value"),
        Input(IDs.Control.ENTITY_TABLE, "data"),
        State(IDs.Store.SELECTION, "data"),
    )
    def sync_selection(table_selected_ids, select_all_value, visible_records, workflow_data):
        try:
            return apply_selection_event(
                workflow_data,
                visible_records,
                [t["prop_id"] for t in dash.ctx.triggered],
                table_selected_ids,
                select_all_value,
            )
        except WorkflowClosedError:
            logger.debug("Selection event ignored: workflow closed")
            raise exceptions.PreventUpdate

    # ---------------------------------------------------------
    # Counter + tri-state rendering (pure reflection of state)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.SELECTED_TOTAL, "children"),
        Output(IDs.Control.SELECT_ALL, "class_name"),
        Input(IDs.Store.SELECTION, "data"),
        Input(IDs.Control.ENTITY_TABLE, "data"),
    )
    def update_selection_summary(workflow_data, visible_records):
        text, status = selection_summary(workflow_data, visible_records)
        return text, SELECT_SOME_CLASS if status == SelectionStatus.SOME else ""
