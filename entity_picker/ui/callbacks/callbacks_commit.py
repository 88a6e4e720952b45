from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import dash
from dash import Input, Output, State, exceptions, html

from entity_picker.core.commit_gate import SelectionWorkflow
from entity_picker.core.entity import entities_from_records
from entity_picker.core.exceptions import WorkflowClosedError
from entity_picker.core.table_state import TableState
from entity_picker.listing.query import format_filter_query, sort_by_from_sorters
from entity_picker.ui.ids import IDs
from entity_picker.validation.errors import EmptySelectionError

if TYPE_CHECKING:
    from entity_picker.ui.config import AppConfig

logger = logging.getLogger(__name__)

RESULT_COMMITTED = "committed"
RESULT_CANCELLED = "cancelled"


@dataclass
class CommitOutcome:
    """What the modal callbacks write back after Continue / Cancel."""
    modal_open: bool
    workflow_data: Dict[str, Any]
    result: Optional[Dict[str, Any]] = None
    alert_message: Optional[str] = None


def handle_continue(
        workflow_data: Optional[Dict[str, Any]],
        visible_records: Optional[List[Dict[str, Any]]],
) -> CommitOutcome:
    """
    Run the commit gate. An empty selection keeps the modal open with the
    validation message; otherwise the resolved records become the result.
    """
    workflow = SelectionWorkflow.from_dict(workflow_data)
    visible = entities_from_records(visible_records)

    try:
        resolved = workflow.commit(visible)
    except EmptySelectionError as e:
        return CommitOutcome(
            modal_open=True,
            workflow_data=workflow.to_dict(),
            alert_message=e.user_message,
        )

    entities = [e.to_dict() for e in resolved]
    return CommitOutcome(
        modal_open=False,
        workflow_data=workflow.to_dict(),
        result={"status": RESULT_COMMITTED, "entities": entities},
    )


def handle_cancel(workflow_data: Optional[Dict[str, Any]]) -> CommitOutcome:
    workflow = SelectionWorkflow.from_dict(workflow_data)
    workflow.cancel()
    return CommitOutcome(
        modal_open=False,
        workflow_data=workflow.to_dict(),
        result={"status": RESULT_CANCELLED},
    )


def restored_table_query(table_state_data: Optional[Dict[str, Any]]) -> tuple[list, str, int]:
    """sort_by / filter_query / 0-based page_current to reopen the table with the persisted view."""
    table_state = TableState.from_dict(table_state_data)
    return (
        sort_by_from_sorters(table_state.sorters),
        format_filter_query(table_state.filters),
        max(table_state.pagination.current - 1, 0),
    )


def render_result(result: Optional[Dict[str, Any]], label_field: str = "name"):
    if not result:
        return "Nothing selected yet."
    if result.get("status") == RESULT_CANCELLED:
        return "Selection cancelled."

    entities = result.get("entities") or []
    if not entities:
        return "No selected entity was visible when the selection was committed."

    return html.Ul(
        [
            html.Li(f"{e.get(label_field, '')} (#{e.get('id')})")
            for e in entities
        ],
        className="mb-0",
    )


def register_commit_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Open: fresh workflow, persisted table view
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.PICKER_MODAL, "is_open", allow_duplicate=True),
        Output(IDs.Store.SELECTION, "data", allow_duplicate=True),
        Output(IDs.Control.PICKER_ALERT, "is_open", allow_duplicate=True),
        Output(IDs.Control.ENTITY_TABLE, "sort_by"),
        Output(IDs.Control.ENTITY_TABLE, "filter_query"),
        Output(IDs.Control.ENTITY_TABLE, "page_current", allow_duplicate=True),
        Input(IDs.Control.OPEN_PICKER_BTN, "n_clicks"),
        State(IDs.Store.TABLE_STATE, "data"),
        prevent_initial_call=True,
    )
    def open_picker(n_clicks, table_state_data):
        if not n_clicks:
            raise exceptions.PreventUpdate

        sort_by, filter_query, page_current = restored_table_query(table_state_data)
        logger.info("Selection workflow opened")
        return True, SelectionWorkflow().to_dict(), False, sort_by, filter_query, page_current

    # ---------------------------------------------------------
    # Continue / Cancel
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.PICKER_MODAL, "is_open", allow_duplicate=True),
        Output(IDs.Store.SELECTION, "data", allow_duplicate=True),
        Output(IDs.Store.COMMIT_RESULT, "data"),
        Output(IDs.Control.PICKER_ALERT, "children"),
        Output(IDs.Control.PICKER_ALERT, "is_open", allow_duplicate=True),
        Input(IDs.Control.CONTINUE_BTN, "n_clicks"),
        Input(IDs.Control.CANCEL_BTN, "n_clicks"),
        State(IDs.Store.SELECTION, "data"),
        State(IDs.Control.ENTITY_TABLE, "data"),
        prevent_initial_call=True,
    )
    def finish_picker(_continue_clicks, _cancel_clicks, workflow_data, visible_records):
        triggered_id = dash.ctx.triggered_id

        try:
            if triggered_id == IDs.Control.CONTINUE_BTN:
                outcome = handle_continue(workflow_data, visible_records)
            elif triggered_id == IDs.Control.CANCEL_BTN:
                outcome = handle_cancel(workflow_data)
            else:
                raise exceptions.PreventUpdate
        except WorkflowClosedError:
            logger.warning("Ignoring %s on a closed workflow", triggered_id)
            raise exceptions.PreventUpdate

        return (
            outcome.modal_open,
            outcome.workflow_data,
            outcome.result if outcome.result is not None else dash.no_update,
            outcome.alert_message or "",
            outcome.alert_message is not None,
        )

    # ---------------------------------------------------------
    # Result panel (what the calling workflow received)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.RESULT_LIST, "children"),
        Input(IDs.Store.COMMIT_RESULT, "data"),
    )
    def update_result_list(result):
        return render_result(result)
