from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from entity_picker.core.entity import Entity, EntityId
from entity_picker.core.exceptions import WorkflowClosedError
from entity_picker.core.selection import SelectionState, SelectionStatus
from entity_picker.validation.errors import EmptySelectionError

logger = logging.getLogger(__name__)


def commit(visible_set: Iterable[Entity], selection: SelectionState) -> List[Entity]:
    """
    Resolve the selection against the visible set.

    Returns the visible entities whose id is selected, in visible order.
    Selected ids that are not visible are dropped: records from a page that
    is no longer shown cannot be resolved without fetching it again.

    :raises EmptySelectionError: if nothing is selected at all.
    """
    if selection.count() == 0:
        raise EmptySelectionError()

    visible = list(visible_set)
    resolved = [e for e in visible if selection.is_selected(e.id)]

    visible_id_set = {e.id for e in visible}
    n_stale = sum(1 for entity_id in selection if entity_id not in visible_id_set)
    if n_stale:
        logger.info(
            "Selected entities not in the visible set were excluded from commit",
            extra={"n_selected": selection.count(), "n_resolved": len(resolved), "n_excluded": n_stale},
        )
    return resolved


class WorkflowState(str, Enum):
    OPEN = "open"
    COMMITTING = "committing"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({WorkflowState.COMMITTED, WorkflowState.CANCELLED})


class SelectionWorkflow:
    """
    One run of the selection dialog: owns a SelectionState from open until
    commit or cancel.

    OPEN -> COMMITTING -> COMMITTED, with COMMITTING -> OPEN when the
    selection is empty or resolving it fails. OPEN -> CANCELLED at any time.
    Terminal workflows reject every further call.
    """

    def __init__(
            self,
            selection: Optional[SelectionState] = None,
            state: WorkflowState = WorkflowState.OPEN,
    ):
        self.selection = selection if selection is not None else SelectionState()
        self.state = state
        self.result: Optional[List[Entity]] = None

    @property
    def is_open(self) -> bool:
        return self.state == WorkflowState.OPEN

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def _require_open(self, action: str) -> None:
        if self.state != WorkflowState.OPEN:
            raise WorkflowClosedError(f"Cannot {action}: workflow is {self.state.value}")

    # ---------------------------------------------------------
    # Selection passthroughs (only while open)
    # ---------------------------------------------------------
    def toggle(self, entity_id: EntityId) -> bool:
        self._require_open("toggle selection")
        return self.selection.toggle(entity_id)

    def set_all_visible(self, visible_set: Iterable[Entity], select: bool) -> None:
        self._require_open("change selection")
        self.selection.set_all_visible(visible_set, select)

    def status(self, visible_set: Iterable[Entity]) -> SelectionStatus:
        return self.selection.status(visible_set)

    # ---------------------------------------------------------
    # Transitions
    # ---------------------------------------------------------
    def commit(self, visible_set: Iterable[Entity]) -> List[Entity]:
        self._require_open("commit")
        self.state = WorkflowState.COMMITTING

        try:
            resolved = commit(visible_set, self.selection)
        except EmptySelectionError:
            self.state = WorkflowState.OPEN
            logger.warning("Commit rejected: empty selection")
            raise
        except Exception:
            self.state = WorkflowState.OPEN
            logger.exception("Commit failed, workflow reopened")
            raise

        self.result = resolved
        self.selection = SelectionState()
        self.state = WorkflowState.COMMITTED
        logger.info(
            "Selection committed",
            extra={"n_committed": len(resolved), "entity_ids": [e.id for e in resolved]},
        )
        return resolved

    def cancel(self) -> None:
        if self.is_terminal:
            raise WorkflowClosedError(f"Cannot cancel: workflow is {self.state.value}")

        n_discarded = self.selection.count()
        self.selection = SelectionState()
        self.state = WorkflowState.CANCELLED
        logger.info("Selection workflow cancelled", extra={"n_discarded": n_discarded})

    # ---------------------------------------------------------
    # Serialization (dcc.Store payloads)
    # ---------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            **self.selection.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> SelectionWorkflow:
        if not data:
            return cls()
        return cls(
            selection=SelectionState.from_dict(data),
            state=WorkflowState(data.get("state", WorkflowState.OPEN.value)),
        )
