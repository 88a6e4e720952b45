"""
Core domain layer: entities, the selection state manager, the commit gate
and the table query state
"""

from .entity import Entity
from .selection import SelectionState, SelectionStatus
from .commit_gate import SelectionWorkflow, WorkflowState, commit
from .table_state import TableState

__all__ = [
    "Entity",
    "SelectionState",
    "SelectionStatus",
    "SelectionWorkflow",
    "WorkflowState",
    "commit",
    "TableState",
]
