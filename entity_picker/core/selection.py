from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional

from entity_picker.core.entity import Entity, EntityId, visible_ids

logger = logging.getLogger(__name__)


class SelectionStatus(str, Enum):
    """Tri-state summary of the selection over the visible set."""

    NONE = "none"
    SOME = "some"
    ALL = "all"


class SelectionState:
    """
    Tracks which entity ids are selected, independent of the visible set.

    The visible set (current page / filter / sort) is never stored here. It is
    passed into the operations that need it, so the aggregate status is always
    computed from the snapshot the caller is currently showing.

    Ids are kept in insertion order so the serialized form is stable, but the
    order carries no meaning.
    """

    def __init__(self, ids: Optional[Iterable[EntityId]] = None):
        self._ids: Dict[EntityId, None] = dict.fromkeys(ids or ())

    def __contains__(self, entity_id: EntityId) -> bool:
        return entity_id in self._ids

    def __iter__(self) -> Iterator[EntityId]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"SelectionState({list(self._ids)!r})"

    # ---------------------------------------------------------
    # Mutations
    # ---------------------------------------------------------
    def toggle(self, entity_id: EntityId) -> bool:
        """
        Flip membership of `entity_id`. Returns the new membership.

        The id does not need to be part of any visible set.
        """
        if entity_id in self._ids:
            del self._ids[entity_id]
            selected = False
        else:
            self._ids[entity_id] = None
            selected = True

        logger.debug(
            "Selection toggled",
            extra={"entity_id": entity_id, "selected": selected, "n_selected": len(self._ids)},
        )
        return selected

    def set_all_visible(self, visible_set: Iterable[Entity], select: bool) -> None:
        """
        Select or unselect every entity of `visible_set`.

        Ids outside the visible set are left alone, so selections made under a
        different filter survive a bulk unselect here.
        """
        ids = visible_ids(visible_set)
        if select:
            for entity_id in ids:
                self._ids.setdefault(entity_id, None)
        else:
            for entity_id in ids:
                self._ids.pop(entity_id, None)

        logger.debug(
            "Visible entities %s",
            "selected" if select else "unselected",
            extra={"n_visible": len(ids), "n_selected": len(self._ids)},
        )

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------
    def is_selected(self, entity_id: EntityId) -> bool:
        return entity_id in self._ids

    def count(self) -> int:
        """Number of selected ids across every view, visible or not."""
        return len(self._ids)

    def status(self, visible_set: Iterable[Entity]) -> SelectionStatus:
        """
        Aggregate status of the selection over `visible_set`.

        An empty visible set counts as ALL so the "select all" box renders
        checked rather than indeterminate.
        """
        ids = visible_ids(visible_set)
        n_selected = sum(1 for entity_id in ids if entity_id in self._ids)

        if n_selected == len(ids):
            return SelectionStatus.ALL
        if n_selected > 0:
            return SelectionStatus.SOME
        return SelectionStatus.NONE

    def visible_selected_ids(self, visible_set: Iterable[Entity]) -> List[EntityId]:
        """Selected ids among `visible_set`, in visible order."""
        return [entity_id for entity_id in visible_ids(visible_set) if entity_id in self._ids]

    # ---------------------------------------------------------
    # Serialization (dcc.Store payloads)
    # ---------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"selected_ids": list(self._ids)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> SelectionState:
        if not data:
            return cls()
        return cls(data.get("selected_ids", []))
