from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Mapping

EntityId = Hashable


@dataclass(frozen=True)
class Entity:
    """
    A selectable record as returned by the listing provider.

    Only `id` is interpreted. Everything else (name, contact, etc.) is kept in
    `attributes` for display and is handed back untouched on commit.
    """

    id: EntityId
    attributes: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def name(self) -> Any:
        return self.attributes.get("name")

    def to_dict(self) -> Dict[str, Any]:
        return {**self.attributes, "id": self.id}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Entity:
        if "id" not in record:
            raise KeyError(f"Entity record has no 'id' field: {record!r}")
        attributes = {k: v for k, v in record.items() if k != "id"}
        return cls(id=record["id"], attributes=attributes)


def entities_from_records(records: Iterable[Mapping[str, Any]] | None) -> List[Entity]:
    """Build an ordered visible set from DataTable-style row dicts."""
    return [Entity.from_record(r) for r in (records or [])]


def visible_ids(visible_set: Iterable[Entity]) -> List[EntityId]:
    return [e.id for e in visible_set]
