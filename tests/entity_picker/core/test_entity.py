from __future__ import annotations

import pytest

from entity_picker.core.entity import Entity, entities_from_records, visible_ids


def test_from_record_splits_id_and_attributes():
    e = Entity.from_record({"id": 4, "name": "Hatchbox", "comment": None})

    assert e.id == 4
    assert e.name == "Hatchbox"
    assert e.attributes == {"name": "Hatchbox", "comment": None}
    assert e.to_dict() == {"id": 4, "name": "Hatchbox", "comment": None}


def test_from_record_without_id_raises():
    with pytest.raises(KeyError, match="no 'id'"):
        Entity.from_record({"name": "nameless"})


def test_entities_from_records_keeps_order_and_handles_none():
    records = [{"id": 2, "name": "b"}, {"id": 1, "name": "a"}]

    assert visible_ids(entities_from_records(records)) == [2, 1]
    assert entities_from_records(None) == []


def test_entities_are_hashable_by_id():
    a = Entity(id=1, attributes={"name": "x"})
    assert {a: "ok"}[Entity(id=1, attributes={"name": "x"})] == "ok"
