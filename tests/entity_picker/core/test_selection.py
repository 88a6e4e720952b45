from __future__ import annotations

import pytest

from entity_picker.core.entity import Entity
from entity_picker.core.selection import SelectionState, SelectionStatus


def _entities(*ids):
    return [Entity(id=i, attributes={"name": f"vendor-{i}"}) for i in ids]


@pytest.mark.parametrize("n_toggles", [0, 1, 2, 3, 4, 7])
def test_membership_follows_toggle_parity(n_toggles):
    sel = SelectionState()
    for _ in range(n_toggles):
        sel.toggle(42)

    assert sel.is_selected(42) is (n_toggles % 2 == 1)


def test_toggle_returns_new_membership():
    sel = SelectionState()
    assert sel.toggle("a") is True
    assert sel.toggle("a") is False


def test_toggle_accepts_ids_outside_any_visible_set():
    sel = SelectionState()
    sel.toggle(999)

    assert sel.is_selected(999)
    assert sel.count() == 1
    assert sel.status(_entities(1, 2)) == SelectionStatus.NONE


def test_empty_visible_set_is_all_for_any_selection():
    assert SelectionState().status([]) == SelectionStatus.ALL
    assert SelectionState([1, 2, 3]).status([]) == SelectionStatus.ALL


def test_status_none_some_all():
    visible = _entities(1, 2, 3)
    sel = SelectionState()
    assert sel.status(visible) == SelectionStatus.NONE

    sel.toggle(2)
    assert sel.status(visible) == SelectionStatus.SOME

    sel.toggle(1)
    sel.toggle(3)
    assert sel.status(visible) == SelectionStatus.ALL


def test_set_all_visible_true_then_false():
    visible = _entities(1, 2, 3)
    sel = SelectionState([2])

    sel.set_all_visible(visible, True)
    assert sel.status(visible) == SelectionStatus.ALL
    assert sel.count() == 3

    sel.set_all_visible(visible, False)
    assert sel.status(visible) == SelectionStatus.NONE
    assert sel.count() == 0


def test_set_all_visible_only_touches_visible_ids():
    page_1 = _entities(1, 2)
    page_2 = _entities(3, 4)
    sel = SelectionState()

    sel.set_all_visible(page_1, True)
    sel.set_all_visible(page_2, True)
    sel.set_all_visible(page_2, False)

    assert sel.is_selected(1)
    assert sel.is_selected(2)
    assert not sel.is_selected(3)
    assert sel.count() == 2
    assert sel.status(page_1) == SelectionStatus.ALL


def test_set_all_visible_true_is_idempotent():
    visible = _entities(1, 2, 3)
    once = SelectionState([7])
    once.set_all_visible(visible, True)

    twice = SelectionState([7])
    twice.set_all_visible(visible, True)
    twice.set_all_visible(visible, True)

    assert set(twice) == set(once) == {1, 2, 3, 7}
    assert twice.count() == 4


def test_selection_survives_visible_set_change():
    sel = SelectionState()
    first_view = _entities("A", "B")
    second_view = _entities("C", "D")

    sel.toggle("A")
    assert sel.status(first_view) == SelectionStatus.SOME

    assert sel.is_selected("A")
    assert sel.count() == 1
    assert sel.status(second_view) == SelectionStatus.NONE


def test_status_is_recomputed_not_cached():
    sel = SelectionState([1])
    visible = _entities(1)
    assert sel.status(visible) == SelectionStatus.ALL

    visible = _entities(1, 2)
    assert sel.status(visible) == SelectionStatus.SOME


def test_no_duplicate_ids():
    sel = SelectionState([1, 1, 2])
    sel.set_all_visible(_entities(1, 2), True)

    assert sel.count() == 2
    assert list(sel) == [1, 2]


def test_visible_selected_ids_keeps_visible_order():
    sel = SelectionState([3, 1, 99])
    assert sel.visible_selected_ids(_entities(1, 2, 3)) == [1, 3]


def test_to_dict_from_dict_roundtrip():
    sel = SelectionState(["x", 5])
    rebuilt = SelectionState.from_dict(sel.to_dict())

    assert list(rebuilt) == ["x", 5]
    assert SelectionState.from_dict(None).count() == 0
