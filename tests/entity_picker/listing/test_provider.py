from __future__ import annotations

import pandas as pd
import pytest

from entity_picker.core.exceptions import ConfigError, ListingQueryError
from entity_picker.core.table_state import (
    PAGINATION_SERVER,
    FilterCondition,
    Pagination,
    Sorter,
    TableState,
)
from entity_picker.listing.provider import DataFrameListingProvider


def _make_provider():
    frame = pd.DataFrame(
        {
            "id": [1, 2, 3, 4, 5],
            "name": ["Prusament", "Polymaker", "eSun", "Sunlu", None],
            "spools": [10, 3, 7, 3, 0],
        }
    )
    return DataFrameListingProvider(frame)


def _ids(page):
    return [e.id for e in page.entities]


def test_fetch_without_query_returns_everything_in_order():
    page = _make_provider().fetch(TableState())

    assert _ids(page) == [1, 2, 3, 4, 5]
    assert page.total == 5


def test_contains_filter_is_case_insensitive():
    state = TableState(filters=[FilterCondition("name", "contains", "SUN")])

    page = _make_provider().fetch(state)

    assert _ids(page) == [3, 4]
    assert page.total == 2


def test_contains_filter_does_not_match_missing_values():
    state = TableState(filters=[FilterCondition("name", "contains", "none")])

    assert _ids(_make_provider().fetch(state)) == []


def test_numeric_comparison_filters_are_combined():
    state = TableState(
        filters=[FilterCondition("spools", ">=", 3), FilterCondition("id", "!=", "2")]
    )

    assert _ids(_make_provider().fetch(state)) == [1, 3, 4]


def test_numeric_comparison_with_text_raises():
    state = TableState(filters=[FilterCondition("spools", ">", "many")])

    with pytest.raises(ListingQueryError):
        _make_provider().fetch(state)


def test_multi_column_sort_is_stable():
    state = TableState(sorters=[Sorter("spools", "asc"), Sorter("id", "desc")])

    assert _ids(_make_provider().fetch(state)) == [5, 4, 2, 3, 1]


def test_server_pagination_slices_after_filter_and_sort():
    state = TableState(
        sorters=[Sorter("id", "desc")],
        pagination=Pagination(current=2, page_size=2, mode=PAGINATION_SERVER),
    )

    page = _make_provider().fetch(state)

    assert _ids(page) == [3, 2]
    assert page.total == 5


def test_pagination_off_ignores_page_size():
    state = TableState(pagination=Pagination(current=3, page_size=2))

    assert len(_make_provider().fetch(state).entities) == 5


def test_server_page_past_the_end_is_clamped_after_filter():
    names = [f"Vendor {i}" for i in range(30)]
    names[17] = "Fizzle"
    provider = DataFrameListingProvider(pd.DataFrame({"id": range(30), "name": names}))
    state = TableState(
        filters=[FilterCondition("name", "contains", "zz")],
        pagination=Pagination(current=3, page_size=10, mode=PAGINATION_SERVER),
    )

    page = provider.fetch(state)

    assert _ids(page) == [17]
    assert page.total == 1
    assert page.current == 1


def test_server_page_past_the_end_of_empty_result_is_first_page():
    state = TableState(
        filters=[FilterCondition("name", "contains", "nothing")],
        pagination=Pagination(current=4, page_size=2, mode=PAGINATION_SERVER),
    )

    page = _make_provider().fetch(state)

    assert page.entities == []
    assert page.total == 0
    assert page.current == 1


def test_unknown_column_raises():
    with pytest.raises(ListingQueryError, match="Unknown column"):
        _make_provider().fetch(TableState(filters=[FilterCondition("nope", "=", 1)]))
    with pytest.raises(ListingQueryError, match="Unknown column"):
        _make_provider().fetch(TableState(sorters=[Sorter("nope")]))


def test_missing_values_become_none_in_records():
    page = _make_provider().fetch(TableState(filters=[FilterCondition("id", "=", 5)]))

    assert page.records() == [{"id": 5, "name": None, "spools": 0}]


def test_frame_without_id_column_rejected():
    with pytest.raises(ConfigError, match="no 'id' column"):
        DataFrameListingProvider(pd.DataFrame({"name": ["a"]}))


def test_frame_with_duplicate_ids_rejected():
    with pytest.raises(ConfigError, match="duplicate ids"):
        DataFrameListingProvider(pd.DataFrame({"id": [1, 1, 2], "name": ["a", "b", "c"]}))
