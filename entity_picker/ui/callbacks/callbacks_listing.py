from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import dash
from dash import Input, Output, no_update

from entity_picker.core.exceptions import ListingQueryError
from entity_picker.core.table_state import Pagination, TableState
from entity_picker.listing.query import parse_filter_query, sorters_from_sort_by
from entity_picker.ui.ids import IDs

if TYPE_CHECKING:
    from entity_picker.config.model import PickerConfig
    from entity_picker.ui.config import AppConfig

logger = logging.getLogger(__name__)


def build_table_state(
        picker_config: PickerConfig,
        sort_by: Optional[List[Dict[str, Any]]],
        filter_query: Optional[str],
        page_current: Optional[int],
        page_size: Optional[int],
) -> TableState:
    """
    Pure helper turning DataTable query props into a TableState.

    DataTable pages are 0-based, TableState pages 1-based. Sorting on columns
    configured as not sortable is dropped.

    :raises ListingQueryError: on a malformed filter_query.
    """
    sortable = {c.id for c in picker_config.columns if c.sortable}
    sorters = [s for s in sorters_from_sort_by(sort_by) if s.field in sortable]

    return TableState(
        sorters=sorters,
        filters=parse_filter_query(filter_query),
        pagination=Pagination(
            current=(page_current or 0) + 1,
            page_size=page_size or picker_config.page_size,
            mode=picker_config.pagination_mode,
        ),
    )


def served_page_current(requested: Optional[int], served: int) -> Any:
    """0-based page_current to write back, or no_update when the table already shows it."""
    if (requested or 0) == served - 1:
        return no_update
    return served - 1


def listing_status_text(total: int, n_visible: int) -> str:
    if total == n_visible:
        return f"{total} entities"
    return f"Showing {n_visible} of {total} entities"


def register_listing_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Table query -> ListingProvider -> visible set
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.ENTITY_TABLE, "data"),
        Output(IDs.Control.ENTITY_TABLE, "page_count"),
        Output(IDs.Control.LISTING_STATUS, "children"),
        Output(IDs.Store.TABLE_STATE, "data"),
        Output(IDs.Control.ENTITY_TABLE, "page_current"),
        Input(IDs.Control.ENTITY_TABLE, "sort_by"),
        Input(IDs.Control.ENTITY_TABLE, "filter_query"),
        Input(IDs.Control.ENTITY_TABLE, "page_current"),
        Input(IDs.Control.ENTITY_TABLE, "page_size"),
    )
    def update_visible_set(sort_by, filter_query, page_current, page_size):
        try:
            table_state = build_table_state(
                ctx.picker_config, sort_by, filter_query, page_current, page_size
            )
            page = ctx.provider.fetch(table_state)
        except ListingQueryError as e:
            logger.warning("Rejected listing query: %s", e, extra={"filter_query": filter_query})
            return no_update, no_update, str(e), no_update, no_update

        table_state.pagination.current = page.current
        page_count = max(1, math.ceil(page.total / table_state.pagination.page_size))
        return (
            page.records(),
            page_count,
            listing_status_text(page.total, len(page.entities)),
            table_state.to_dict(),
            served_page_current(page_current, page.current),
        )
