from __future__ import annotations

import logging
import math
import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

import numpy as np
import pandas as pd

from entity_picker.core.entity import Entity
from entity_picker.core.exceptions import ConfigError, ListingQueryError
from entity_picker.core.table_state import PAGINATION_SERVER, SORT_ASC, FilterCondition, TableState

logger = logging.getLogger(__name__)

_COMPARISONS: Dict[str, Callable[[Any, Any], Any]] = {
    "=": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


@dataclass
class ListingPage:
    """
    The visible set for one TableState, plus the number of matching rows.

    `current` is the 1-based page actually served, which may differ from the
    requested one when the request ran past the last page.
    """
    entities: List[Entity] = field(default_factory=list)
    total: int = 0
    current: int = 1

    def records(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self.entities]


class ListingProvider(ABC):
    """
    Abstract source of the visible set.

    Implementations own the query (filter, sort, page); callers re-query
    whenever the TableState changes.
    """

    @abstractmethod
    def fetch(self, table_state: TableState) -> ListingPage:
        ...


class DataFrameListingProvider(ListingProvider):
    """
    In-memory provider over a pandas DataFrame with one row per entity.
    """

    def __init__(self, frame: pd.DataFrame):
        if "id" not in frame.columns:
            raise ConfigError("Entity listing has no 'id' column")
        ids = frame["id"]
        if not ids.is_unique:
            dupes = sorted(ids[ids.duplicated()].astype(str).unique())
            raise ConfigError(f"Entity listing has duplicate ids: {dupes}")

        self.frame = frame.reset_index(drop=True)

    def _require_column(self, name: str) -> pd.Series:
        if name not in self.frame.columns:
            raise ListingQueryError(f"Unknown column: {name!r}")
        return self.frame[name]

    def _condition_mask(self, cond: FilterCondition) -> np.ndarray:
        series = self._require_column(cond.field)

        if cond.operator == "contains":
            return series.fillna("").astype(str).str.contains(
                str(cond.value), case=False, regex=False, na=False
            ).to_numpy()

        if cond.operator == "datestartswith":
            return series.fillna("").astype(str).str.startswith(str(cond.value), na=False).to_numpy()

        compare = _COMPARISONS.get(cond.operator)
        if compare is None:
            raise ListingQueryError(f"Unsupported filter operator: {cond.operator!r}")

        if pd.api.types.is_numeric_dtype(series):
            try:
                value = float(cond.value)
            except (TypeError, ValueError):
                raise ListingQueryError(
                    f"Column {cond.field!r} is numeric, cannot compare with {cond.value!r}"
                ) from None
            return compare(series, value).fillna(False).to_numpy(dtype=bool)

        return compare(series.astype(str), str(cond.value)).to_numpy(dtype=bool)

    def fetch(self, table_state: TableState) -> ListingPage:
        frame = self.frame

        mask = np.ones(len(frame), dtype=bool)
        for cond in table_state.filters:
            mask &= self._condition_mask(cond)
        filtered = frame[mask]

        if table_state.sorters:
            for s in table_state.sorters:
                self._require_column(s.field)
            filtered = filtered.sort_values(
                by=[s.field for s in table_state.sorters],
                ascending=[s.order == SORT_ASC for s in table_state.sorters],
                kind="mergesort",
            )

        total = len(filtered)

        pagination = table_state.pagination
        current = 1
        if pagination.mode == PAGINATION_SERVER:
            # a narrower filter can leave the requested page past the end
            last = max(1, math.ceil(total / pagination.page_size))
            current = min(max(pagination.current, 1), last)
            start = (current - 1) * pagination.page_size
            filtered = filtered.iloc[start:start + pagination.page_size]

        # NaN is not JSON serialisable for the table store
        records = filtered.astype(object).where(pd.notna(filtered), None).to_dict("records")
        entities = [Entity.from_record(r) for r in records]

        logger.debug(
            "Listing fetched",
            extra={
                "n_filters": len(table_state.filters),
                "n_sorters": len(table_state.sorters),
                "pagination_mode": pagination.mode,
                "total": total,
                "page": current,
                "n_visible": len(entities),
            },
        )
        return ListingPage(entities=entities, total=total, current=current)
