from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

PAGINATION_OFF = "off"
PAGINATION_SERVER = "server"
PAGINATION_MODES = (PAGINATION_OFF, PAGINATION_SERVER)

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True)
class Sorter:
    field: str
    order: str = SORT_ASC


@dataclass(frozen=True)
class FilterCondition:
    """
    One column filter, e.g. FilterCondition("name", "contains", "acme").

    Operators follow the DataTable filter_query syntax:
    "=", "!=", "<", "<=", ">", ">=", "contains", "datestartswith".
    """
    field: str
    operator: str
    value: Any


@dataclass(frozen=True)
class Pagination:
    current: int = 1
    page_size: int = 10
    mode: str = PAGINATION_OFF


@dataclass
class TableState:
    """
    Query state of the listing table.

    Fields:

    - sorters: Columns to sort by, applied in order.
    - filters: Column filters, combined with AND.
    - pagination: Current page (1-based), page size and mode. With mode "off"
      the provider returns every matching row.

    The selection core never reads this; it only decides which visible set the
    listing provider returns. It is persisted in the browser so the dialog
    reopens with the same view.
    """

    sorters: List[Sorter] = field(default_factory=list)
    filters: List[FilterCondition] = field(default_factory=list)
    pagination: Pagination = field(default_factory=Pagination)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> TableState:
        if not data:
            return cls()
        pagination = data.get("pagination") or {}
        return cls(
            sorters=[
                Sorter(field=s["field"], order=s.get("order", SORT_ASC))
                for s in data.get("sorters", [])
            ],
            filters=[
                FilterCondition(field=f["field"], operator=f["operator"], value=f.get("value"))
                for f in data.get("filters", [])
            ],
            pagination=Pagination(
                current=int(pagination.get("current", 1)),
                page_size=int(pagination.get("page_size", 10)),
                mode=pagination.get("mode", PAGINATION_OFF),
            ),
        )
