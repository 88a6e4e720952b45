from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from entity_picker.core.exceptions import ListingQueryError
from entity_picker.core.table_state import SORT_ASC, SORT_DESC, FilterCondition, Sorter

# DataTable emits both symbolic and word operators depending on how the
# filter was typed
OPERATOR_ALIASES = {
    "ge": ">=",
    "le": "<=",
    "lt": "<",
    "gt": ">",
    "ne": "!=",
    "eq": "=",
    "icontains": "contains",
    "scontains": "contains",
}

OPERATORS = ("=", "!=", "<", "<=", ">", ">=", "contains", "datestartswith")

_FILTER_PART_RE = re.compile(
    r"""^\s*\{(?P<field>[^}]+)\}\s*
        (?P<op>>=|<=|!=|=|<|>|\b(?:ge|le|ne|eq|lt|gt|[is]?contains|datestartswith)\b)
        \s*(?P<value>.*?)\s*$""",
    re.VERBOSE,
)

_QUOTES = ("'", '"', "`")
_AND = " && "


def _split_conditions(query: str) -> List[str]:
    """
    Split on " && " outside quoted values. A quote only opens a value at the
    start of a token, so apostrophes inside bare words are literal.
    """
    parts: List[str] = []
    start = 0
    quote = None
    i = 0
    while i < len(query):
        ch = query[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in _QUOTES and (i == 0 or query[i - 1].isspace()):
            quote = ch
        elif query.startswith(_AND, i):
            parts.append(query[start:i])
            i += len(_AND)
            start = i
            continue
        i += 1
    parts.append(query[start:])
    return parts


def _parse_value(raw: str) -> Any:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in _QUOTES:
        quote = raw[0]
        return raw[1:-1].replace("\\" + quote, quote)
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


def parse_filter_query(query: Optional[str]) -> List[FilterCondition]:
    """
    Parse a DataTable `filter_query` string into FilterConditions.

        "{name} contains 'acme' && {id} >= 3"
        -> [("name", "contains", "acme"), ("id", ">=", 3)]

    :raises ListingQueryError: if a fragment cannot be parsed.
    """
    if not query or not query.strip():
        return []

    conditions: List[FilterCondition] = []
    for part in _split_conditions(query):
        match = _FILTER_PART_RE.match(part)
        if match is None:
            raise ListingQueryError(f"Cannot parse filter expression: {part!r}")

        op = OPERATOR_ALIASES.get(match.group("op"), match.group("op"))
        raw_value = match.group("value")
        if not raw_value:
            raise ListingQueryError(f"Filter expression has no value: {part!r}")

        conditions.append(
            FilterCondition(
                field=match.group("field").strip(),
                operator=op,
                value=_parse_value(raw_value),
            )
        )
    return conditions


def format_filter_query(filters: List[FilterCondition]) -> str:
    """Inverse of parse_filter_query, used to restore a persisted table view."""
    parts = []
    for f in filters:
        if isinstance(f.value, str):
            escaped = f.value.replace('"', '\\"')
            value = f'"{escaped}"'
        else:
            value = str(f.value)
        parts.append(f"{{{f.field}}} {f.operator} {value}")
    return _AND.join(parts)


def sorters_from_sort_by(sort_by: Optional[List[Dict[str, Any]]]) -> List[Sorter]:
    sorters: List[Sorter] = []
    for entry in sort_by or []:
        direction = entry.get("direction", SORT_ASC)
        if direction not in (SORT_ASC, SORT_DESC):
            raise ListingQueryError(f"Unknown sort direction: {direction!r}")
        sorters.append(Sorter(field=entry["column_id"], order=direction))
    return sorters


def sort_by_from_sorters(sorters: List[Sorter]) -> List[Dict[str, str]]:
    return [{"column_id": s.field, "direction": s.order} for s in sorters]
