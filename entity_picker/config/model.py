from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from entity_picker.core.exceptions import ConfigError
from entity_picker.core.table_state import PAGINATION_MODES, PAGINATION_OFF


@dataclass(frozen=True)
class ColumnConfig:
    """
    One listing column shown in the picker table.
    """
    id: str
    label: str
    sortable: bool = True

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> ColumnConfig:
        if "id" not in raw:
            raise ConfigError(f"Column entry without 'id': {raw!r}")
        return cls(
            id=str(raw["id"]),
            label=str(raw.get("label", raw["id"])),
            sortable=bool(raw.get("sortable", True)),
        )


def default_columns() -> List[ColumnConfig]:
    return [ColumnConfig(id="id", label="Id"), ColumnConfig(id="name", label="Name")]


@dataclass
class PickerConfig:
    ui_title: str = "Entity Picker"
    title: str = "Select entities"
    description: Optional[str] = None
    page_size: int = 10
    pagination_mode: str = PAGINATION_OFF
    columns: List[ColumnConfig] = field(default_factory=default_columns)
    data_file: Optional[Path] = None

    def validate(self) -> None:
        """Reject values the listing table cannot work with."""
        if self.page_size < 1:
            raise ConfigError(f"page_size must be >= 1, got {self.page_size}")
        if self.pagination_mode not in PAGINATION_MODES:
            raise ConfigError(
                f"pagination_mode must be one of {PAGINATION_MODES}, got {self.pagination_mode!r}"
            )
        if not any(c.id == "id" for c in self.columns):
            raise ConfigError("columns must include the 'id' column")
