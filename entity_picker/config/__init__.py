"""
Config package for entity_picker.

Responsible for:
- config models (PickerConfig, ColumnConfig)
- config I/O helpers (load_picker_config / load_entity_frame)
"""

from .model import ColumnConfig, PickerConfig
from .loader import load_entity_frame, load_picker_config

__all__ = ["ColumnConfig", "PickerConfig", "load_entity_frame", "load_picker_config"]
