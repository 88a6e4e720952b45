from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd

from entity_picker.config.model import ColumnConfig, PickerConfig, default_columns
from entity_picker.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_picker_config(root: Path) -> PickerConfig:
    """
    Load the picker configuration from a directory.

    Expected structure:

        root/
            global.json
            data/
                vendors.json   (or .csv, wherever 'data_file' points)

    'data_file' is resolved relative to 'root' unless it is absolute.

    :param root: Directory containing 'global.json'.
    :return: A validated PickerConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if global.json holds invalid values.
    """
    root = Path(root)
    logger.info(
        "Loading picker config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    with global_path.open() as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    raw_columns = raw.get("columns")
    columns = (
        [ColumnConfig.from_raw(c) for c in raw_columns]
        if raw_columns
        else default_columns()
    )

    data_file_raw = raw.get("data_file")
    if data_file_raw is None:
        data_file = None
    else:
        data_file_path = Path(data_file_raw)
        data_file = data_file_path if data_file_path.is_absolute() else (root / data_file_path).resolve()

    try:
        page_size = int(raw.get("page_size", 10))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"page_size must be an integer: {e}") from e

    config = PickerConfig(
        ui_title=raw.get("ui_title", "Entity Picker"),
        title=raw.get("title", "Select entities"),
        description=raw.get("description"),
        page_size=page_size,
        pagination_mode=raw.get("pagination_mode", "off"),
        columns=columns,
        data_file=data_file,
    )
    config.validate()

    logger.info(
        "Picker config loaded",
        extra={
            "config_root": str(root),
            "columns": [c.id for c in config.columns],
            "pagination_mode": config.pagination_mode,
            "data_file": str(data_file) if data_file else None,
        },
    )
    return config


def load_entity_frame(config: PickerConfig) -> pd.DataFrame:
    """
    Read the entity listing referenced by config.data_file.

    JSON files hold a list of records, CSV files one row per entity. Without a
    data file the listing is empty.
    """
    path = config.data_file
    if path is None:
        logger.warning("No data_file configured; the listing will be empty")
        return pd.DataFrame({c.id: [] for c in config.columns})

    if not path.is_file():
        raise ConfigError(f"Entity listing not found at {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        frame = pd.read_json(path, orient="records")
    elif suffix == ".csv":
        frame = pd.read_csv(path)
    else:
        raise ConfigError(f"Unsupported entity listing format: {path.suffix!r}")

    logger.info(
        "Entity listing loaded",
        extra={"data_file": str(path), "n_entities": len(frame)},
    )
    return frame
