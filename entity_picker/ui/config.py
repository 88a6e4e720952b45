from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from entity_picker.config.model import PickerConfig
from entity_picker.listing.provider import ListingProvider


@dataclass
class AppConfig:
    config_root: Path
    picker_config: PickerConfig
    provider: Optional[ListingProvider] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.provider is None:
            raise RuntimeError("AppConfig.provider must be initialized.")
