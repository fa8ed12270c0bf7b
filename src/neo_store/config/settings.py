"""
Store settings for neo-store.

Environment driven configuration built on pydantic settings, with an
optional YAML or JSON file source for hosts that keep their settings on disk.
"""
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.value_objects.permission import Permission

logger = logging.getLogger(__name__)


class StoreSettings(BaseSettings):
    """Settings shared by every store node of a tree.

    Values come from ``NEO_STORE_*`` environment variables unless passed
    explicitly.
    """

    model_config = SettingsConfigDict(
        env_prefix="NEO_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Permission applied to keys without a registry entry
    default_policy: Permission = Field(default=Permission.READ_WRITE)

    # Intermediate segment that spawns a child store; None disables it
    child_store_key: Optional[str] = Field(default="store")

    # Reject writes that would make a store contain itself
    detect_cycles: bool = Field(default=True)

    # Emit a DEBUG line for every read and write
    log_operations: bool = Field(default=False)

    @field_validator("default_policy", mode="before")
    @classmethod
    def _coerce_policy(cls, value: Any) -> Permission:
        return Permission.coerce(value)

    @field_validator("child_store_key", mode="before")
    @classmethod
    def _validate_child_store_key(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        value = str(value)
        if ":" in value:
            raise ValueError("child_store_key cannot contain the path delimiter ':'")
        return value

    @classmethod
    def from_file(cls, file_path: Union[str, Path], **overrides: Any) -> "StoreSettings":
        """Create settings from a YAML or JSON file.

        Args:
            file_path: Path to the configuration file
            **overrides: Values taking precedence over the file

        Returns:
            Settings instance

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file format is not supported
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            if file_path.suffix.lower() in [".yaml", ".yml"]:
                config_data = yaml.safe_load(f) or {}
            elif file_path.suffix.lower() == ".json":
                config_data = json.load(f)
            else:
                raise ValueError(f"Unsupported configuration file format: {file_path.suffix}")

        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {file_path}")

        # Allow the settings to live under a top-level "store" section
        if isinstance(config_data.get("store"), dict):
            config_data = config_data["store"]

        logger.debug(f"Loaded store settings from {file_path}")
        return cls(**{**config_data, **overrides})

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a plain dictionary."""
        return {
            "default_policy": self.default_policy.value,
            "child_store_key": self.child_store_key,
            "detect_cycles": self.detect_cycles,
            "log_operations": self.log_operations,
        }


@lru_cache()
def get_settings() -> StoreSettings:
    """Get the process-wide store settings."""
    return StoreSettings()
