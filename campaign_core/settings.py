"""
Settings management for detection configuration.

Provides persistent JSON storage of configuration overrides and a thread-safe
store that swaps in a freshly loaded configuration as one atomic step.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from campaign_core.config import DEFAULT_CONFIG, DetectionConfig
from campaign_core.constants import SETTINGS_FILE

logger = logging.getLogger(__name__)


def _is_overridable(value: Any) -> bool:
    """Scalars and flat tuples of strings can round-trip through JSON."""
    if isinstance(value, (bool, int, float, str)):
        return True
    if isinstance(value, tuple):
        return all(isinstance(item, str) for item in value)
    return False


# Fields that can be set from a settings file
OVERRIDABLE_FIELDS = tuple(
    name for name in DetectionConfig.field_names()
    if _is_overridable(getattr(DEFAULT_CONFIG, name))
)


class SettingsManager:
    """
    Manages detection settings stored as JSON overrides.

    Only values that differ from the defaults are written, so a settings file
    stays small and picks up new defaults automatically.

    Usage:
        manager = SettingsManager()
        config = manager.load()

        config = config.with_overrides(campaign_threshold=60)

        manager.save(config)
    """

    def __init__(self, settings_file: Optional[str] = None):
        """
        Initialize the settings manager.

        Args:
            settings_file: Path to settings file. Defaults to SETTINGS_FILE constant.
        """
        self.settings_file = Path(settings_file or SETTINGS_FILE)

    def load(self, base: DetectionConfig = DEFAULT_CONFIG) -> DetectionConfig:
        """
        Load settings from file.

        Args:
            base: Configuration the overrides are applied to

        Returns:
            DetectionConfig with loaded values, or ``base`` if no settings exist
        """
        if not self.settings_file.exists():
            return base

        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse settings file: {e}")
            return base
        except OSError as e:
            logger.error(f"Failed to load settings: {e}")
            return base

        if not isinstance(data, dict):
            logger.error("Settings file must contain a JSON object")
            return base

        return base.with_overrides(**self.filter_overrides(data, base))

    def save(self, config: DetectionConfig) -> bool:
        """
        Save settings to file.

        Args:
            config: DetectionConfig to save

        Returns:
            True if saved successfully
        """
        data = self.to_overrides(config)

        try:
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            return True
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
            return False

    @staticmethod
    def filter_overrides(data: Dict[str, Any], base: DetectionConfig = DEFAULT_CONFIG) -> Dict[str, Any]:
        """Keep only known, well-typed override values."""
        overrides = {}
        for key, value in data.items():
            if key not in OVERRIDABLE_FIELDS:
                logger.warning(f"Ignoring unknown setting: {key}")
                continue

            current = getattr(base, key)
            if isinstance(current, tuple):
                valid = isinstance(value, list) and all(isinstance(item, str) for item in value)
            elif isinstance(current, float):
                valid = isinstance(value, (int, float)) and not isinstance(value, bool)
            else:
                valid = type(value) is type(current)

            if not valid:
                logger.warning(f"Ignoring setting '{key}' with invalid value: {value!r}")
                continue
            overrides[key] = value
        return overrides

    @staticmethod
    def to_overrides(config: DetectionConfig) -> Dict[str, Any]:
        """Fields of ``config`` that differ from the defaults."""
        data = {}
        for name in OVERRIDABLE_FIELDS:
            value = getattr(config, name)
            if value != getattr(DEFAULT_CONFIG, name):
                data[name] = list(value) if isinstance(value, tuple) else value
        return data


class ConfigStore:
    """
    Holds the active configuration and reloads it atomically.

    Readers take a snapshot through ``current`` once per batch; ``reload``
    builds the new configuration first and then swaps the reference under a
    lock, so no reader ever sees a half-updated table set.
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        settings_manager: Optional[SettingsManager] = None,
    ):
        self._lock = threading.Lock()
        self._config = config or DEFAULT_CONFIG
        self.settings_manager = settings_manager

    @property
    def current(self) -> DetectionConfig:
        with self._lock:
            return self._config

    def replace(self, config: DetectionConfig) -> None:
        with self._lock:
            self._config = config
        logger.info("Detection configuration replaced")

    def reload(self) -> DetectionConfig:
        """Load settings from disk and make them the active configuration."""
        manager = self.settings_manager or SettingsManager()
        config = manager.load()
        self.replace(config)
        return config
