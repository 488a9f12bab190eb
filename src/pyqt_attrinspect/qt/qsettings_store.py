"""
Foldout flags persisted through QSettings.

Stored under the organization/application from InspectorConfig:
- Linux: ~/.config/<organization>/<application>.conf
- Windows: HKEY_CURRENT_USER\\Software\\<organization>\\<application>
- macOS: ~/Library/Preferences/com.<organization>.<application>.plist
"""

from typing import Optional
import logging

from PyQt6.QtCore import QSettings

from pyqt_attrinspect.protocols.inspector_config import InspectorConfig, get_inspector_config
from pyqt_attrinspect.state.settings_store import BoolSettingsStore

logger = logging.getLogger(__name__)

_GROUP = "foldouts"


class QSettingsBoolStore(BoolSettingsStore):
    """
    BoolSettingsStore over QSettings.

    Args:
        config: Supplies organization and application names (global config when None)
        settings: Explicit QSettings instance, e.g. an INI file in tests
    """

    def __init__(self, config: Optional[InspectorConfig] = None, settings: Optional[QSettings] = None):
        if settings is None:
            config = config or get_inspector_config()
            settings = QSettings(config.settings_organization, config.settings_application)
        self._settings = settings

    def _key(self, key: str) -> str:
        return f"{_GROUP}/{key}"

    def load(self, key: str, default: bool) -> bool:
        return bool(self._settings.value(self._key(key), default, type=bool))

    def save(self, key: str, value: bool) -> None:
        self._settings.setValue(self._key(key), bool(value))
        logger.debug(f"Persisted foldout {key}={value}")

    def sync(self) -> None:
        """Flush pending writes to permanent storage."""
        self._settings.sync()
