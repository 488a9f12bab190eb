"""
Persisted boolean cells.

BoolSettingsStore is the editor-settings collaborator: a flat key → bool
store. SavedBool is a handle over one key that reads once and writes
through on every change.
"""

from abc import ABC, abstractmethod
from typing import Dict
import logging

logger = logging.getLogger(__name__)


class BoolSettingsStore(ABC):
    """ABC for stores that persist boolean flags by string key."""

    @abstractmethod
    def load(self, key: str, default: bool) -> bool:
        """
        Read the flag stored under ``key``.

        Args:
            key: Persistence key
            default: Value returned when nothing was stored yet
        """
        pass

    @abstractmethod
    def save(self, key: str, value: bool) -> None:
        """Store ``value`` under ``key``."""
        pass

    def load_or_create(self, key: str, default: bool) -> 'SavedBool':
        """Return a write-through handle for ``key``."""
        return SavedBool(self, key, default)


class SavedBool:
    """Write-through handle over one key of a BoolSettingsStore."""

    def __init__(self, store: BoolSettingsStore, key: str, default: bool):
        self._store = store
        self._key = key
        self._value = bool(store.load(key, default))

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> bool:
        return self._value

    @value.setter
    def value(self, value: bool) -> None:
        value = bool(value)
        if value == self._value:
            return
        self._value = value
        self._store.save(self._key, value)

    def __repr__(self):
        return f"SavedBool({self._key!r}, {self._value})"


class InMemoryBoolStore(BoolSettingsStore):
    """Process-lifetime store; the default when no editor settings are wired in."""

    def __init__(self):
        self._values: Dict[str, bool] = {}

    def load(self, key: str, default: bool) -> bool:
        return self._values.get(key, default)

    def save(self, key: str, value: bool) -> None:
        self._values[key] = value
        logger.debug(f"Saved {key}={value}")

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
