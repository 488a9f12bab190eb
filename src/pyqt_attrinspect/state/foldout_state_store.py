"""
Foldout state store.

Maps (owner identity, group or field name) to a persisted expanded/collapsed
flag. Entries are created lazily on first read with the configured default
and are never evicted during a session; writes are visible to the very next
read.

Key format: "{owner_token}.{scope}.{name}" where scope is "group" for foldout
groups and "field" for nested composite fields (name is then the dotted path
from the root target, since copied-out composites get a new identity every
redraw).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from pyqt_attrinspect.inspector_constants import CONSTANTS
from pyqt_attrinspect.protocols.inspector_config import get_inspector_config
from pyqt_attrinspect.state.settings_store import BoolSettingsStore, InMemoryBoolStore, SavedBool

logger = logging.getLogger(__name__)


def identity_token(obj: Any) -> str:
    """
    Instance-stable identity of an inspected object.

    Objects may expose ``inspector_identity`` (a value or a zero-argument
    callable) to keep foldout state across processes; otherwise the token is
    unique for the object's lifetime.
    """
    identity = getattr(obj, CONSTANTS.IDENTITY_ATTR, None)
    if callable(identity):
        identity = identity()
    if identity is not None:
        return str(identity)
    return f"{type(obj).__qualname__}@{id(obj):x}"


@dataclass(frozen=True)
class FoldoutKey:
    """Collision-free persistence key of one foldout."""
    owner_token: str
    scope: str
    name: str

    @classmethod
    def for_group(cls, owner: Any, group_name: str) -> 'FoldoutKey':
        return cls(identity_token(owner), CONSTANTS.GROUP_SCOPE, group_name)

    @classmethod
    def for_field(cls, owner: Any, field_path: str) -> 'FoldoutKey':
        return cls(identity_token(owner), CONSTANTS.FIELD_SCOPE, field_path)

    def __str__(self):
        return CONSTANTS.KEY_SEPARATOR.join((self.owner_token, self.scope, self.name))


class FoldoutStateStore:
    """
    Lazily created, write-through foldout flags for one editor session.

    Examples:
        >>> store = FoldoutStateStore(InMemoryBoolStore())
        >>> key = FoldoutKey.for_group(target, "Advanced")
        >>> store.get(key)
        False
        >>> store.set(key, True)
        >>> store.get(key)
        True
    """

    def __init__(self, settings: Optional[BoolSettingsStore] = None,
                 default_expanded: Optional[bool] = None):
        self._settings = settings if settings is not None else InMemoryBoolStore()
        if default_expanded is None:
            default_expanded = get_inspector_config().default_foldout_expanded
        self._default = default_expanded
        self._handles: Dict[FoldoutKey, SavedBool] = {}

    def _handle(self, key: FoldoutKey) -> SavedBool:
        handle = self._handles.get(key)
        if handle is None:
            handle = self._settings.load_or_create(str(key), self._default)
            self._handles[key] = handle
            logger.debug(f"Created foldout state {key} = {handle.value}")
        return handle

    def get(self, key: FoldoutKey) -> bool:
        """Expanded state of ``key``; creates the entry with the default on first access."""
        return self._handle(key).value

    def set(self, key: FoldoutKey, expanded: bool) -> None:
        """Persist the expanded state of ``key`` immediately."""
        self._handle(key).value = expanded

    def clear(self) -> None:
        """Release cached handles; persisted values stay in the settings store."""
        self._handles.clear()

    def __contains__(self, key: FoldoutKey) -> bool:
        return key in self._handles

    def __len__(self) -> int:
        return len(self._handles)
