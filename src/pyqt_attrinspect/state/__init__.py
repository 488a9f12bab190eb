"""
Persisted expand/collapse state.
"""

from .settings_store import BoolSettingsStore, InMemoryBoolStore, SavedBool
from .foldout_state_store import FoldoutKey, FoldoutStateStore, identity_token

__all__ = [
    "BoolSettingsStore",
    "InMemoryBoolStore",
    "SavedBool",
    "FoldoutKey",
    "FoldoutStateStore",
    "identity_token",
]
