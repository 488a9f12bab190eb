"""
Per-target editor session.

Created when an inspector starts showing a target and closed when it stops.
Holds what does not change shape while the session is open: the flagged
non-serialized fields, the flagged native properties, the button methods,
and the foldout state of the target.
"""

import inspect
from typing import Any, List, Optional
import logging

from pyqt_attrinspect.attributes.annotation_types import (
    Button, ShowNativeProperty, ShowNonSerializedField
)
from pyqt_attrinspect.protocols.inspector_config import InspectorConfig, get_inspector_config
from pyqt_attrinspect.reflection.member_discovery import MemberDiscovery
from pyqt_attrinspect.reflection.member_types import Member
from pyqt_attrinspect.state.foldout_state_store import FoldoutStateStore
from pyqt_attrinspect.state.settings_store import BoolSettingsStore

logger = logging.getLogger(__name__)


def _is_shown_non_serialized(member: Member) -> bool:
    return not member.serialized and member.has_attribute(ShowNonSerializedField)


def _is_shown_native(member: Member) -> bool:
    return member.has_attribute(ShowNativeProperty)


def _is_button(member: Member) -> bool:
    return member.has_attribute(Button)


def takes_no_arguments(method: Any) -> bool:
    """Check if a bound method can be called without arguments."""
    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError):
        return False
    return all(
        p.default is not inspect.Parameter.empty
        or p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for p in signature.parameters.values()
    )


class InspectorSession:
    """
    Session state for one inspected target.

    Args:
        target: Inspected object
        settings: Persistent store for foldout flags (in-memory when None)
        config: Inspector configuration (global config when None)
    """

    def __init__(self, target: Any, settings: Optional[BoolSettingsStore] = None,
                 config: Optional[InspectorConfig] = None):
        self.config = config or get_inspector_config()
        self.target = target
        self.foldouts = FoldoutStateStore(settings, self.config.default_foldout_expanded)

        self.non_serialized_fields: List[Member] = MemberDiscovery.all_fields(target, _is_shown_non_serialized)
        self.native_properties: List[Member] = MemberDiscovery.all_properties(target, _is_shown_native)
        self.buttons: List[Member] = MemberDiscovery.all_methods(target, _is_button)
        self._closed = False

        logger.debug(
            f"Session for {type(target).__name__}: {len(self.non_serialized_fields)} non-serialized, "
            f"{len(self.native_properties)} native, {len(self.buttons)} buttons"
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def is_for(self, target: Any) -> bool:
        return not self._closed and self.target is target

    def close(self) -> None:
        """Release cached member lists and foldout handles."""
        if self._closed:
            return
        self.non_serialized_fields = []
        self.native_properties = []
        self.buttons = []
        self.foldouts.clear()
        self.target = None
        self._closed = True
        logger.debug("Session closed")
