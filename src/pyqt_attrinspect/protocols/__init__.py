"""
Configuration and widget protocols.

The widget ABCs are plain ABCs with no Qt dependency; the PyQt6 adapters
implementing them live in pyqt_attrinspect.qt.
"""

from .inspector_config import InspectorConfig, set_inspector_config, get_inspector_config
from .widget_protocols import (
    ValueGettable,
    ValueSettable,
    EnumSelectable,
    ChangeSignalEmitter,
)

__all__ = [
    "InspectorConfig",
    "set_inspector_config",
    "get_inspector_config",
    "ValueGettable",
    "ValueSettable",
    "EnumSelectable",
    "ChangeSignalEmitter",
]
