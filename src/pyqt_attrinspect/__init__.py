"""
pyqt-attrinspect: attribute-driven property inspector for PyQt6.

Renders an editable inspector for any object from declarative annotations
on its fields, properties and methods, instead of hand-written layout code.

Architecture:
- Tier 1 (Attributes): annotation types and attachment helpers
- Tier 2 (Reflection): member discovery over the full class hierarchy
- Tier 3 (Classification / State): grouping, visibility, persisted foldouts
- Tier 4 (Walker / Pipeline): recursive composite unfolding and per-redraw orchestration
- Tier 5 (Hosts): headless RecordingHost and the PyQt6 widget host

Example:
    @dataclass
    class Enemy:
        name: str = "grunt"
        health: int = inspect_field(BoxGroup("Stats"), default=100)
        armor: int = inspect_field(BoxGroup("Stats"), default=5)
        seed: int = inspect_field(Foldout("Advanced"), default=0)

    widget = AttributeInspectorWidget(Enemy())
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .attributes import (
        BoxGroup, Button, Foldout, HideIf, Label, NonSerialized, ReadOnly, ShowIf,
        ShowNativeProperty, ShowNonSerializedField, annotate, button, inspect_field,
        show_native_property, value_type,
    )
    from .classification import AttributeIndex, PropertyClassifier, RenderPlan
    from .host import InspectorHost, RecordingHost
    from .pipeline import InspectorRenderPipeline, InspectorSession
    from .qt import AttributeInspectorWidget, QSettingsBoolStore, QtInspectorHost
    from .reflection import Member, MemberDiscovery
    from .state import FoldoutStateStore, InMemoryBoolStore
    from .walker import RecursiveStructWalker

_EXPORTS = {
    # Annotations
    "BoxGroup": ("pyqt_attrinspect.attributes", "BoxGroup"),
    "Foldout": ("pyqt_attrinspect.attributes", "Foldout"),
    "ShowIf": ("pyqt_attrinspect.attributes", "ShowIf"),
    "HideIf": ("pyqt_attrinspect.attributes", "HideIf"),
    "ConditionOperator": ("pyqt_attrinspect.attributes", "ConditionOperator"),
    "ShowNonSerializedField": ("pyqt_attrinspect.attributes", "ShowNonSerializedField"),
    "ShowNativeProperty": ("pyqt_attrinspect.attributes", "ShowNativeProperty"),
    "Button": ("pyqt_attrinspect.attributes", "Button"),
    "ReadOnly": ("pyqt_attrinspect.attributes", "ReadOnly"),
    "Label": ("pyqt_attrinspect.attributes", "Label"),
    "NonSerialized": ("pyqt_attrinspect.attributes", "NonSerialized"),
    "inspect_field": ("pyqt_attrinspect.attributes", "inspect_field"),
    "annotate": ("pyqt_attrinspect.attributes", "annotate"),
    "button": ("pyqt_attrinspect.attributes", "button"),
    "show_native_property": ("pyqt_attrinspect.attributes", "show_native_property"),
    "value_type": ("pyqt_attrinspect.attributes", "value_type"),
    # Core engine
    "Member": ("pyqt_attrinspect.reflection", "Member"),
    "MemberDiscovery": ("pyqt_attrinspect.reflection", "MemberDiscovery"),
    "AttributeIndex": ("pyqt_attrinspect.classification", "AttributeIndex"),
    "PropertyClassifier": ("pyqt_attrinspect.classification", "PropertyClassifier"),
    "RenderPlan": ("pyqt_attrinspect.classification", "RenderPlan"),
    "FoldoutStateStore": ("pyqt_attrinspect.state", "FoldoutStateStore"),
    "InMemoryBoolStore": ("pyqt_attrinspect.state", "InMemoryBoolStore"),
    "RecursiveStructWalker": ("pyqt_attrinspect.walker", "RecursiveStructWalker"),
    "InspectorRenderPipeline": ("pyqt_attrinspect.pipeline", "InspectorRenderPipeline"),
    "InspectorSession": ("pyqt_attrinspect.pipeline", "InspectorSession"),
    # Configuration
    "InspectorConfig": ("pyqt_attrinspect.protocols", "InspectorConfig"),
    "set_inspector_config": ("pyqt_attrinspect.protocols", "set_inspector_config"),
    "get_inspector_config": ("pyqt_attrinspect.protocols", "get_inspector_config"),
    # Hosts
    "InspectorHost": ("pyqt_attrinspect.host", "InspectorHost"),
    "RecordingHost": ("pyqt_attrinspect.host", "RecordingHost"),
    "QtInspectorHost": ("pyqt_attrinspect.qt", "QtInspectorHost"),
    "QSettingsBoolStore": ("pyqt_attrinspect.qt", "QSettingsBoolStore"),
    "AttributeInspectorWidget": ("pyqt_attrinspect.qt", "AttributeInspectorWidget"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["__version__"] + list(_EXPORTS.keys())
