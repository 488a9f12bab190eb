"""
Declarative inspector annotations and their attachment helpers.
"""

from .annotation_types import (
    AnnotationMeta,
    BoxGroup,
    Button,
    ClassificationPolicy,
    ConditionOperator,
    Foldout,
    HideIf,
    InspectorAnnotation,
    Label,
    NonSerialized,
    ReadOnly,
    ShowIf,
    ShowNativeProperty,
    ShowNonSerializedField,
)
from .declare import annotate, button, inspect_field, show_native_property, value_type

__all__ = [
    "AnnotationMeta",
    "BoxGroup",
    "Button",
    "ClassificationPolicy",
    "ConditionOperator",
    "Foldout",
    "HideIf",
    "InspectorAnnotation",
    "Label",
    "NonSerialized",
    "ReadOnly",
    "ShowIf",
    "ShowNativeProperty",
    "ShowNonSerializedField",
    "annotate",
    "button",
    "inspect_field",
    "show_native_property",
    "value_type",
]
