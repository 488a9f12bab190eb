"""
Inspector constants for eliminating magic strings throughout the inspector.

Centralizes metadata keys, marker attribute names, persistence key parts and
UI text used by discovery, classification and the host adapters.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class InspectorConstants:
    """
    Centralized constants for the attribute inspector.

    Categories:
    - Annotation attachment (metadata keys, marker attributes)
    - Foldout persistence key parts
    - Section titles and warning text
    """

    # Annotation attachment
    METADATA_KEY: str = "inspector"
    SERIALIZE_METADATA_KEY: str = "serialize"
    FUNCTION_ANNOTATIONS_ATTR: str = "__inspector_annotations__"
    VALUE_TYPE_MARKER_ATTR: str = "__inspector_value_type__"
    IDENTITY_ATTR: str = "inspector_identity"
    PRIVATE_PREFIX: str = "_"
    UNITY_STYLE_PREFIX: str = "m_"

    # Foldout persistence keys
    KEY_SEPARATOR: str = "."
    GROUP_SCOPE: str = "group"
    FIELD_SCOPE: str = "field"

    # Section titles
    NON_SERIALIZED_FIELDS_TITLE: str = "Non-Serialized Fields"
    NATIVE_PROPERTIES_TITLE: str = "Native Properties"
    BUTTONS_TITLE: str = "Buttons"

    # Warnings drawn into the inspector
    BUTTON_ARGS_WARNING: str = "{name}: buttons only work on methods that take no arguments"


CONSTANTS = InspectorConstants()
