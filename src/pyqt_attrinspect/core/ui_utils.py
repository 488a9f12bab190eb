"""
UI utilities for the attribute inspector.

Label formatting shared by the pipeline and the host adapters.
"""

import re

from pyqt_attrinspect.attributes.annotation_types import Button, Label
from pyqt_attrinspect.inspector_constants import CONSTANTS

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def nicify_name(name: str) -> str:
    """
    Convert a member name to a display label.

    'max_speed' -> 'Max Speed', 'maxSpeed' -> 'Max Speed',
    'm_Health' -> 'Health', '_ticks' -> 'Ticks', 'HTTPPort' -> 'HTTP Port'
    """
    if name.startswith(CONSTANTS.UNITY_STYLE_PREFIX):
        name = name[len(CONSTANTS.UNITY_STYLE_PREFIX):]
    name = name.lstrip(CONSTANTS.PRIVATE_PREFIX)
    words = _WORD_BOUNDARY.sub(" ", name.replace("_", " ")).split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def member_label(member) -> str:
    """Display label of a member: Label annotation text, else the nicified name."""
    label = member.get_attribute(Label)
    if label is not None:
        return label.text
    return nicify_name(member.name)


def button_label(member) -> str:
    """Button caption: Button.text when given, else the nicified method name."""
    annotation = member.get_attribute(Button)
    if annotation is not None and annotation.text:
        return annotation.text
    return nicify_name(member.name)
