"""
Attachment helpers for inspector annotations.

Dataclass fields carry annotations in their field metadata, properties and
methods carry them on the underlying function, and value-semantic composite
types are marked with a class attribute.

Examples:
    @dataclass
    class Enemy:
        name: str = "grunt"
        health: int = inspect_field(BoxGroup("Stats"), default=100)
        speed: Annotated[float, BoxGroup("Stats")] = 3.5
        _ticks: int = inspect_field(ShowNonSerializedField(), default=0)

        @property
        @show_native_property()
        def is_alive(self) -> bool:
            return self.health > 0

        @button("Kill")
        def kill(self):
            self.health = 0
"""

import dataclasses
from typing import Any, Callable, Tuple, TypeVar

from pyqt_attrinspect.attributes.annotation_types import (
    Button, InspectorAnnotation, ShowNativeProperty
)
from pyqt_attrinspect.exceptions import AnnotationError
from pyqt_attrinspect.inspector_constants import CONSTANTS

T = TypeVar('T')


def _check_annotations(annotations: Tuple[Any, ...]) -> Tuple[InspectorAnnotation, ...]:
    for annotation in annotations:
        if not isinstance(annotation, InspectorAnnotation):
            raise AnnotationError(f"{annotation!r} is not an inspector annotation")
    return tuple(annotations)


def inspect_field(*annotations: InspectorAnnotation, serialize: bool = True, **field_kwargs) -> Any:
    """
    Create a dataclass field carrying inspector annotations.

    Args:
        *annotations: Annotation instances to attach
        serialize: False marks the field as non-serialized even when public
        **field_kwargs: Forwarded to dataclasses.field (default, default_factory, ...)

    Returns:
        dataclasses.Field with the annotations stored in its metadata
    """
    metadata = dict(field_kwargs.pop('metadata', None) or {})
    metadata[CONSTANTS.METADATA_KEY] = _check_annotations(annotations)
    metadata[CONSTANTS.SERIALIZE_METADATA_KEY] = serialize
    return dataclasses.field(metadata=metadata, **field_kwargs)


def annotate(*annotations: InspectorAnnotation) -> Callable[[T], T]:
    """Decorator attaching annotations to a method, or to a property's getter."""
    checked = _check_annotations(annotations)

    def decorator(obj):
        target = obj.fget if isinstance(obj, property) else obj
        existing = getattr(target, CONSTANTS.FUNCTION_ANNOTATIONS_ATTR, ())
        setattr(target, CONSTANTS.FUNCTION_ANNOTATIONS_ATTR, tuple(existing) + checked)
        return obj

    return decorator


def button(text: str = None) -> Callable[[T], T]:
    """Decorator: draw the method as a button labelled ``text``."""
    return annotate(Button(text))


def show_native_property() -> Callable[[T], T]:
    """Decorator: draw the property read-only in the native property section."""
    return annotate(ShowNativeProperty())


def value_type(cls: T) -> T:
    """
    Class decorator marking a class as a composite value type.

    Values of marked types are copied out on read and unfolded field by field,
    with nested edits written back up through every copied level.
    """
    setattr(cls, CONSTANTS.VALUE_TYPE_MARKER_ATTR, True)
    return cls
