"""
Type utilities for member discovery and the struct walker.

Centralizes the type questions the inspector asks about declared types:
Annotated/Optional unwrapping, ClassVar detection, primitive and enum checks,
and whether a type is a composite value type that must be unfolded.
"""

import dataclasses
import datetime
import decimal
import fractions
import pathlib
import uuid
from enum import Enum
from typing import Any, Annotated, ClassVar, Tuple, Type, get_args, get_origin

from pyqt_attrinspect.inspector_constants import CONSTANTS

PRIMITIVE_TYPES: Tuple[Type, ...] = (bool, int, float, complex, str, bytes, type(None))

# Built-in types with value semantics that still draw as a single leaf.
SIMPLE_BUILTIN_TYPES: Tuple[Type, ...] = (
    pathlib.PurePath,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    decimal.Decimal,
    uuid.UUID,
    fractions.Fraction,
)


class TypeUtils:
    """
    Utility class for declared-type checks.

    All methods are static and tolerate non-class inputs (strings left over
    from unresolvable forward references, typing constructs) by answering False.
    """

    @staticmethod
    def split_annotated(declared_type: Any) -> Tuple[Any, Tuple[Any, ...]]:
        """
        Split Annotated[T, x, y] into (T, (x, y)).

        Example:
            >>> TypeUtils.split_annotated(Annotated[int, "meta"])
            (<class 'int'>, ('meta',))
            >>> TypeUtils.split_annotated(int)
            (<class 'int'>, ())
        """
        if get_origin(declared_type) is Annotated:
            args = get_args(declared_type)
            return args[0], tuple(args[1:])
        return declared_type, ()

    @staticmethod
    def is_classvar(declared_type: Any) -> bool:
        """Check if an annotation is ClassVar or ClassVar[T]."""
        declared_type, _ = TypeUtils.split_annotated(declared_type)
        if declared_type is ClassVar or get_origin(declared_type) is ClassVar:
            return True
        return isinstance(declared_type, str) and declared_type.startswith(("ClassVar", "typing.ClassVar"))

    @staticmethod
    def is_initvar(declared_type: Any) -> bool:
        """Check if an annotation is a dataclasses.InitVar pseudo-field."""
        return isinstance(declared_type, dataclasses.InitVar) or declared_type is dataclasses.InitVar

    @staticmethod
    def is_primitive(declared_type: Any) -> bool:
        """Check if a type is one of the primitive scalar types."""
        return isinstance(declared_type, type) and issubclass(declared_type, PRIMITIVE_TYPES)

    @staticmethod
    def is_enum_type(declared_type: Any) -> bool:
        """Check if a type is an Enum type."""
        return isinstance(declared_type, type) and issubclass(declared_type, Enum)

    @staticmethod
    def is_named_tuple(declared_type: Any) -> bool:
        """Check if a type is a NamedTuple class."""
        return (isinstance(declared_type, type) and issubclass(declared_type, tuple)
                and hasattr(declared_type, '_fields'))

    @staticmethod
    def is_frozen_dataclass(declared_type: Any) -> bool:
        """Check if a type is a dataclass declared with frozen=True."""
        if not (isinstance(declared_type, type) and dataclasses.is_dataclass(declared_type)):
            return False
        return declared_type.__dataclass_params__.frozen

    @staticmethod
    def is_marked_value_type(declared_type: Any) -> bool:
        """Check if a type was marked with the @value_type decorator."""
        return isinstance(declared_type, type) and bool(
            getattr(declared_type, CONSTANTS.VALUE_TYPE_MARKER_ATTR, False)
        )

    @staticmethod
    def is_composite_value_type(declared_type: Any, excluded: Tuple[Type, ...] = ()) -> bool:
        """
        Check if a declared type must be unfolded field by field.

        True for NamedTuples, frozen dataclasses and @value_type classes that are
        not primitive, not an enumeration and not an excluded simple type.
        Optional/union types are never composite because the value may be None.

        Args:
            declared_type: Declared (static) type of a field
            excluded: Additional types that always draw as a single leaf

        Returns:
            True if the struct walker should recurse into the type
        """
        declared_type, _ = TypeUtils.split_annotated(declared_type)
        if not isinstance(declared_type, type):
            return False
        if TypeUtils.is_primitive(declared_type) or TypeUtils.is_enum_type(declared_type):
            return False
        if issubclass(declared_type, SIMPLE_BUILTIN_TYPES + tuple(excluded)):
            return False
        return (TypeUtils.is_named_tuple(declared_type)
                or TypeUtils.is_frozen_dataclass(declared_type)
                or TypeUtils.is_marked_value_type(declared_type))

    @staticmethod
    def type_name(declared_type: Any) -> str:
        """Readable name of a declared type for logging."""
        return getattr(declared_type, '__qualname__', None) or str(declared_type)
