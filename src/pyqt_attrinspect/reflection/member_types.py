"""
Discovered member types.

A Member is an immutable, read-only view of one field, property or method of
an inspected object. Values are never stored on the Member; they are read
from (and written to) an owner passed in explicitly, so the same Member can
describe a sub-field of every copy of a composite value.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Type, TypeVar

from pyqt_attrinspect.attributes.annotation_types import InspectorAnnotation
from pyqt_attrinspect.exceptions import MemberAccessError, WriteBackError

A = TypeVar('A', bound=InspectorAnnotation)


class MemberKind(Enum):
    """Kind of a discovered member."""
    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"


@dataclass(frozen=True)
class Member:
    """
    A discovered field, property or method.

    Attributes:
        name: Attribute name, unique within its declaring scope
        kind: FIELD, PROPERTY or METHOD
        declared_type: Static type from annotations (Annotated extras stripped),
            or None when the member is unannotated
        annotations: Inspector annotations attached to the member
        owner_path: Names leading from the root target to this member's owner
        declaring_type: Most-derived class declaring the member
        serialized: True for fields that belong to the serialized member set
        order: Declaration position among members of the same kind, base classes first
    """
    name: str
    kind: MemberKind
    declared_type: Any = None
    annotations: Tuple[InspectorAnnotation, ...] = ()
    owner_path: Tuple[str, ...] = ()
    declaring_type: Optional[Type] = field(default=None, compare=False)
    serialized: bool = False
    order: int = 0

    @property
    def path(self) -> Tuple[str, ...]:
        """Names leading from the root target to this member."""
        return self.owner_path + (self.name,)

    @property
    def dotted_path(self) -> str:
        """Path as a dotted string, e.g. 'movement.limits.max_speed'."""
        return ".".join(self.path)

    def get_attribute(self, annotation_type: Type[A]) -> Optional[A]:
        """Return the first attached annotation of the given type, or None."""
        for annotation in self.annotations:
            if isinstance(annotation, annotation_type):
                return annotation
        return None

    def has_attribute(self, annotation_type: Type[InspectorAnnotation]) -> bool:
        """Check if an annotation of the given type is attached."""
        return self.get_attribute(annotation_type) is not None

    def read(self, owner: Any) -> Any:
        """
        Read the member's current value from ``owner``.

        Methods read as bound methods.

        Raises:
            MemberAccessError: If the owner is gone or the value cannot be obtained
        """
        if owner is None:
            raise MemberAccessError(f"Cannot read '{self.dotted_path}': owner is None")
        try:
            return getattr(owner, self.name)
        except Exception as e:
            raise MemberAccessError(f"Cannot read '{self.dotted_path}': {e}") from e

    def write(self, owner: Any, value: Any) -> None:
        """
        Write ``value`` into the member on ``owner``.

        Raises:
            WriteBackError: If the member is not a field, or the owner rejects the write
        """
        if self.kind is not MemberKind.FIELD:
            raise WriteBackError(f"Cannot write '{self.dotted_path}': {self.kind.value} members are read-only")
        if owner is None:
            raise WriteBackError(f"Cannot write '{self.dotted_path}': owner is None")
        try:
            setattr(owner, self.name, value)
        except Exception as e:
            raise WriteBackError(f"Cannot write '{self.dotted_path}': {e}") from e
