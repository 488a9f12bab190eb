"""
Declarative inspector annotations.

Annotations are small frozen dataclasses attached to fields, properties and
methods. Each concrete annotation class declares a ClassificationPolicy and is
registered by AnnotationMeta when the class is created, so classification is a
registry lookup instead of open-ended runtime type inspection.

Pattern:
    Instead of:
        if hasattr(member, 'box_group_name'):
            ...
        elif hasattr(member, 'foldout_name'):
            ...

    Use:
        @dataclass(frozen=True)
        class BoxGroup(InspectorAnnotation):
            name: str = ""
            policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.BOX

        AnnotationMeta.policy_for(annotation)  # -> ClassificationPolicy.BOX

Architecture:
    - ClassificationPolicy: closed set of grouping strategies (Ungrouped | Box | Foldout)
    - AnnotationMeta: metaclass that registers every class declaring a policy
    - InspectorAnnotation: unregistered base for all annotations
    - Grouping: BoxGroup, Foldout
    - Visibility: ShowIf, HideIf
    - Behavior: ShowNonSerializedField, ShowNativeProperty, Button, ReadOnly, Label, NonSerialized
"""

from abc import ABCMeta
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, Type, Union
import logging

from pyqt_attrinspect.exceptions import AnnotationError

logger = logging.getLogger(__name__)


class ClassificationPolicy(Enum):
    """How an annotation affects the grouping of the member carrying it."""
    UNGROUPED = "ungrouped"
    BOX = "box"
    FOLDOUT = "foldout"


class ConditionOperator(Enum):
    """How multiple ShowIf/HideIf conditions are combined."""
    AND = "and"
    OR = "or"


class AnnotationMeta(ABCMeta):
    """
    Metaclass for auto-registration of inspector annotation types.

    Every class whose body declares a ``policy`` is registered together with
    that policy. Base classes that do not declare one stay unregistered, which
    is what keeps InspectorAnnotation itself out of the registry.
    """
    _registry: Dict[Type, ClassificationPolicy] = {}

    def __new__(mcs, name, bases, namespace):
        cls = super().__new__(mcs, name, bases, namespace)

        policy = namespace.get('policy')
        if isinstance(policy, ClassificationPolicy):
            mcs._registry[cls] = policy
            logger.debug(f"Auto-registered inspector annotation: {name} ({policy.value})")

        return cls

    @classmethod
    def is_registered(mcs, annotation_type: Type) -> bool:
        """Check whether an annotation class is known to the inspector."""
        return annotation_type in mcs._registry

    @classmethod
    def policy_for(mcs, annotation: Any) -> Optional[ClassificationPolicy]:
        """Return the classification policy of an annotation instance, or None if unknown."""
        return mcs._registry.get(type(annotation))


class InspectorAnnotation(metaclass=AnnotationMeta):
    """Base class for all inspector annotations."""


# ==================== GROUPING ====================

@dataclass(frozen=True)
class BoxGroup(InspectorAnnotation):
    """Draw the member inside a bordered, always-expanded section named ``name``."""
    name: str = ""

    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.BOX

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise AnnotationError(f"BoxGroup name must be a string, got {self.name!r}")


@dataclass(frozen=True)
class Foldout(InspectorAnnotation):
    """Draw the member inside a collapsible section named ``name``."""
    name: str

    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.FOLDOUT

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise AnnotationError(f"Foldout name must be a non-empty string, got {self.name!r}")


# ==================== VISIBILITY ====================

Condition = Union[str, Tuple[str, ...], Callable[[Any], bool]]


@dataclass(frozen=True)
class ShowIf(InspectorAnnotation):
    """
    Show the member only while a condition on its owner holds.

    Examples:
        ShowIf("use_gravity")                         # bool field/property/method
        ShowIf(("armed", "loaded"), ConditionOperator.OR)
        ShowIf("mode", enum_value=Mode.ADVANCED)      # enum comparison
        ShowIf(lambda owner: owner.count > 3)
    """
    condition: Condition
    operator: ConditionOperator = ConditionOperator.AND
    enum_value: Optional[Enum] = None

    inverted: ClassVar[bool] = False
    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.UNGROUPED

    def __post_init__(self):
        condition = self.condition
        if isinstance(condition, list):
            condition = tuple(condition)
            object.__setattr__(self, 'condition', condition)

        if isinstance(condition, tuple):
            if not condition or not all(isinstance(name, str) for name in condition):
                raise AnnotationError(f"{type(self).__name__} needs one or more member names, got {condition!r}")
        elif not isinstance(condition, str) and not callable(condition):
            raise AnnotationError(f"{type(self).__name__} condition must be a name or callable, got {condition!r}")

        if self.enum_value is not None and not isinstance(condition, str):
            raise AnnotationError(f"{type(self).__name__} enum comparison needs a single member name")

    @property
    def condition_names(self) -> Tuple[str, ...]:
        """Member names referenced by this condition (empty for callables)."""
        if isinstance(self.condition, str):
            return (self.condition,)
        if isinstance(self.condition, tuple):
            return self.condition
        return ()


@dataclass(frozen=True)
class HideIf(ShowIf):
    """Hide the member while a condition on its owner holds."""

    inverted: ClassVar[bool] = True
    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.UNGROUPED


# ==================== BEHAVIOR ====================

@dataclass(frozen=True)
class ShowNonSerializedField(InspectorAnnotation):
    """Draw a non-serialized field in the trailing non-serialized section."""

    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.UNGROUPED


@dataclass(frozen=True)
class ShowNativeProperty(InspectorAnnotation):
    """Draw a computed property read-only in the native property section."""

    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.UNGROUPED


@dataclass(frozen=True)
class Button(InspectorAnnotation):
    """Draw a button that invokes the decorated method when clicked."""
    text: Optional[str] = None

    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.UNGROUPED


@dataclass(frozen=True)
class ReadOnly(InspectorAnnotation):
    """Draw the member without an editor."""

    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.UNGROUPED


@dataclass(frozen=True)
class Label(InspectorAnnotation):
    """Override the nicified display label of the member."""
    text: str

    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.UNGROUPED

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise AnnotationError(f"Label text must be a string, got {self.text!r}")


@dataclass(frozen=True)
class NonSerialized(InspectorAnnotation):
    """Exclude a public field from the serialized member set."""

    policy: ClassVar[ClassificationPolicy] = ClassificationPolicy.UNGROUPED
