"""
Attribute index: grouping, visibility and annotation queries over members.

Grouping precedence is explicit: a Foldout annotation wins over a BoxGroup
annotation on the same member, and the first annotation of the winning kind
names the group. Visibility is evaluated against the owner's live values on
every call and never cached, because the controlling value may change
between redraws.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Type, TypeVar
import logging

from pyqt_attrinspect.attributes.annotation_types import (
    AnnotationMeta, ClassificationPolicy, ConditionOperator, Foldout, BoxGroup,
    InspectorAnnotation, ShowIf
)

logger = logging.getLogger(__name__)

A = TypeVar('A', bound=InspectorAnnotation)

# Strongest policy first.
_GROUPING_PRECEDENCE: Tuple[ClassificationPolicy, ...] = (
    ClassificationPolicy.FOLDOUT,
    ClassificationPolicy.BOX,
)


@dataclass(frozen=True)
class GroupKey:
    """Identity of a group in a render plan: its kind and its name."""
    policy: ClassificationPolicy
    name: str


class AttributeIndex:
    """
    Annotation queries used for classification and visibility decisions.

    Stateless; one instance can serve every session.
    """

    def get_attribute(self, member, annotation_type: Type[A]) -> Optional[A]:
        """Return the first annotation of ``annotation_type`` on the member, or None."""
        return member.get_attribute(annotation_type)

    def get_attributes(self, member) -> Tuple[InspectorAnnotation, ...]:
        """All annotations on the member."""
        return member.annotations

    def has_recognized_attribute(self, member) -> bool:
        """Check if the member carries any registered inspector annotation."""
        return any(AnnotationMeta.is_registered(type(a)) for a in member.annotations)

    def policy_of(self, member) -> ClassificationPolicy:
        """The single strongest grouping policy of the member."""
        key = self.group_of(member)
        return key.policy if key is not None else ClassificationPolicy.UNGROUPED

    def group_of(self, member) -> Optional[GroupKey]:
        """
        The member's group, or None when it is ungrouped.

        Returns:
            GroupKey of the strongest grouping annotation (Foldout over BoxGroup)
        """
        for policy in _GROUPING_PRECEDENCE:
            for annotation in member.annotations:
                if AnnotationMeta.policy_for(annotation) is policy:
                    return GroupKey(policy, self._group_name(annotation))
        return None

    def is_visible(self, member, owner: Any) -> bool:
        """
        Evaluate every ShowIf/HideIf annotation against the owner's current values.

        A condition that cannot be evaluated (missing member, wrong type, raising
        getter) is logged and treated as satisfied, so the member stays visible.
        """
        for annotation in member.annotations:
            if not isinstance(annotation, ShowIf):
                continue
            satisfied = self._evaluate(annotation, member, owner)
            if satisfied is None:
                continue
            if satisfied == annotation.inverted:
                return False
        return True

    # ==================== CONDITIONS ====================

    def _evaluate(self, annotation: ShowIf, member, owner: Any) -> Optional[bool]:
        """Evaluate one condition; None when it cannot be evaluated."""
        if owner is None:
            return None

        condition = annotation.condition
        if callable(condition) and not isinstance(condition, str):
            try:
                return bool(condition(owner))
            except Exception as e:
                logger.warning(f"Visibility condition on '{member.dotted_path}' raised: {e}")
                return None

        if annotation.enum_value is not None:
            value = self._condition_value(annotation.condition, member, owner)
            if value is None:
                return None
            if isinstance(value, Enum) and type(value) is type(annotation.enum_value):
                return value == annotation.enum_value
            logger.warning(
                f"Visibility condition '{annotation.condition}' on '{member.dotted_path}' "
                f"is not a {type(annotation.enum_value).__name__}"
            )
            return None

        results = []
        for name in annotation.condition_names:
            value = self._condition_value(name, member, owner)
            if not isinstance(value, bool):
                logger.warning(
                    f"Visibility condition '{name}' on '{member.dotted_path}' must be a bool "
                    f"field, property or method, got {value!r}"
                )
                return None
            results.append(value)

        if annotation.operator is ConditionOperator.OR:
            return any(results)
        return all(results)

    @staticmethod
    def _condition_value(name: str, member, owner: Any) -> Any:
        try:
            value = getattr(owner, name)
        except AttributeError:
            logger.warning(f"Visibility condition '{name}' on '{member.dotted_path}' does not exist")
            return None
        except Exception as e:
            logger.warning(f"Visibility condition '{name}' on '{member.dotted_path}' raised: {e}")
            return None
        if callable(value):
            try:
                value = value()
            except Exception as e:
                logger.warning(f"Visibility condition '{name}()' on '{member.dotted_path}' raised: {e}")
                return None
        return value

    @staticmethod
    def _group_name(annotation: InspectorAnnotation) -> str:
        if isinstance(annotation, (Foldout, BoxGroup)):
            return annotation.name
        return getattr(annotation, 'name', "")
