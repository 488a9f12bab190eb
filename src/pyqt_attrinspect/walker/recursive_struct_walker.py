"""
Recursive struct walker.

Unfolds fields whose declared type is a composite value type (NamedTuple,
frozen dataclass, @value_type class) into a foldout of their sub-fields.

Composite values are treated as copied by value: each level reads its value,
works on a private copy, and returns the (possibly new) composite together
with an explicit ``changed`` flag. The caller decides whether to write it
back, so a leaf edit three levels deep reaches the root owner only through
the chain of copies that led to it, and nothing is written when nothing
changed.

Recursion follows declared (static) types only. Reference-typed fields are
drawn as leaves and never entered; a composite type reappearing on its own
expansion path, or a path deeper than InspectorConfig.max_composite_depth,
is drawn as a leaf as well.
"""

import copy
import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type
import logging

from pyqt_attrinspect.attributes.annotation_types import ReadOnly
from pyqt_attrinspect.classification.attribute_index import AttributeIndex
from pyqt_attrinspect.core.ui_utils import member_label
from pyqt_attrinspect.exceptions import MemberAccessError, WriteBackError
from pyqt_attrinspect.host.host_protocols import InspectorHost
from pyqt_attrinspect.protocols.inspector_config import InspectorConfig, get_inspector_config
from pyqt_attrinspect.reflection.member_discovery import MemberDiscovery
from pyqt_attrinspect.reflection.member_types import Member
from pyqt_attrinspect.reflection.type_utils import TypeUtils
from pyqt_attrinspect.state.foldout_state_store import FoldoutKey, FoldoutStateStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkResult:
    """A drawn value and whether the user changed it during this redraw."""
    changed: bool
    value: Any


class CompositeValues:
    """Copy-out and field replacement for composite value types."""

    @staticmethod
    def copy_out(value: Any) -> Any:
        """Private copy of a composite; immutable tuples are returned as-is."""
        if isinstance(value, tuple):
            return value
        return copy.copy(value)

    @staticmethod
    def with_field(composite: Any, name: str, new_value: Any) -> Any:
        """
        Composite with field ``name`` replaced by ``new_value``.

        NamedTuples and frozen dataclasses produce a new value; other value
        types are updated in place (they are private copies at this point).

        Raises:
            WriteBackError: If the composite rejects the replacement
        """
        try:
            if TypeUtils.is_named_tuple(type(composite)):
                return composite._replace(**{name: new_value})

            if TypeUtils.is_frozen_dataclass(type(composite)):
                init_fields = {f.name for f in dataclasses.fields(composite) if f.init}
                if name in init_fields:
                    return dataclasses.replace(composite, **{name: new_value})
                object.__setattr__(composite, name, new_value)
                return composite

            setattr(composite, name, new_value)
            return composite
        except Exception as e:
            raise WriteBackError(
                f"Cannot set '{name}' on {type(composite).__name__}: {e}"
            ) from e


class RecursiveStructWalker:
    """
    Draws a field, unfolding composite value types recursively.

    Args:
        host: Draw primitives
        foldouts: Expanded state of every composite foldout
        config: Depth limit and excluded types; defaults to the global config
        attribute_index: Visibility of sub-fields
    """

    def __init__(self, host: InspectorHost, foldouts: FoldoutStateStore,
                 config: Optional[InspectorConfig] = None,
                 attribute_index: Optional[AttributeIndex] = None):
        self._host = host
        self._foldouts = foldouts
        self._config = config or get_inspector_config()
        self._index = attribute_index or AttributeIndex()

    def is_composite(self, declared_type: Any) -> bool:
        """Check if a declared type is unfolded rather than drawn as one leaf."""
        return TypeUtils.is_composite_value_type(declared_type, self._config.excluded_composite_types)

    def draw_composite(self, owner: Any, member: Member, root: Any = None) -> WalkResult:
        """
        Draw ``member`` of ``owner``, writing a changed value back into ``owner``.

        Args:
            owner: Object holding the field
            member: Field to draw
            root: Inspected object whose identity keys the foldout state (default: owner)

        Returns:
            WalkResult with the value now held by the field; ``changed`` is False
            when nothing was edited or the write-back was dropped
        """
        root = owner if root is None else root

        if not self.is_composite(member.declared_type):
            result = self._draw_leaf(owner, member)
        else:
            result = self._walk(owner, member, root, ())

        if not result.changed:
            return result
        try:
            member.write(owner, result.value)
        except WriteBackError as e:
            logger.warning(f"Dropped edit of '{member.dotted_path}': {e}")
            return WalkResult(False, result.value)
        logger.debug(f"Wrote back '{member.dotted_path}' on {type(owner).__name__}")
        return result

    # ==================== RECURSION ====================

    def _walk(self, owner: Any, member: Member, root: Any, stack: Tuple[Type, ...]) -> WalkResult:
        """Draw a composite as a foldout node; returns the possibly-new composite, unwritten."""
        try:
            value = member.read(owner)
        except MemberAccessError as e:
            logger.debug(f"Skipping {member.dotted_path}: {e}")
            return WalkResult(False, None)

        key = FoldoutKey.for_field(root, member.dotted_path)
        expanded = self._host.draw_foldout_header(self._foldouts.get(key), member_label(member))
        self._foldouts.set(key, expanded)
        if not expanded or value is None:
            return WalkResult(False, value)

        declared_type = member.declared_type
        stack = stack + (declared_type,)
        composite = CompositeValues.copy_out(value)
        changed = False

        with self._host.indented():
            for sub_member in MemberDiscovery.sub_fields(declared_type, member.path):
                if not self._index.is_visible(sub_member, composite):
                    continue

                if self._should_recurse(sub_member, stack):
                    sub_result = self._walk(composite, sub_member, root, stack)
                else:
                    sub_result = self._draw_leaf(composite, sub_member)

                if not sub_result.changed:
                    continue
                try:
                    composite = CompositeValues.with_field(composite, sub_member.name, sub_result.value)
                    changed = True
                except WriteBackError as e:
                    logger.warning(f"Dropped edit of '{sub_member.dotted_path}': {e}")

        return WalkResult(changed, composite)

    def _should_recurse(self, member: Member, stack: Tuple[Type, ...]) -> bool:
        declared_type = member.declared_type
        if not self.is_composite(declared_type):
            return False
        if declared_type in stack:
            logger.warning(
                f"'{member.dotted_path}' re-enters {TypeUtils.type_name(declared_type)}; drawing it as a leaf"
            )
            return False
        if len(stack) >= self._config.max_composite_depth:
            logger.warning(
                f"'{member.dotted_path}' exceeds max_composite_depth={self._config.max_composite_depth}; "
                f"drawing it as a leaf"
            )
            return False
        return True

    def _draw_leaf(self, owner: Any, member: Member) -> WalkResult:
        """Draw a leaf field against ``owner``; returns the edit without writing it."""
        try:
            value = member.read(owner)
        except MemberAccessError as e:
            logger.debug(f"Skipping {member.dotted_path}: {e}")
            return WalkResult(False, None)

        label = member_label(member)
        if member.has_attribute(ReadOnly):
            self._host.draw_read_only_field(member, value, label)
            return WalkResult(False, value)

        result = self._host.draw_field(member, owner, value, label, include_children=True)
        return WalkResult(result.changed, result.value)
