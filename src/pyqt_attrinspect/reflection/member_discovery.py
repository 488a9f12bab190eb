"""
Member discovery over an object's full class hierarchy.

Finds the fields, properties and methods of a target that match a predicate,
base classes first and in declaration order within each class, with no
duplicates. Discovery is a pure query: nothing is read from the target's
attributes except class-level declarations.

Annotation sources:
- Annotated[T, ...] extras on class attribute annotations
- dataclass field metadata written by inspect_field()
- __inspector_annotations__ on method/property functions written by annotate()
"""

import dataclasses
import functools
import inspect
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, get_type_hints
import logging

from pyqt_attrinspect.attributes.annotation_types import (
    AnnotationMeta, InspectorAnnotation, NonSerialized
)
from pyqt_attrinspect.inspector_constants import CONSTANTS
from pyqt_attrinspect.reflection.member_types import Member, MemberKind
from pyqt_attrinspect.reflection.type_utils import TypeUtils

logger = logging.getLogger(__name__)

MemberPredicate = Callable[[Member], bool]


def _accept_all(member: Member) -> bool:
    return True


class MemberDiscovery:
    """
    Reflection queries returning ordered Members.

    Each query accepts either an instance (its class is inspected) or a class,
    so the struct walker can enumerate the sub-fields of a declared type
    without having a value at hand.
    """

    # ==================== PUBLIC QUERIES ====================

    @staticmethod
    def discover(target: Any, predicate: Optional[MemberPredicate] = None) -> List[Member]:
        """
        All matching fields, then properties, then methods of ``target``.

        Returns an empty list when the target is None (torn down or still
        deserializing) instead of failing.
        """
        if target is None:
            return []
        return (MemberDiscovery.all_fields(target, predicate)
                + MemberDiscovery.all_properties(target, predicate)
                + MemberDiscovery.all_methods(target, predicate))

    @staticmethod
    def all_fields(target: Any, predicate: Optional[MemberPredicate] = None,
                   owner_path: Tuple[str, ...] = ()) -> List[Member]:
        """Matching annotated fields across the hierarchy, base classes first."""
        if target is None:
            return []
        cls = MemberDiscovery._class_of(target)
        predicate = predicate or _accept_all
        return [m for m in MemberDiscovery._field_members(cls, owner_path) if predicate(m)]

    @staticmethod
    def all_properties(target: Any, predicate: Optional[MemberPredicate] = None) -> List[Member]:
        """Matching properties across the hierarchy, base classes first."""
        if target is None:
            return []
        cls = MemberDiscovery._class_of(target)
        predicate = predicate or _accept_all
        return [m for m in MemberDiscovery._property_members(cls) if predicate(m)]

    @staticmethod
    def all_methods(target: Any, predicate: Optional[MemberPredicate] = None) -> List[Member]:
        """Matching methods across the hierarchy, base classes first."""
        if target is None:
            return []
        cls = MemberDiscovery._class_of(target)
        predicate = predicate or _accept_all
        return [m for m in MemberDiscovery._method_members(cls) if predicate(m)]

    @staticmethod
    def serialized_fields(target: Any) -> List[Member]:
        """The serialized member set: public, non-ClassVar fields not opted out of serialization."""
        return MemberDiscovery.all_fields(target, lambda m: m.serialized)

    @staticmethod
    def sub_fields(declared_type: Type, owner_path: Tuple[str, ...]) -> List[Member]:
        """Public fields of a composite value type, rooted under ``owner_path``."""
        if TypeUtils.is_named_tuple(declared_type):
            return MemberDiscovery._named_tuple_members(declared_type, owner_path)
        return [m for m in MemberDiscovery._field_members(declared_type, owner_path)
                if not m.name.startswith(CONSTANTS.PRIVATE_PREFIX)]

    # ==================== FIELDS ====================

    @staticmethod
    def _field_members(cls: Type, owner_path: Tuple[str, ...]) -> List[Member]:
        hints = MemberDiscovery._resolved_hints(cls)
        dataclass_fields: Dict[str, dataclasses.Field] = {}
        if dataclasses.is_dataclass(cls):
            dataclass_fields = {f.name: f for f in dataclasses.fields(cls)}

        ordered: Dict[str, Member] = {}
        for klass in MemberDiscovery._hierarchy(cls):
            for name, raw_annotation in MemberDiscovery._own_annotations(klass).items():
                if name.startswith("__") or name in ordered:
                    continue
                declared = hints.get(name, raw_annotation)
                if TypeUtils.is_classvar(declared) or TypeUtils.is_initvar(declared):
                    continue

                base_type, extras = TypeUtils.split_annotated(declared)
                field_obj = dataclass_fields.get(name)
                metadata = field_obj.metadata if field_obj is not None else {}

                annotations = MemberDiscovery._collect_annotations(
                    f"{cls.__qualname__}.{name}",
                    extras,
                    metadata.get(CONSTANTS.METADATA_KEY, ()),
                )
                serialized = (
                    not name.startswith(CONSTANTS.PRIVATE_PREFIX)
                    and metadata.get(CONSTANTS.SERIALIZE_METADATA_KEY, True)
                    and not any(isinstance(a, NonSerialized) for a in annotations)
                )
                ordered[name] = Member(
                    name=name,
                    kind=MemberKind.FIELD,
                    declared_type=base_type,
                    annotations=annotations,
                    owner_path=owner_path,
                    declaring_type=MemberDiscovery._declaring_class(cls, name),
                    serialized=bool(serialized),
                    order=len(ordered),
                )
        return list(ordered.values())

    @staticmethod
    def _named_tuple_members(cls: Type, owner_path: Tuple[str, ...]) -> List[Member]:
        hints = MemberDiscovery._resolved_hints(cls)
        members = []
        for name in cls._fields:
            base_type, extras = TypeUtils.split_annotated(hints.get(name))
            members.append(Member(
                name=name,
                kind=MemberKind.FIELD,
                declared_type=base_type,
                annotations=MemberDiscovery._collect_annotations(f"{cls.__qualname__}.{name}", extras, ()),
                owner_path=owner_path,
                declaring_type=cls,
                serialized=True,
                order=len(members),
            ))
        return members

    # ==================== PROPERTIES & METHODS ====================

    @staticmethod
    def _property_members(cls: Type) -> List[Member]:
        ordered: Dict[str, Member] = {}
        for klass in MemberDiscovery._hierarchy(cls):
            for name in vars(klass):
                if name in ordered or name.startswith("__"):
                    continue
                resolved = inspect.getattr_static(cls, name, None)
                getter = MemberDiscovery._property_getter(resolved)
                if getter is None:
                    continue
                ordered[name] = Member(
                    name=name,
                    kind=MemberKind.PROPERTY,
                    declared_type=MemberDiscovery._return_type(getter),
                    annotations=MemberDiscovery._function_annotations(cls, name, getter),
                    declaring_type=MemberDiscovery._declaring_class(cls, name),
                    order=len(ordered),
                )
        return list(ordered.values())

    @staticmethod
    def _method_members(cls: Type) -> List[Member]:
        ordered: Dict[str, Member] = {}
        for klass in MemberDiscovery._hierarchy(cls):
            for name in vars(klass):
                if name in ordered or name.startswith("__"):
                    continue
                resolved = inspect.getattr_static(cls, name, None)
                if isinstance(resolved, (staticmethod, classmethod)):
                    function = resolved.__func__
                elif inspect.isfunction(resolved):
                    function = resolved
                else:
                    continue
                ordered[name] = Member(
                    name=name,
                    kind=MemberKind.METHOD,
                    declared_type=MemberDiscovery._return_type(function),
                    annotations=MemberDiscovery._function_annotations(cls, name, function),
                    declaring_type=MemberDiscovery._declaring_class(cls, name),
                    order=len(ordered),
                )
        return list(ordered.values())

    @staticmethod
    def _property_getter(attr: Any) -> Optional[Callable]:
        if isinstance(attr, property):
            return attr.fget
        if isinstance(attr, functools.cached_property):
            return attr.func
        return None

    @staticmethod
    def _function_annotations(cls: Type, name: str, function: Callable) -> Tuple[InspectorAnnotation, ...]:
        return MemberDiscovery._collect_annotations(
            f"{cls.__qualname__}.{name}",
            (),
            getattr(function, CONSTANTS.FUNCTION_ANNOTATIONS_ATTR, ()),
        )

    @staticmethod
    def _return_type(function: Optional[Callable]) -> Any:
        if function is None:
            return None
        try:
            return TypeUtils.split_annotated(get_type_hints(function).get('return'))[0]
        except Exception as e:
            logger.debug(f"Unresolvable return annotation on {function!r}: {e}")
            return function.__annotations__.get('return') if hasattr(function, '__annotations__') else None

    # ==================== HELPERS ====================

    @staticmethod
    def _collect_annotations(owner_name: str, extras: Iterable[Any],
                             declared: Iterable[Any]) -> Tuple[InspectorAnnotation, ...]:
        """
        Merge Annotated extras and explicitly declared annotations.

        Annotated extras that are not inspector annotations belong to other
        libraries and are skipped quietly. Explicitly declared entries that are
        not registered annotations are discovery gaps: they are logged and the
        member is treated as if they were absent.
        """
        collected: List[InspectorAnnotation] = []
        for extra in extras:
            if isinstance(extra, InspectorAnnotation) and AnnotationMeta.is_registered(type(extra)):
                collected.append(extra)
        for annotation in declared or ():
            if isinstance(annotation, InspectorAnnotation) and AnnotationMeta.is_registered(type(annotation)):
                collected.append(annotation)
            else:
                logger.warning(f"Ignoring unrecognized inspector annotation {annotation!r} on {owner_name}")
        return tuple(collected)

    @staticmethod
    def _resolved_hints(cls: Type) -> Dict[str, Any]:
        try:
            return get_type_hints(cls, include_extras=True)
        except Exception as e:
            # Unresolvable forward references: fall back to raw annotations per class.
            logger.debug(f"get_type_hints failed for {TypeUtils.type_name(cls)}: {e}")
            return {}

    @staticmethod
    def _own_annotations(klass: Type) -> Dict[str, Any]:
        """Annotations declared directly on ``klass``, in declaration order."""
        try:
            return inspect.get_annotations(klass)
        except NameError as e:
            logger.debug(f"Cannot evaluate annotations of {TypeUtils.type_name(klass)}: {e}")
            return {}

    @staticmethod
    def _hierarchy(cls: Type) -> List[Type]:
        """Classes of the hierarchy, base classes first, excluding object."""
        return [klass for klass in reversed(cls.__mro__) if klass is not object]

    @staticmethod
    def _declaring_class(cls: Type, name: str) -> Optional[Type]:
        for klass in cls.__mro__:
            if name in vars(klass) or name in MemberDiscovery._own_annotations(klass):
                return klass
        return None

    @staticmethod
    def _class_of(target: Any) -> Type:
        return target if isinstance(target, type) else type(target)
