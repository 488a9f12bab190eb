"""
Property classifier: partitions members into a render plan.

Every member goes to exactly one of: the ungrouped list, one box group, or
one foldout group. Groups are materialized in first-occurrence order of their
names (an insertion-ordered dict, never alphabetical), and members are put in
declaration order first, so the plan does not depend on the order the
members were handed in and sections never reshuffle between redraws.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional
import logging

from pyqt_attrinspect.attributes.annotation_types import ClassificationPolicy
from pyqt_attrinspect.classification.attribute_index import AttributeIndex
from pyqt_attrinspect.reflection.member_types import Member
from pyqt_attrinspect.services.enum_dispatch_service import EnumDispatchService

logger = logging.getLogger(__name__)


@dataclass
class Group:
    """A named bucket of members sharing one grouping annotation."""
    key: str
    policy: ClassificationPolicy
    members: List[Member] = field(default_factory=list)


@dataclass
class RenderPlan:
    """
    Ordered output of classification, consumed once per redraw.

    Attributes:
        ungrouped: Members without a grouping annotation, in declaration order
        box_groups: Box groups in first-occurrence order
        foldout_groups: Foldout groups in first-occurrence order
    """
    ungrouped: List[Member] = field(default_factory=list)
    box_groups: List[Group] = field(default_factory=list)
    foldout_groups: List[Group] = field(default_factory=list)

    @property
    def groups(self) -> List[Group]:
        """Box groups followed by foldout groups."""
        return self.box_groups + self.foldout_groups

    def members(self) -> Iterator[Member]:
        """All members in draw order: ungrouped, box groups, foldout groups."""
        yield from self.ungrouped
        for group in self.groups:
            yield from group.members

    def is_empty(self) -> bool:
        return not self.ungrouped and not self.box_groups and not self.foldout_groups


@dataclass
class _PlanBuilder:
    """Mutable accumulator used during a single classification pass."""
    ungrouped: List[Member] = field(default_factory=list)
    box: Dict[str, List[Member]] = field(default_factory=dict)
    foldout: Dict[str, List[Member]] = field(default_factory=dict)

    def build(self) -> RenderPlan:
        return RenderPlan(
            ungrouped=self.ungrouped,
            box_groups=[Group(k, ClassificationPolicy.BOX, v) for k, v in self.box.items()],
            foldout_groups=[Group(k, ClassificationPolicy.FOLDOUT, v) for k, v in self.foldout.items()],
        )


class PropertyClassifier(EnumDispatchService[ClassificationPolicy]):
    """
    Single-pass classifier dispatching each member on its grouping policy.

    Examples:
        >>> plan = PropertyClassifier().classify(members, owner)
        >>> [g.key for g in plan.box_groups]
        ['Stats']
    """

    def __init__(self, attribute_index: Optional[AttributeIndex] = None):
        super().__init__()
        self._index = attribute_index or AttributeIndex()
        self._register_handlers({
            ClassificationPolicy.UNGROUPED: self._assign_ungrouped,
            ClassificationPolicy.BOX: self._assign_box,
            ClassificationPolicy.FOLDOUT: self._assign_foldout,
        })

    @property
    def attribute_index(self) -> AttributeIndex:
        return self._index

    def partition(self, members: Iterable[Member]) -> RenderPlan:
        """
        Partition members without any visibility filtering.

        Args:
            members: Members of one kind (e.g. the serialized fields of a target)

        Returns:
            RenderPlan in which every member appears exactly once
        """
        builder = _PlanBuilder()
        for member in sorted(members, key=lambda m: m.order):
            self.dispatch(member, builder)
        return builder.build()

    def classify(self, members: Iterable[Member], owner: Any) -> RenderPlan:
        """
        Partition members and drop those currently invisible on ``owner``.

        A group keeps its first-occurrence position even when its first member
        is hidden, and a group whose every member is hidden is omitted.
        """
        plan = self.partition(members)
        classified = RenderPlan(
            ungrouped=self._visible_members(plan.ungrouped, owner),
            box_groups=self._visible_groups(plan.box_groups, owner),
            foldout_groups=self._visible_groups(plan.foldout_groups, owner),
        )
        logger.debug(
            f"Classified {type(owner).__name__}: {len(classified.ungrouped)} ungrouped, "
            f"{len(classified.box_groups)} box, {len(classified.foldout_groups)} foldout"
        )
        return classified

    def _visible_members(self, members: List[Member], owner: Any) -> List[Member]:
        return [m for m in members if self._index.is_visible(m, owner)]

    def _visible_groups(self, groups: List[Group], owner: Any) -> List[Group]:
        result = []
        for group in groups:
            members = self._visible_members(group.members, owner)
            if members:
                result.append(Group(group.key, group.policy, members))
        return result

    # ==================== DISPATCH ====================

    def _determine_strategy(self, member: Member, builder: _PlanBuilder) -> ClassificationPolicy:
        return self._index.policy_of(member)

    def _assign_ungrouped(self, member: Member, builder: _PlanBuilder) -> None:
        builder.ungrouped.append(member)

    def _assign_box(self, member: Member, builder: _PlanBuilder) -> None:
        builder.box.setdefault(self._index.group_of(member).name, []).append(member)

    def _assign_foldout(self, member: Member, builder: _PlanBuilder) -> None:
        builder.foldout.setdefault(self._index.group_of(member).name, []).append(member)
