"""Tests for grouping and visibility queries."""

import logging
from dataclasses import dataclass
from enum import Enum

import pytest

from pyqt_attrinspect.attributes import (
    BoxGroup, ClassificationPolicy, ConditionOperator, Foldout, HideIf, Label, ShowIf
)
from pyqt_attrinspect.classification import AttributeIndex, GroupKey
from pyqt_attrinspect.exceptions import AnnotationError
from pyqt_attrinspect.reflection import Member, MemberKind


class Mode(Enum):
    SIMPLE = "simple"
    ADVANCED = "advanced"


@dataclass
class Owner:
    armed: bool = False
    loaded: bool = True
    mode: Mode = Mode.SIMPLE
    count: int = 0

    @property
    def ready(self) -> bool:
        return self.armed and self.loaded

    def is_busy(self) -> bool:
        return self.count > 3


def member(*annotations, name="value"):
    return Member(name=name, kind=MemberKind.FIELD, declared_type=int, annotations=annotations)


@pytest.fixture
def index():
    return AttributeIndex()


def test_ungrouped_member_has_no_group(index):
    assert index.group_of(member()) is None
    assert index.policy_of(member(Label("Hit points"))) is ClassificationPolicy.UNGROUPED


def test_box_group(index):
    assert index.group_of(member(BoxGroup("Stats"))) == GroupKey(ClassificationPolicy.BOX, "Stats")


def test_foldout_wins_over_box_group(index):
    both = member(BoxGroup("Stats"), Foldout("Advanced"))
    assert index.group_of(both) == GroupKey(ClassificationPolicy.FOLDOUT, "Advanced")
    assert index.policy_of(both) is ClassificationPolicy.FOLDOUT


def test_first_annotation_of_a_kind_names_the_group(index):
    assert index.group_of(member(BoxGroup("First"), BoxGroup("Second"))).name == "First"


def test_recognized_attribute(index):
    assert not index.has_recognized_attribute(member())
    assert index.has_recognized_attribute(member(Label("x")))


def test_get_attribute(index):
    m = member(Label("Hit points"), BoxGroup("Stats"))
    assert index.get_attribute(m, Label).text == "Hit points"
    assert index.get_attribute(m, Foldout) is None
    assert len(index.get_attributes(m)) == 2


def test_show_if_bool_field(index):
    owner = Owner()
    m = member(ShowIf("armed"))
    assert not index.is_visible(m, owner)
    owner.armed = True
    assert index.is_visible(m, owner)


def test_hide_if_inverts(index):
    owner = Owner(armed=True)
    assert not index.is_visible(member(HideIf("armed")), owner)
    assert index.is_visible(member(HideIf("armed")), Owner())


def test_operators(index):
    owner = Owner(armed=False, loaded=True)
    assert not index.is_visible(member(ShowIf(("armed", "loaded"))), owner)
    assert index.is_visible(member(ShowIf(("armed", "loaded"), ConditionOperator.OR)), owner)


def test_list_condition_is_normalized():
    assert ShowIf(["armed", "loaded"]).condition == ("armed", "loaded")


def test_property_and_method_conditions(index):
    owner = Owner(armed=True, count=5)
    assert index.is_visible(member(ShowIf("ready")), owner)
    assert index.is_visible(member(ShowIf("is_busy")), owner)
    owner.count = 0
    assert not index.is_visible(member(ShowIf("is_busy")), owner)


def test_enum_condition(index):
    m = member(ShowIf("mode", enum_value=Mode.ADVANCED))
    assert not index.is_visible(m, Owner())
    assert index.is_visible(m, Owner(mode=Mode.ADVANCED))


def test_callable_condition(index):
    m = member(ShowIf(lambda owner: owner.count > 1))
    assert not index.is_visible(m, Owner(count=0))
    assert index.is_visible(m, Owner(count=2))


def test_visibility_is_evaluated_fresh(index):
    owner = Owner()
    m = member(ShowIf("armed"))
    results = []
    for armed in (False, True, False):
        owner.armed = armed
        results.append(index.is_visible(m, owner))
    assert results == [False, True, False]


def test_unevaluable_condition_keeps_member_visible(index, caplog):
    with caplog.at_level(logging.WARNING):
        assert index.is_visible(member(ShowIf("missing")), Owner())
        assert index.is_visible(member(ShowIf("count")), Owner())
    assert "does not exist" in caplog.text
    assert "must be a bool" in caplog.text


def test_raising_condition_keeps_member_visible(index, caplog):
    def explode(owner):
        raise RuntimeError("boom")

    with caplog.at_level(logging.WARNING):
        assert index.is_visible(member(ShowIf(explode)), Owner())
    assert "raised" in caplog.text


def test_malformed_annotations_raise():
    with pytest.raises(AnnotationError):
        BoxGroup(42)
    with pytest.raises(AnnotationError):
        Foldout("")
    with pytest.raises(AnnotationError):
        ShowIf(())
    with pytest.raises(AnnotationError):
        ShowIf(("a", "b"), enum_value=Mode.SIMPLE)
