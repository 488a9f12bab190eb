"""Tests for composite unfolding and write-back."""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

import pytest

from pyqt_attrinspect.attributes import ReadOnly, ShowIf, inspect_field, value_type
from pyqt_attrinspect.exceptions import WriteBackError
from pyqt_attrinspect.host import CommandKind
from pyqt_attrinspect.protocols import InspectorConfig
from pyqt_attrinspect.reflection import MemberDiscovery
from pyqt_attrinspect.state import FoldoutKey, FoldoutStateStore, InMemoryBoolStore
from pyqt_attrinspect.walker import CompositeValues, RecursiveStructWalker


class Limits(NamedTuple):
    low: float
    high: float


@dataclass(frozen=True)
class Axis:
    name: str
    limits: Limits


@value_type
@dataclass
class Rig:
    axis: Axis
    gain: float = 1.0


@dataclass
class Robot:
    rig: Rig = field(default_factory=lambda: Rig(Axis("x", Limits(0.0, 1.0))))
    speed: float = 1.0


@dataclass(frozen=True)
class FrozenOwner:
    limits: Limits = Limits(0.0, 1.0)


@dataclass(frozen=True)
class Node:
    value: int = 0
    child: "Node" = None


@dataclass
class Tree:
    root: Node = field(default_factory=Node)


@dataclass(frozen=True)
class Tuning:
    advanced: bool = False
    gain: float = 1.0
    bias: float = inspect_field(ShowIf("advanced"), default=0.0)
    serial: str = inspect_field(ReadOnly(), default="T-1")


@dataclass
class Amp:
    tuning: Tuning = field(default_factory=Tuning)


def field_member(target, name):
    return MemberDiscovery.all_fields(target, lambda m: m.name == name)[0]


def make_walker(host, expanded=True, config=None):
    foldouts = FoldoutStateStore(InMemoryBoolStore(), default_expanded=expanded)
    return RecursiveStructWalker(host, foldouts, config or InspectorConfig()), foldouts


def test_unfolds_every_level(host):
    walker, _ = make_walker(host)
    robot = Robot()
    host.begin_redraw()
    result = walker.draw_composite(robot, field_member(robot, "rig"))

    assert not result.changed
    assert host.labels(CommandKind.FOLDOUT_HEADER) == ["Rig", "Axis", "Limits"]
    assert host.paths() == ["rig.axis.name", "rig.axis.limits.low", "rig.axis.limits.high", "rig.gain"]


def test_nested_fields_are_indented(host):
    walker, _ = make_walker(host)
    robot = Robot()
    host.begin_redraw()
    walker.draw_composite(robot, field_member(robot, "rig"))

    indents = {c.path: c.indent for c in host.commands if c.kind is CommandKind.FIELD}
    assert indents["rig.gain"] == 1
    assert indents["rig.axis.name"] == 2
    assert indents["rig.axis.limits.high"] == 3


def test_three_level_edit_reaches_root(host):
    walker, _ = make_walker(host)
    robot = Robot()
    host.begin_redraw()
    host.queue_edit("rig.axis.name", "pitch")
    result = walker.draw_composite(robot, field_member(robot, "rig"))

    assert result.changed
    assert robot.rig.axis.name == "pitch"


def test_deep_edit_rebuilds_every_copied_level(host):
    walker, _ = make_walker(host)
    robot = Robot()
    original_rig = robot.rig
    host.begin_redraw()
    host.queue_edit("rig.axis.limits.high", 5.0)
    walker.draw_composite(robot, field_member(robot, "rig"))

    assert robot.rig.axis.limits == Limits(0.0, 5.0)
    assert robot.rig is not original_rig
    assert original_rig.axis.limits.high == 1.0


def test_no_edit_means_no_write(host):
    walker, _ = make_walker(host)
    robot = Robot()
    original_rig = robot.rig
    host.begin_redraw()
    walker.draw_composite(robot, field_member(robot, "rig"))
    assert robot.rig is original_rig


def test_collapsed_composite_draws_only_header(host):
    walker, foldouts = make_walker(host, expanded=False)
    robot = Robot()
    host.begin_redraw()
    walker.draw_composite(robot, field_member(robot, "rig"))

    assert [c.kind for c in host.commands] == [CommandKind.FOLDOUT_HEADER]
    assert FoldoutKey.for_field(robot, "rig") in foldouts


def test_toggled_state_persists(host):
    walker, foldouts = make_walker(host, expanded=False)
    robot = Robot()
    member = field_member(robot, "rig")

    host.begin_redraw()
    host.queue_foldout_toggle("Rig")
    walker.draw_composite(robot, member)
    host.begin_redraw()
    walker.draw_composite(robot, member)

    assert foldouts.get(FoldoutKey.for_field(robot, "rig")) is True
    assert host.labels(CommandKind.FOLDOUT_HEADER) == ["Rig", "Axis"]


def test_leaf_field_drawn_against_owner(host):
    walker, _ = make_walker(host)
    robot = Robot()
    host.begin_redraw()
    host.queue_edit("speed", 2.5)
    result = walker.draw_composite(robot, field_member(robot, "speed"))

    assert result.changed
    assert robot.speed == 2.5
    assert [c.kind for c in host.commands] == [CommandKind.FIELD]


def test_write_back_failure_is_dropped(host, caplog):
    walker, _ = make_walker(host)
    owner = FrozenOwner()
    host.begin_redraw()
    host.queue_edit("limits.high", 9.0)
    with caplog.at_level(logging.WARNING):
        result = walker.draw_composite(owner, field_member(owner, "limits"))

    assert not result.changed
    assert owner.limits.high == 1.0
    assert "Dropped edit" in caplog.text


def test_depth_limit_draws_leaf(host, caplog):
    walker, _ = make_walker(host, config=InspectorConfig(max_composite_depth=1))
    robot = Robot()
    host.begin_redraw()
    with caplog.at_level(logging.WARNING):
        walker.draw_composite(robot, field_member(robot, "rig"))

    assert host.paths() == ["rig.axis", "rig.gain"]
    assert "max_composite_depth" in caplog.text


def test_self_referencing_type_terminates(host, caplog):
    walker, _ = make_walker(host)
    tree = Tree()
    host.begin_redraw()
    with caplog.at_level(logging.WARNING):
        walker.draw_composite(tree, field_member(tree, "root"))

    assert host.paths() == ["root.value", "root.child"]
    assert "re-enters" in caplog.text


def test_excluded_types_are_leaves(host):
    walker, _ = make_walker(host, config=InspectorConfig(excluded_composite_types=(Limits,)))
    owner = FrozenOwner()
    host.begin_redraw()
    walker.draw_composite(owner, field_member(owner, "limits"))
    assert host.paths() == ["limits"]


def test_sub_field_visibility_and_read_only(host):
    walker, _ = make_walker(host)
    amp = Amp()
    host.begin_redraw()
    walker.draw_composite(amp, field_member(amp, "tuning"))

    assert host.paths() == ["tuning.advanced", "tuning.gain"]
    assert host.paths(CommandKind.READ_ONLY_FIELD) == ["tuning.serial"]


def test_unreadable_owner_is_skipped(host):
    walker, _ = make_walker(host)
    host.begin_redraw()
    result = walker.draw_composite(None, field_member(Robot, "rig"))
    assert not result.changed
    assert host.commands == []


def test_with_field_on_named_tuple():
    assert CompositeValues.with_field(Limits(0.0, 1.0), "high", 7.0) == Limits(0.0, 7.0)


def test_with_field_on_frozen_dataclass_leaves_original():
    axis = Axis("x", Limits(0.0, 1.0))
    updated = CompositeValues.with_field(axis, "name", "y")
    assert updated.name == "y"
    assert axis.name == "x"


def test_with_field_rejects_unknown_field():
    with pytest.raises(WriteBackError):
        CompositeValues.with_field(Limits(0.0, 1.0), "middle", 0.5)


class RangeError(Exception):
    pass


@dataclass(frozen=True)
class Range:
    low: float = 0.0
    high: float = 1.0

    def __post_init__(self):
        if self.low > self.high:
            raise RangeError("low > high")


@dataclass
class Holder:
    rng: Range = field(default_factory=Range)


class Guarded:
    limit: int = 3

    def __setattr__(self, name, value):
        if name == "limit" and value < 0:
            raise RangeError("limit must be positive")
        super().__setattr__(name, value)


def test_rejected_rebuild_is_dropped(host, caplog):
    walker, _ = make_walker(host)
    holder = Holder()
    host.begin_redraw()
    host.queue_edit("rng.low", 99.0)
    with caplog.at_level(logging.WARNING):
        result = walker.draw_composite(holder, field_member(holder, "rng"))

    assert not result.changed
    assert holder.rng == Range()
    assert "Dropped edit of 'rng.low'" in caplog.text


def test_with_field_wraps_validator_errors():
    with pytest.raises(WriteBackError) as exc_info:
        CompositeValues.with_field(Range(), "low", 5.0)
    assert isinstance(exc_info.value.__cause__, RangeError)


def test_rejected_owner_write_is_dropped(host, caplog):
    walker, _ = make_walker(host)
    owner = Guarded()
    host.begin_redraw()
    host.queue_edit("limit", -1)
    with caplog.at_level(logging.WARNING):
        result = walker.draw_composite(owner, field_member(owner, "limit"))

    assert not result.changed
    assert owner.limit == 3
    assert "Dropped edit of 'limit'" in caplog.text
