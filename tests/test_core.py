"""Tests for core utilities and services."""

import logging
from enum import Enum

import pytest

from pyqt_attrinspect.attributes import Button, Label
from pyqt_attrinspect.core import button_label, member_label, nicify_name, timer
from pyqt_attrinspect.host import RecordingHost
from pyqt_attrinspect.protocols import InspectorConfig, get_inspector_config, set_inspector_config
from pyqt_attrinspect.reflection import Member, MemberKind
from pyqt_attrinspect.services import EnumDispatchService, FlagContextManager, InspectorFlag


@pytest.mark.parametrize("name, label", [
    ("max_speed", "Max Speed"),
    ("maxSpeed", "Max Speed"),
    ("m_Health", "Health"),
    ("_ticks", "Ticks"),
    ("HTTPPort", "HTTP Port"),
    ("level2Boss", "Level2 Boss"),
])
def test_nicify_name(name, label):
    assert nicify_name(name) == label


def test_member_and_button_labels():
    plain = Member(name="max_speed", kind=MemberKind.FIELD)
    labelled = Member(name="max_speed", kind=MemberKind.FIELD, annotations=(Label("Top speed"),))
    method = Member(name="reset_all", kind=MemberKind.METHOD, annotations=(Button(),))
    captioned = Member(name="reset_all", kind=MemberKind.METHOD, annotations=(Button("Reset!"),))

    assert member_label(plain) == "Max Speed"
    assert member_label(labelled) == "Top speed"
    assert button_label(method) == "Reset All"
    assert button_label(captioned) == "Reset!"


def test_config_defaults_and_override():
    assert get_inspector_config().max_composite_depth == 8

    set_inspector_config(InspectorConfig(draw_section_headers=True))
    assert get_inspector_config().draw_section_headers

    set_inspector_config(None)
    assert not get_inspector_config().draw_section_headers


def test_timer_logs_slow_operations(caplog):
    with caplog.at_level(logging.DEBUG, logger="pyqt_attrinspect.performance"):
        with timer("Inspector render", threshold_ms=0, target_type="Enemy", log_args=True):
            pass
    assert "Inspector render:" in caplog.text
    assert "target_type=Enemy" in caplog.text


def test_timer_quiet_below_threshold(caplog):
    with caplog.at_level(logging.DEBUG, logger="pyqt_attrinspect.performance"):
        with timer("Quick", threshold_ms=10_000):
            pass
    assert "Quick" not in caplog.text


class Shape(Enum):
    LEAF = "leaf"
    NODE = "node"


class ShapeDrawer(EnumDispatchService[Shape]):
    def __init__(self):
        super().__init__()
        self._register_handlers({
            Shape.LEAF: self._leaf,
            Shape.NODE: self._node,
        })

    def _determine_strategy(self, value):
        return Shape.NODE if isinstance(value, tuple) else Shape.LEAF

    def _leaf(self, value):
        return f"leaf:{value}"

    def _node(self, value):
        return f"node:{len(value)}"


def test_enum_dispatch():
    drawer = ShapeDrawer()
    assert drawer.dispatch(3) == "leaf:3"
    assert drawer.dispatch((1, 2)) == "node:2"
    assert drawer.has_strategy(Shape.NODE)
    assert drawer.get_registered_strategies() == [Shape.LEAF, Shape.NODE]


def test_enum_dispatch_requires_every_handler():
    class Partial(ShapeDrawer):
        def __init__(self):
            EnumDispatchService.__init__(self)
            self._register_handlers({Shape.LEAF: self._leaf})

    with pytest.raises(ValueError):
        Partial()


def test_render_flag_restored():
    host = RecordingHost()
    with FlagContextManager.render_context(host):
        assert host.in_render
        assert FlagContextManager.is_flag_set(host, InspectorFlag.IN_RENDER)
    assert not host.in_render


def test_render_flag_restored_after_error():
    host = RecordingHost()
    with pytest.raises(RuntimeError):
        with FlagContextManager.render_context(host):
            raise RuntimeError("draw failed")
    assert not host.in_render


def test_unknown_flag_rejected():
    with pytest.raises(ValueError):
        with FlagContextManager.manage_flags(RecordingHost(), _not_a_flag=True):
            pass


def test_debounce_timer(qapp):
    """DebounceTimer defers, cancels and forces its handler."""
    from pyqt_attrinspect.core.debounce_timer import DebounceTimer

    called = []
    debounce = DebounceTimer(delay_ms=50, handler=lambda: called.append(1))
    assert not debounce.pending

    debounce.trigger()
    assert debounce.pending
    debounce.cancel()
    assert not debounce.pending
    assert called == []

    debounce.force()
    assert called == [1]
