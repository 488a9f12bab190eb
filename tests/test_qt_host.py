"""Tests for the PyQt6 host adapters."""

from dataclasses import dataclass
from enum import Enum

import pytest
from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QWidget

from pyqt_attrinspect.attributes import BoxGroup, Foldout, button, inspect_field
from pyqt_attrinspect.pipeline import InspectorRenderPipeline
from pyqt_attrinspect.protocols import InspectorConfig
from pyqt_attrinspect.qt import (
    AttributeInspectorWidget, CheckBoxAdapter, ComboBoxAdapter, DoubleSpinBoxAdapter,
    LineEditAdapter, QSettingsBoolStore, QtInspectorHost, SpinBoxAdapter,
    WideFloatEditAdapter, WideIntEditAdapter, create_editor, editor_type_for
)
from pyqt_attrinspect.state import InMemoryBoolStore


class Mode(Enum):
    IDLE = 1
    CHASE = 2


@dataclass
class Scenario:
    A: int = 0
    B: int = inspect_field(BoxGroup("Stats"), default=0)
    C: int = inspect_field(BoxGroup("Stats"), default=0)
    D: int = inspect_field(Foldout("Advanced"), default=0)


@dataclass
class Launcher:
    charges: int = 2

    @button()
    def launch(self):
        self.charges -= 1


@pytest.fixture
def qt_host(qapp):
    inputs = []
    host = QtInspectorHost(QWidget(), on_input=lambda: inputs.append(1))
    host.inputs = inputs
    return host


@pytest.fixture
def qt_pipeline(qt_host):
    return InspectorRenderPipeline(qt_host, InMemoryBoolStore(), InspectorConfig())


def test_render_builds_editors(qt_pipeline, qt_host):
    qt_pipeline.render(Scenario())

    assert sorted(qt_host.editors) == ["A", "B", "C"]
    assert isinstance(qt_host.editors["B"], SpinBoxAdapter)
    assert [h.text() for h in qt_host.headers] == ["Advanced"]
    assert qt_host.inputs == []


def test_edit_applied_on_next_render(qt_pipeline, qt_host):
    target = Scenario()
    qt_pipeline.render(target)

    qt_host.editors["B"].set_value(7)
    assert qt_host.has_pending_input
    assert qt_host.inputs == [1]

    assert qt_pipeline.render(target) is True
    assert target.B == 7
    assert qt_host.editors["B"].get_value() == 7
    assert not qt_host.has_pending_input


def test_header_click_expands_foldout(qt_pipeline, qt_host):
    target = Scenario()
    qt_pipeline.render(target)
    qt_host.headers[0].click()

    qt_pipeline.render(target)
    assert "D" in qt_host.editors

    qt_pipeline.render(target)
    assert "D" in qt_host.editors


def test_button_click_invokes_method(qt_pipeline, qt_host):
    target = Launcher()
    qt_pipeline.render(target)
    assert target.charges == 2

    qt_host.buttons["launch"].click()
    assert qt_pipeline.render(target) is True
    assert target.charges == 1

    qt_pipeline.render(target)
    assert target.charges == 1


def test_inspector_widget(qapp):
    widget = AttributeInspectorWidget(Scenario(), settings_store=InMemoryBoolStore())
    rendered = []
    widget.rendered.connect(lambda: rendered.append(1))

    assert "A" in widget.host.editors
    widget.refresh()
    assert rendered == [1]

    widget.set_target(None)
    assert widget.target is None
    assert widget.host.editors == {}


def test_inspector_widget_switches_target(qapp):
    first, second = Scenario(), Launcher()
    widget = AttributeInspectorWidget(first, settings_store=InMemoryBoolStore())
    widget.set_target(second)

    assert widget.target is second
    assert "launch" in widget.host.buttons


def test_qsettings_store_round_trip(qapp, tmp_path):
    path = str(tmp_path / "inspector.ini")
    store = QSettingsBoolStore(settings=QSettings(path, QSettings.Format.IniFormat))
    assert store.load("enemy.group.Stats", False) is False

    store.save("enemy.group.Stats", True)
    store.sync()

    reopened = QSettingsBoolStore(settings=QSettings(path, QSettings.Format.IniFormat))
    assert reopened.load("enemy.group.Stats", False) is True


@pytest.mark.parametrize("value, declared, editor", [
    (True, None, CheckBoxAdapter),
    (3, None, SpinBoxAdapter),
    (1.5, None, DoubleSpinBoxAdapter),
    ("name", None, LineEditAdapter),
    (Mode.CHASE, None, ComboBoxAdapter),
    (None, int, SpinBoxAdapter),
    (2**40, None, WideIntEditAdapter),
    (-2**31, None, SpinBoxAdapter),
    (3e12, None, WideFloatEditAdapter),
    ((1, 2), None, None),
    (None, None, None),
])
def test_editor_type_for(value, declared, editor):
    assert editor_type_for(value, declared) is editor


def test_create_editor(qapp):
    combo = create_editor(Mode.CHASE)
    assert combo.get_value() is Mode.CHASE
    assert combo.count() == 2

    assert create_editor(object()) is None


@dataclass
class Ledger:
    balance: int = 2**40


def test_wide_int_edit_keeps_full_value(qt_pipeline, qt_host):
    target = Ledger()
    qt_pipeline.render(target)
    editor = qt_host.editors["balance"]
    assert isinstance(editor, WideIntEditAdapter)
    assert editor.text() == str(2**40)

    editor.setText(str(2**41 + 1))
    editor.editingFinished.emit()
    qt_pipeline.render(target)
    assert target.balance == 2**41 + 1


def test_float_spin_box_range_is_bounded(qapp):
    editor = create_editor(1.5)
    assert isinstance(editor, DoubleSpinBoxAdapter)
    assert editor.maximum() < 1e308
    assert editor.get_value() == 1.5
