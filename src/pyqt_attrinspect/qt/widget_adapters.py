"""
Editor adapters wrapping Qt widgets in the inspector's widget ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QSpinBox.value() vs QComboBox.currentData()
- editingFinished vs valueChanged vs currentIndexChanged vs toggled

create_editor() picks the adapter for a value's type.
"""

from abc import ABCMeta
from enum import Enum
from typing import Any, Callable, Optional, Type

from PyQt6.QtCore import QObject, QRegularExpression
from PyQt6.QtGui import QRegularExpressionValidator
from PyQt6.QtWidgets import QCheckBox, QComboBox, QDoubleSpinBox, QLineEdit, QSpinBox, QWidget

from pyqt_attrinspect.protocols.widget_protocols import (
    ChangeSignalEmitter, EnumSelectable, ValueGettable, ValueSettable
)
from pyqt_attrinspect.reflection.type_utils import TypeUtils

# QSpinBox holds a C int
INT_MIN = -2**31
INT_MAX = 2**31 - 1
FLOAT_LIMIT = 1e9


class PyQtWidgetMeta(type(QObject), ABCMeta):
    """Metaclass for Qt widgets that also derive from the widget ABCs."""
    pass


class LineEditAdapter(QLineEdit, ValueGettable, ValueSettable, ChangeSignalEmitter,
                      metaclass=PyQtWidgetMeta):
    """Text editor; commits on return or focus out."""

    def get_value(self) -> Any:
        return self.text()

    def set_value(self, value: Any) -> None:
        self.setText("" if value is None else str(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.editingFinished.connect(lambda: callback(self.get_value()))


class WideIntEditAdapter(LineEditAdapter):
    """Integer editor for values outside the spin box range; accepts digits only."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setValidator(QRegularExpressionValidator(QRegularExpression(r"-?\d+"), self))

    def get_value(self) -> Any:
        return int(self.text())


class WideFloatEditAdapter(LineEditAdapter):
    """Float editor for magnitudes beyond the spin box range."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setValidator(QRegularExpressionValidator(
            QRegularExpression(r"[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?"), self))

    def get_value(self) -> Any:
        return float(self.text())


class SpinBoxAdapter(QSpinBox, ValueGettable, ValueSettable, ChangeSignalEmitter,
                     metaclass=PyQtWidgetMeta):
    """Integer editor without keyboard tracking, so typing commits once."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setKeyboardTracking(False)
        self.setRange(INT_MIN, INT_MAX)

    def get_value(self) -> Any:
        return self.value()

    def set_value(self, value: Any) -> None:
        self.setValue(int(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.valueChanged.connect(lambda: callback(self.get_value()))


class DoubleSpinBoxAdapter(QDoubleSpinBox, ValueGettable, ValueSettable, ChangeSignalEmitter,
                           metaclass=PyQtWidgetMeta):
    """Float editor without keyboard tracking."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setKeyboardTracking(False)
        self.setRange(-FLOAT_LIMIT, FLOAT_LIMIT)
        self.setDecimals(6)

    def get_value(self) -> Any:
        return self.value()

    def set_value(self, value: Any) -> None:
        self.setValue(float(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.valueChanged.connect(lambda: callback(self.get_value()))


class ComboBoxAdapter(QComboBox, ValueGettable, ValueSettable, EnumSelectable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Enum editor; members are stored as item data."""

    def get_value(self) -> Any:
        if self.currentIndex() < 0:
            return None
        return self.itemData(self.currentIndex())

    def set_value(self, value: Any) -> None:
        for i in range(self.count()):
            if self.itemData(i) == value:
                self.setCurrentIndex(i)
                return
        self.setCurrentIndex(-1)

    def set_enum_options(self, enum_type: type) -> None:
        if not TypeUtils.is_enum_type(enum_type):
            raise TypeError(f"{enum_type} is not an Enum type")
        self.clear()
        for member in enum_type:
            self.addItem(member.name, member)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.currentIndexChanged.connect(lambda: callback(self.get_value()))


class CheckBoxAdapter(QCheckBox, ValueGettable, ValueSettable, ChangeSignalEmitter,
                      metaclass=PyQtWidgetMeta):
    """Bool editor."""

    def get_value(self) -> Any:
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        self.setChecked(bool(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.toggled.connect(lambda checked: callback(checked))


def editor_type_for(value: Any, declared_type: Any = None) -> Optional[Type[QWidget]]:
    """
    Adapter class able to edit ``value``, or None when the value has no editor.

    The runtime type wins over the declared type; the declared type is used
    when the value is None. bool is checked before int. Numbers outside the
    spin box range get validated line edits.
    """
    value_type = type(value) if value is not None else declared_type
    if not isinstance(value_type, type):
        return None
    if issubclass(value_type, bool):
        return CheckBoxAdapter
    if issubclass(value_type, Enum):
        return ComboBoxAdapter
    if issubclass(value_type, int):
        if value is not None and not INT_MIN <= value <= INT_MAX:
            return WideIntEditAdapter
        return SpinBoxAdapter
    if issubclass(value_type, float):
        if value is not None and abs(value) > FLOAT_LIMIT:
            return WideFloatEditAdapter
        return DoubleSpinBoxAdapter
    if issubclass(value_type, str):
        return LineEditAdapter
    return None


def create_editor(value: Any, declared_type: Any = None, parent: QWidget = None) -> Optional[QWidget]:
    """
    Create and fill an editor for ``value``.

    Returns:
        Editor implementing ValueGettable, ValueSettable and ChangeSignalEmitter,
        or None when the value cannot be edited
    """
    editor_type = editor_type_for(value, declared_type)
    if editor_type is None:
        return None
    editor = editor_type(parent)
    if isinstance(editor, EnumSelectable):
        editor.set_enum_options(type(value) if value is not None else declared_type)
    if value is not None:
        editor.set_value(value)
    return editor
