"""
PyQt6 host adapters: editors, the widget-building host, QSettings
persistence and the inspector widget.
"""

from .inspector_widget import AttributeInspectorWidget
from .qsettings_store import QSettingsBoolStore
from .qt_host import QtInspectorHost
from .widget_adapters import (
    CheckBoxAdapter, ComboBoxAdapter, DoubleSpinBoxAdapter, LineEditAdapter,
    SpinBoxAdapter, WideFloatEditAdapter, WideIntEditAdapter, create_editor, editor_type_for
)

__all__ = [
    "AttributeInspectorWidget",
    "CheckBoxAdapter",
    "ComboBoxAdapter",
    "DoubleSpinBoxAdapter",
    "LineEditAdapter",
    "QSettingsBoolStore",
    "QtInspectorHost",
    "SpinBoxAdapter",
    "WideFloatEditAdapter",
    "WideIntEditAdapter",
    "create_editor",
    "editor_type_for",
]
