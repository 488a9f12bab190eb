"""
PyQt6 inspector host.

Emulates an immediate-mode host on top of retained Qt widgets: every redraw
discards the previous widgets and rebuilds the rows into the container's
QVBoxLayout. User input arriving through widget signals between redraws is
stored as pending input and reported by the matching draw call of the next
redraw, which is when the pipeline applies it:

- edits are keyed by the member's dotted path
- button clicks are keyed by the method's dotted path
- foldout toggles are keyed by the header's position in the redraw

Signals fired while a redraw is building widgets (e.g. a spin box emitting
valueChanged from set_value) are ignored through the in-render flag.
"""

from typing import Any, Callable, Dict, List, Optional, Set
import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QGroupBox, QHBoxLayout, QLabel, QLineEdit, QPushButton, QToolButton, QVBoxLayout, QWidget
)

from pyqt_attrinspect.host.host_protocols import DrawResult, InspectorHost
from pyqt_attrinspect.qt.widget_adapters import create_editor

logger = logging.getLogger(__name__)

INDENT_PX = 14
LABEL_WIDTH = 140
HELP_BOX_STYLE = "background-color: #4a3f1f; color: #f0d68a; padding: 4px; border-radius: 2px;"


class QtInspectorHost(InspectorHost):
    """
    InspectorHost building PyQt6 widgets.

    Args:
        container: Widget whose layout receives the inspector rows
        on_input: Called after user input was recorded, to schedule the next redraw
    """

    def __init__(self, container: QWidget, on_input: Optional[Callable[[], None]] = None):
        super().__init__()
        self._container = container
        self._root_layout = container.layout() or QVBoxLayout(container)
        self._root_layout.setContentsMargins(4, 4, 4, 4)
        self._root_layout.setSpacing(2)
        self._layout_stack: List[QVBoxLayout] = [self._root_layout]
        self._on_input = on_input

        self._pending_edits: Dict[str, Any] = {}
        self._pending_clicks: Set[str] = set()
        self._pending_toggles: Set[int] = set()
        self._header_count = 0

        # Widgets of the current redraw, for lookup by tests and tooling
        self.editors: Dict[str, QWidget] = {}
        self.buttons: Dict[str, QPushButton] = {}
        self.headers: List[QToolButton] = []

    @property
    def has_pending_input(self) -> bool:
        return bool(self._pending_edits or self._pending_clicks or self._pending_toggles)

    # ==================== REDRAW LIFECYCLE ====================

    def begin_redraw(self) -> None:
        self.clear()
        self._header_count = 0

    def end_redraw(self) -> None:
        self._root_layout.addStretch(1)
        stale = len(self._pending_edits) + len(self._pending_clicks) + len(self._pending_toggles)
        if stale:
            logger.debug(f"Discarding {stale} pending inputs with no matching widget")
        self._pending_edits.clear()
        self._pending_clicks.clear()
        self._pending_toggles.clear()

    def clear(self) -> None:
        """Remove every row of the previous redraw."""
        while self._root_layout.count():
            item = self._root_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.setParent(None)
                widget.deleteLater()
        self._layout_stack = [self._root_layout]
        self.editors = {}
        self.buttons = {}
        self.headers = []

    # ==================== PENDING INPUT ====================

    def _record(self, pending: Any, key: Any, value: Any = None) -> None:
        if self.in_render:
            return
        if isinstance(pending, dict):
            pending[key] = value
        else:
            pending.add(key)
        logger.debug(f"Pending input {key!r}")
        if self._on_input is not None:
            self._on_input()

    # ==================== ROWS ====================

    def _add_row(self, widget: QWidget) -> None:
        self._layout_stack[-1].addWidget(widget)

    def _labelled_row(self, label: str, content: QWidget) -> QWidget:
        row = QWidget()
        layout = QHBoxLayout(row)
        layout.setContentsMargins(self.indent_level * INDENT_PX, 0, 0, 0)
        layout.setSpacing(4)
        label_widget = QLabel(label)
        label_widget.setFixedWidth(LABEL_WIDTH)
        layout.addWidget(label_widget)
        layout.addWidget(content, 1)
        self._add_row(row)
        return row

    def _indented_row(self, content: QWidget) -> None:
        row = QWidget()
        layout = QHBoxLayout(row)
        layout.setContentsMargins(self.indent_level * INDENT_PX, 0, 0, 0)
        layout.addWidget(content, 1)
        self._add_row(row)

    # ==================== InspectorHost ====================

    def draw_field(self, member, owner: Any, value: Any, label: str,
                   include_children: bool = True) -> DrawResult:
        path = member.dotted_path
        changed = path in self._pending_edits
        if changed:
            value = self._pending_edits.pop(path)

        editor = create_editor(value, member.declared_type)
        if editor is None:
            self.draw_read_only_field(member, value, label)
            return DrawResult(changed, value)

        editor.connect_change_signal(lambda new_value, p=path: self._record(self._pending_edits, p, new_value))
        self.editors[path] = editor
        self._labelled_row(label, editor)
        return DrawResult(changed, value)

    def draw_read_only_field(self, member, value: Any, label: str) -> None:
        field = QLineEdit("" if value is None else str(value))
        field.setReadOnly(True)
        field.setFrame(False)
        self.editors[member.dotted_path] = field
        self._labelled_row(label, field)

    def draw_button(self, owner: Any, member, label: str, enabled: bool = True) -> bool:
        path = member.dotted_path
        button = QPushButton(label)
        button.setEnabled(enabled)
        button.clicked.connect(lambda _checked=False, p=path: self._record(self._pending_clicks, p))
        self.buttons[path] = button
        self._indented_row(button)

        if path in self._pending_clicks:
            self._pending_clicks.discard(path)
            return enabled
        return False

    def draw_help_box(self, message: str) -> None:
        box = QLabel(message)
        box.setWordWrap(True)
        box.setStyleSheet(HELP_BOX_STYLE)
        self._indented_row(box)

    def begin_box_group(self, label: str) -> None:
        group = QGroupBox(label)
        layout = QVBoxLayout(group)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)
        self._add_row(group)
        self._layout_stack.append(layout)

    def end_box_group(self) -> None:
        if len(self._layout_stack) == 1:
            raise RuntimeError("end_box_group() without a matching begin_box_group()")
        self._layout_stack.pop()

    def draw_foldout_header(self, expanded: bool, label: str) -> bool:
        index = self._header_count
        self._header_count += 1
        if index in self._pending_toggles:
            self._pending_toggles.discard(index)
            expanded = not expanded

        header = QToolButton()
        header.setText(label)
        header.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        header.setArrowType(Qt.ArrowType.DownArrow if expanded else Qt.ArrowType.RightArrow)
        header.setAutoRaise(True)
        header.clicked.connect(lambda _checked=False, i=index: self._record(self._pending_toggles, i))
        self.headers.append(header)
        self._indented_row(header)
        return expanded

    def draw_section_header(self, title: str) -> None:
        header = QLabel(title)
        header.setStyleSheet("font-weight: bold; padding-top: 6px;")
        self._indented_row(header)
