"""
Headless host that records draw calls as data.

Used by the test suite and by tooling that needs the render output of an
inspector without a widget toolkit. User input is scripted ahead of a redraw
and consumed by the first matching draw call:

    host = RecordingHost()
    host.queue_foldout_toggle("Advanced")
    host.queue_edit("stats.health", 50)
    pipeline.render(target)
    host.labels(CommandKind.FIELD)
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Deque, Dict, List, Optional, Set
import logging

from pyqt_attrinspect.host.host_protocols import DrawResult, InspectorHost

logger = logging.getLogger(__name__)


class CommandKind(Enum):
    """Kind of a recorded draw call."""
    FIELD = "field"
    READ_ONLY_FIELD = "read_only_field"
    BUTTON = "button"
    HELP_BOX = "help_box"
    BEGIN_BOX_GROUP = "begin_box_group"
    END_BOX_GROUP = "end_box_group"
    FOLDOUT_HEADER = "foldout_header"
    SECTION_HEADER = "section_header"


@dataclass(frozen=True)
class DrawCommand:
    """One recorded draw call."""
    kind: CommandKind
    label: str = ""
    path: str = ""
    value: Any = None
    indent: int = 0
    enabled: bool = True


class RecordingHost(InspectorHost):
    """
    InspectorHost that appends a DrawCommand per draw call.

    Args:
        history: Number of recent redraws kept in ``frames``
    """

    def __init__(self, history: int = 8):
        super().__init__()
        self.frames: Deque[List[DrawCommand]] = deque(maxlen=max(1, history))
        self._current: List[DrawCommand] = []
        self._edits: Dict[str, Any] = {}
        self._toggles: Set[str] = set()
        self._clicks: Set[str] = set()

    # ==================== SCRIPTED INPUT ====================

    def queue_edit(self, path: str, value: Any) -> None:
        """Make the next draw of the field at dotted ``path`` report ``value`` as an edit."""
        self._edits[path] = value

    def queue_foldout_toggle(self, label: str) -> None:
        """Make the next foldout header labelled ``label`` flip its state."""
        self._toggles.add(label)

    def queue_click(self, method_name: str) -> None:
        """Make the next button for ``method_name`` report a click."""
        self._clicks.add(method_name)

    # ==================== RECORDED OUTPUT ====================

    @property
    def commands(self) -> List[DrawCommand]:
        """Commands of the current (or most recently finished) redraw."""
        return self._current

    def labels(self, kind: Optional[CommandKind] = None) -> List[str]:
        return [c.label for c in self._current if kind is None or c.kind is kind]

    def paths(self, kind: CommandKind = CommandKind.FIELD) -> List[str]:
        return [c.path for c in self._current if c.kind is kind]

    def _record(self, kind: CommandKind, **kwargs) -> None:
        self._current.append(DrawCommand(kind, indent=self.indent_level, **kwargs))

    # ==================== InspectorHost ====================

    def begin_redraw(self) -> None:
        self._current = []
        self.frames.append(self._current)

    def draw_field(self, member, owner: Any, value: Any, label: str,
                   include_children: bool = True) -> DrawResult:
        path = member.dotted_path
        self._record(CommandKind.FIELD, label=label, path=path, value=value)
        if path in self._edits:
            new_value = self._edits.pop(path)
            logger.debug(f"Replaying edit {path}={new_value!r}")
            return DrawResult(True, new_value)
        return DrawResult.unchanged(value)

    def draw_read_only_field(self, member, value: Any, label: str) -> None:
        self._record(CommandKind.READ_ONLY_FIELD, label=label, path=member.dotted_path, value=value)

    def draw_button(self, owner: Any, member, label: str, enabled: bool = True) -> bool:
        self._record(CommandKind.BUTTON, label=label, path=member.dotted_path, enabled=enabled)
        if member.name in self._clicks:
            self._clicks.discard(member.name)
            return True
        return False

    def draw_help_box(self, message: str) -> None:
        self._record(CommandKind.HELP_BOX, label=message)

    def begin_box_group(self, label: str) -> None:
        self._record(CommandKind.BEGIN_BOX_GROUP, label=label)

    def end_box_group(self) -> None:
        self._record(CommandKind.END_BOX_GROUP)

    def draw_foldout_header(self, expanded: bool, label: str) -> bool:
        self._record(CommandKind.FOLDOUT_HEADER, label=label, value=expanded)
        if label in self._toggles:
            self._toggles.discard(label)
            return not expanded
        return expanded

    def draw_section_header(self, title: str) -> None:
        self._record(CommandKind.SECTION_HEADER, label=title)
