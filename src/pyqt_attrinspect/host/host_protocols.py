"""
Host collaborator contracts.

The inspector core decides what to draw, in what grouping and order; an
InspectorHost turns those decisions into widgets. Hosts are immediate-mode:
every redraw issues the full sequence of draw calls again, and interactive
primitives report user input for the current redraw through their return
values (DrawResult for fields, the new state for foldout headers, True for a
clicked button).
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable
import logging

from pyqt_attrinspect.core.ui_utils import member_label
from pyqt_attrinspect.exceptions import MemberAccessError, WriteBackError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawResult:
    """Outcome of drawing one editable field."""
    changed: bool = False
    value: Any = None

    @classmethod
    def unchanged(cls, value: Any) -> 'DrawResult':
        return cls(False, value)


class InspectorHost(ABC):
    """
    ABC for the widget layer an inspector renders into.

    Subclasses implement the draw primitives; indentation and the default
    inspector are provided here on top of them.
    """

    def __init__(self):
        self.indent_level = 0
        self._in_render = False

    # ==================== REDRAW LIFECYCLE ====================

    def begin_redraw(self) -> None:
        """Called before the first draw call of a redraw."""
        pass

    def end_redraw(self) -> None:
        """Called after the last draw call of a redraw."""
        pass

    @property
    def in_render(self) -> bool:
        return self._in_render

    @contextmanager
    def indented(self):
        """Indent everything drawn inside the block by one level."""
        self.indent_level += 1
        try:
            yield
        finally:
            self.indent_level -= 1

    # ==================== LEAF PRIMITIVES ====================

    @abstractmethod
    def draw_field(self, member, owner: Any, value: Any, label: str,
                   include_children: bool = True) -> DrawResult:
        """
        Draw an editable field.

        Args:
            member: Member being drawn
            owner: Object (or copied-out composite) the value was read from
            value: Current value
            label: Display label
            include_children: Draw nested content of non-leaf values as well

        Returns:
            DrawResult reporting whether the user changed the value this redraw
        """
        pass

    @abstractmethod
    def draw_read_only_field(self, member, value: Any, label: str) -> None:
        """Draw a value without an editor."""
        pass

    @abstractmethod
    def draw_button(self, owner: Any, member, label: str, enabled: bool = True) -> bool:
        """Draw a method button; True when it was clicked this redraw."""
        pass

    @abstractmethod
    def draw_help_box(self, message: str) -> None:
        """Draw a warning message."""
        pass

    # ==================== STRUCTURAL PRIMITIVES ====================

    @abstractmethod
    def begin_box_group(self, label: str) -> None:
        """Open a bordered, always-expanded section."""
        pass

    @abstractmethod
    def end_box_group(self) -> None:
        """Close the innermost open box group."""
        pass

    @abstractmethod
    def draw_foldout_header(self, expanded: bool, label: str) -> bool:
        """Draw a collapsible header showing ``expanded``; return the new state."""
        pass

    @abstractmethod
    def draw_section_header(self, title: str) -> None:
        """Draw a title line separating trailing inspector sections."""
        pass

    # ==================== DEFAULT INSPECTOR ====================

    def draw_default_inspector(self, target: Any, members: Iterable) -> bool:
        """
        Draw every member as a plain field, in order, and apply edits.

        Used for objects that carry no inspector annotations at all.

        Returns:
            True if any field was changed and written back
        """
        changed = False
        for member in members:
            try:
                value = member.read(target)
            except MemberAccessError as e:
                logger.debug(f"Skipping {member.dotted_path}: {e}")
                continue
            result = self.draw_field(member, target, value, member_label(member), include_children=True)
            if not result.changed:
                continue
            try:
                member.write(target, result.value)
                changed = True
            except WriteBackError as e:
                logger.warning(f"Dropped edit: {e}")
        return changed
