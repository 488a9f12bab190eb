"""
Widget ABC contracts for inspector editors.

Every editor the Qt host creates implements these explicitly, so the host
reads, writes and observes values through one interface instead of probing
Qt's per-widget APIs (text() vs value() vs currentData()).
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class ValueGettable(ABC):
    """ABC for editors that report their current value."""

    @abstractmethod
    def get_value(self) -> Any:
        """Current value shown by the editor."""
        pass


class ValueSettable(ABC):
    """ABC for editors that can display a value."""

    @abstractmethod
    def set_value(self, value: Any) -> None:
        pass


class EnumSelectable(ABC):
    """ABC for editors choosing one member of an Enum."""

    @abstractmethod
    def set_enum_options(self, enum_type: type) -> None:
        """
        Fill the editor with the members of ``enum_type``.

        Raises:
            TypeError: If enum_type is not an Enum subclass
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for editors reporting committed user edits.

    The callback receives the new value. Editors report commits (focus out,
    return pressed, step, toggle), not every keystroke, because each report
    schedules a redraw that rebuilds the editor.
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        pass
