"""Reusable trailing debounce timer."""

from typing import Callable, Optional
from PyQt6.QtCore import QTimer


class DebounceTimer:
    """
    Trailing debounce over a single-shot QTimer.

    Each trigger() restarts the countdown; the handler fires once, delay_ms
    after the last trigger. A delay of 0 still defers the handler to the next
    event loop iteration, so it never runs inside the signal that triggered it.

    Usage:
        self._redraw = DebounceTimer(delay_ms=50, handler=self.refresh)

        def _on_input(self):
            self._redraw.trigger()
    """

    def __init__(self, delay_ms: int, handler: Callable[[], None]):
        self._delay_ms = max(0, int(delay_ms))
        self._handler = handler
        self._timer: Optional[QTimer] = None

    @property
    def pending(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def trigger(self):
        """Restart the countdown."""
        if self._timer is None:
            self._timer = QTimer()
            self._timer.setSingleShot(True)
            self._timer.timeout.connect(self._handler)
        self._timer.start(self._delay_ms)

    def cancel(self):
        """Drop a pending handler call."""
        if self._timer is not None:
            self._timer.stop()

    def force(self):
        """Cancel the countdown and run the handler now."""
        self.cancel()
        self._handler()
