"""
Core utilities: labels and performance timing.

DebounceTimer is PyQt6-backed and lives in pyqt_attrinspect.core.debounce_timer.
"""

from .ui_utils import button_label, member_label, nicify_name
from .performance_monitor import timer

__all__ = [
    "button_label",
    "member_label",
    "nicify_name",
    "timer",
]
