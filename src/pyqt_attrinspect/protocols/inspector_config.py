"""Base configuration class for the attribute inspector.

Provides hooks for applications to customize rendering behavior.
"""

from typing import Optional, Tuple, Type
from dataclasses import dataclass


@dataclass
class InspectorConfig:
    """Base configuration for inspector rendering behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        draw_section_headers: Draw a title before the non-serialized, native
            property and button sections
        default_foldout_expanded: Initial state of a foldout that has never been toggled
        max_composite_depth: Deepest nesting level the struct walker unfolds
        excluded_composite_types: Extra types always drawn as a single leaf
        settings_organization: QSettings organization for persisted foldout state
        settings_application: QSettings application for persisted foldout state
        redraw_debounce_ms: Delay between a user edit and the redraw that consumes it
        slow_render_threshold_ms: Renders slower than this are logged as performance events
        performance_logger_name: Logger receiving render timings
    """

    draw_section_headers: bool = False
    default_foldout_expanded: bool = False
    max_composite_depth: int = 8
    excluded_composite_types: Tuple[Type, ...] = ()
    settings_organization: str = "pyqt_attrinspect"
    settings_application: str = "inspector"
    redraw_debounce_ms: int = 0
    slow_render_threshold_ms: float = 16.0
    performance_logger_name: str = "pyqt_attrinspect.performance"


# Global config instance (set by application)
_inspector_config: Optional[InspectorConfig] = None


def set_inspector_config(config: Optional[InspectorConfig]) -> None:
    """Set the global inspector configuration.

    Args:
        config: InspectorConfig instance, or None to restore defaults
    """
    global _inspector_config
    _inspector_config = config


def get_inspector_config() -> InspectorConfig:
    """Get the current inspector configuration.

    Returns:
        Current InspectorConfig or default if not set
    """
    if _inspector_config is None:
        return InspectorConfig()
    return _inspector_config
