"""
Context manager factory for temporary boolean flags.

Pattern:
    Instead of:
        self._in_render = True
        try:
            # ... draw
        finally:
            self._in_render = False

    Use:
        with FlagContextManager.render_context(self):
            # ... draw

Flags are validated against the InspectorFlag registry and always restored,
even when the body raises.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Set
import logging

logger = logging.getLogger(__name__)


class InspectorFlag(Enum):
    """
    Registry of valid inspector flags.

    Add new flags here as they're introduced to the codebase.
    """
    IN_RENDER = '_in_render'


class FlagContextManager:
    """
    Save/set/restore context managers for InspectorFlag attributes.

    Examples:
        with FlagContextManager.manage_flags(host, _in_render=True):
            pipeline.render(target)

        if FlagContextManager.is_flag_set(host, InspectorFlag.IN_RENDER):
            return  # widget signal fired while building the redraw
    """

    VALID_FLAGS: Set[str] = {flag.value for flag in InspectorFlag}

    @staticmethod
    @contextmanager
    def manage_flags(obj: Any, **flags: bool):
        """
        Set flags on entry and restore their previous values on exit.

        Raises:
            ValueError: If any flag name is not an InspectorFlag value
            AttributeError: If the object never initialized one of the flags
        """
        invalid_flags = set(flags.keys()) - FlagContextManager.VALID_FLAGS
        if invalid_flags:
            raise ValueError(
                f"Invalid flags: {invalid_flags}. "
                f"Valid flags: {FlagContextManager.VALID_FLAGS}. "
                f"Add new flags to InspectorFlag enum."
            )

        # Direct attribute access: every flag must be initialized by its owner.
        prev_values: Dict[str, bool] = {name: getattr(obj, name) for name in flags}
        for flag_name, flag_value in flags.items():
            setattr(obj, flag_name, flag_value)
        logger.debug(f"Flags {flags} set on {type(obj).__name__}")

        try:
            yield
        finally:
            for flag_name, prev_value in prev_values.items():
                setattr(obj, flag_name, prev_value)

    @staticmethod
    @contextmanager
    def render_context(obj: Any):
        """Mark ``obj`` as rendering for the duration of the block."""
        with FlagContextManager.manage_flags(obj, **{InspectorFlag.IN_RENDER.value: True}):
            yield

    @staticmethod
    def is_flag_set(obj: Any, flag: InspectorFlag) -> bool:
        """Check if a flag is currently set to True."""
        return getattr(obj, flag.value)
