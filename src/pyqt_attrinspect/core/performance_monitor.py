"""Performance monitoring utilities for the attribute inspector.

Provides a context manager for timing redraws and logging slow ones to the
configured performance logger. No handlers are installed here; applications
route the performance logger like any other.
"""

import time
import logging
from contextlib import contextmanager
from typing import Optional

from pyqt_attrinspect.protocols.inspector_config import get_inspector_config


def _perf_logger() -> logging.Logger:
    return logging.getLogger(get_inspector_config().performance_logger_name)


@contextmanager
def timer(operation_name: str, threshold_ms: Optional[float] = None, log_args: bool = False, **kwargs):
    """Context manager for timing operations.

    Args:
        operation_name: Name of the operation being timed
        threshold_ms: Only log if operation takes longer than this (in milliseconds);
            defaults to InspectorConfig.slow_render_threshold_ms
        log_args: Whether to log kwargs in the message
        **kwargs: Additional context to include in log message

    Example:
        with timer("Inspector render", target_type="Enemy", log_args=True):
            pipeline.render(target)
    """
    if threshold_ms is None:
        threshold_ms = get_inspector_config().slow_render_threshold_ms

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000

        if elapsed_ms >= threshold_ms:
            msg = f"{operation_name}: {elapsed_ms:.2f}ms"
            if log_args and kwargs:
                args_str = ", ".join(f"{k}={v}" for k, v in kwargs.items())
                msg += f" ({args_str})"

            _perf_logger().debug(msg)
