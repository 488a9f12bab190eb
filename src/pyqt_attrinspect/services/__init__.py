"""
Service layer shared by the classifier, the pipeline and the Qt host.
"""

from .enum_dispatch_service import EnumDispatchService
from .flag_context_manager import FlagContextManager, InspectorFlag

__all__ = [
    "EnumDispatchService",
    "FlagContextManager",
    "InspectorFlag",
]
