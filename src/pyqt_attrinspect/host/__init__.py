"""
Host collaborators: the draw-primitive contract and a headless recorder.
"""

from .host_protocols import DrawResult, InspectorHost
from .recording_host import CommandKind, DrawCommand, RecordingHost

__all__ = [
    "DrawResult",
    "InspectorHost",
    "CommandKind",
    "DrawCommand",
    "RecordingHost",
]
