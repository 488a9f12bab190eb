"""
Render orchestration: editor sessions and the per-redraw pipeline.
"""

from .inspector_session import InspectorSession, takes_no_arguments
from .render_pipeline import DrawStrategy, InspectorRenderPipeline

__all__ = [
    "DrawStrategy",
    "InspectorRenderPipeline",
    "InspectorSession",
    "takes_no_arguments",
]
