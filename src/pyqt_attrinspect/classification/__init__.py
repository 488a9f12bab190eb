"""
Classification layer: annotation queries and render-plan partitioning.
"""

from .attribute_index import AttributeIndex, GroupKey
from .property_classifier import Group, PropertyClassifier, RenderPlan

__all__ = [
    "AttributeIndex",
    "GroupKey",
    "Group",
    "PropertyClassifier",
    "RenderPlan",
]
