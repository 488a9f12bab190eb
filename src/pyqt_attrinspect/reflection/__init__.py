"""
Reflection layer: discovered members and the type questions asked about them.
"""

from .member_types import Member, MemberKind
from .member_discovery import MemberDiscovery, MemberPredicate
from .type_utils import TypeUtils

__all__ = [
    "Member",
    "MemberKind",
    "MemberDiscovery",
    "MemberPredicate",
    "TypeUtils",
]
