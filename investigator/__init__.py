"""
Investigator - structural introspection of loaded Python objects.

Main Components:
- Introspector: Queries and reflective actions on one loaded object
- members: Declared-member descriptors and superclass traversal
- Report: TypeReport summary of every query (pydantic)

Usage:
    from investigator import Introspector

    introspector = Introspector()
    introspector.load(some_object)
    introspector.total_number_of_methods()
    introspector.inheritance_chain("->")
"""

__version__ = "0.1.0"

from .errors import (
    InvestigationError,
    NotLoadedError,
    InvocationError,
    MemberLookupError,
    AccessViolation,
    TargetError,
)

from .api import Investigator
from .introspector import Introspector, UNLOADED_CHAIN
from .members import Member, MemberKind, TraversalMode, Visibility
from .schemas import MemberSummary, TypeReport
from .report import build_report

__all__ = [
    # Core
    "Investigator",
    "Introspector",
    "UNLOADED_CHAIN",

    # Descriptors
    "Member",
    "MemberKind",
    "TraversalMode",
    "Visibility",

    # Reports
    "MemberSummary",
    "TypeReport",
    "build_report",

    # Errors
    "InvestigationError",
    "NotLoadedError",
    "InvocationError",
    "MemberLookupError",
    "AccessViolation",
    "TargetError",
]
