"""
Pydantic schemas for investigation reports.

Architecture:
- MemberSummary: One declared member of the inspected class
- TypeReport: Every query answered for one loaded object
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional


class MemberSummary(BaseModel):
    """A member declared directly on the inspected class."""
    name: str = Field(description="Attribute name as stored in the class namespace")
    kind: Literal["method", "constructor", "field"] = Field(description="Member kind")
    visibility: Literal["public", "protected", "private"] = Field(description="Visibility from naming convention")
    is_static: bool = Field(default=False, description="staticmethod/classmethod, or ClassVar field")
    is_final: bool = Field(default=False, description="Field that cannot be reassigned")
    is_abstract: bool = Field(default=False, description="Declared with @abstractmethod")
    parameter_count: Optional[int] = Field(
        None,
        description="Named parameters excluding self/cls; None for fields or unreadable signatures"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "area",
                "kind": "method",
                "visibility": "public",
                "is_static": False,
                "is_final": False,
                "is_abstract": False,
                "parameter_count": 0
            }
        }


class TypeReport(BaseModel):
    """
    Structural summary of the class of one loaded object.

    Sets are emitted as sorted lists so the JSON output is stable.
    """
    type_name: str = Field(description="Module-qualified class name")
    simple_name: str = Field(description="Short class name")
    total_methods: int = Field(ge=0, description="Declared methods, constructors excluded")
    total_constructors: int = Field(ge=0, description="Declared __new__/__init__")
    total_fields: int = Field(ge=0, description="Declared fields")
    constant_fields: int = Field(ge=0, description="Declared fields that cannot be reassigned")
    static_methods: int = Field(ge=0, description="Declared static and class methods")
    interfaces: List[str] = Field(default_factory=list, description="Protocols listed as direct bases")
    is_extending: bool = Field(description="Whether the class has a superclass other than object")
    parent_class: Optional[str] = Field(None, description="Short name of the superclass, if any")
    parent_is_abstract: bool = Field(default=False, description="Whether that superclass is abstract")
    all_field_names: List[str] = Field(
        default_factory=list,
        description="Field names declared anywhere along the superclass chain"
    )
    inheritance_chain: str = Field(description="Rendered chain from object to this class")
    members: List[MemberSummary] = Field(default_factory=list, description="Declared members")

    class Config:
        json_schema_extra = {
            "example": {
                "type_name": "shapes.Circle",
                "simple_name": "Circle",
                "total_methods": 2,
                "total_constructors": 1,
                "total_fields": 1,
                "constant_fields": 0,
                "static_methods": 0,
                "interfaces": ["Drawable"],
                "is_extending": True,
                "parent_class": "Shape",
                "parent_is_abstract": True,
                "all_field_names": ["name", "radius"],
                "inheritance_chain": "object->Shape->Circle",
                "members": []
            }
        }
