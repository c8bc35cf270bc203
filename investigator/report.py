"""
Collect every Introspector query for the loaded object into a TypeReport.
"""

import logging

from investigator.errors import NotLoadedError
from investigator.introspector import Introspector
from investigator.members import declared_members
from investigator.schemas import MemberSummary, TypeReport

logger = logging.getLogger(__name__)


def build_report(introspector: Introspector, delimiter: str = "->") -> TypeReport:
    """
    Run every structural query against the loaded object.

    Args:
        introspector: Introspector with an object loaded
        delimiter: Delimiter for the rendered inheritance chain

    Returns:
        TypeReport

    Raises:
        NotLoadedError: If nothing is loaded
    """
    if introspector.loaded is None:
        raise NotLoadedError("build_report")

    cls = type(introspector.loaded)
    logger.debug(f"Building report for {cls.__module__}.{cls.__qualname__}")

    members = [
        MemberSummary(
            name=m.name,
            kind=m.kind.value,
            visibility=m.visibility.value,
            is_static=m.is_static,
            is_final=m.is_final,
            is_abstract=m.is_abstract,
            parameter_count=m.parameter_count,
        )
        for m in declared_members(cls)
    ]

    return TypeReport(
        type_name=f"{cls.__module__}.{cls.__qualname__}",
        simple_name=cls.__name__,
        total_methods=introspector.total_number_of_methods(),
        total_constructors=introspector.total_number_of_constructors(),
        total_fields=introspector.total_number_of_fields(),
        constant_fields=introspector.count_of_constant_fields(),
        static_methods=introspector.count_of_static_methods(),
        interfaces=sorted(introspector.all_implemented_interfaces()),
        is_extending=introspector.is_extending(),
        parent_class=introspector.parent_class_simple_name(),
        parent_is_abstract=introspector.is_parent_class_abstract(),
        all_field_names=sorted(introspector.names_of_all_fields_including_inheritance_chain()),
        inheritance_chain=introspector.inheritance_chain(delimiter),
        members=members,
    )
