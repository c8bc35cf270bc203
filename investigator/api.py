"""
Capability protocol for object investigators.
"""

from typing import Any, Optional, Protocol, Sequence, Set, runtime_checkable


@runtime_checkable
class Investigator(Protocol):
    """Structural queries and reflective actions on one loaded object."""

    def load(self, obj: Any) -> None: ...

    def total_number_of_methods(self) -> int: ...

    def total_number_of_constructors(self) -> int: ...

    def total_number_of_fields(self) -> int: ...

    def all_implemented_interfaces(self) -> Set[str]: ...

    def count_of_constant_fields(self) -> int: ...

    def count_of_static_methods(self) -> int: ...

    def is_extending(self) -> bool: ...

    def parent_class_simple_name(self) -> Optional[str]: ...

    def is_parent_class_abstract(self) -> bool: ...

    def names_of_all_fields_including_inheritance_chain(self) -> Set[str]: ...

    def invoke_method_that_returns_int(self, method_name: str, *args: Any) -> int: ...

    def create_instance(self, number_of_args: int, *args: Any) -> Any: ...

    def elevate_method_and_invoke(self, name: str, parameter_types: Sequence[Any], *args: Any) -> Any: ...

    def inheritance_chain(self, delimiter: str) -> str: ...
