"""
Introspector: structural queries against the runtime class of one object.

Each query re-derives what it needs from ``type(self.loaded)``; only members
declared on that class are considered, except for the inheritance-chain
queries, which follow the superclass chain up to ``object``.
"""

import logging
from typing import Any, List, Optional, Sequence, Set

from investigator.errors import AccessViolation, InvocationError, MemberLookupError, NotLoadedError
from investigator.members import (
    ROOT_TYPE,
    Member,
    MemberKind,
    TraversalMode,
    Visibility,
    accepts_arity,
    ancestors,
    bind_member,
    declared_members,
    find_method,
    implicit_constructor,
    interfaces_of,
    is_abstract_class,
    superclass_of,
)

logger = logging.getLogger(__name__)

# Returned by inheritance_chain() while nothing is loaded.
UNLOADED_CHAIN = "NULL"


class Introspector:
    """
    Answers questions about the class of a loaded object.

    Example:
        >>> introspector = Introspector()
        >>> introspector.load(OrderedDict())
        >>> introspector.inheritance_chain("->")
        'object->dict->OrderedDict'
    """

    def __init__(self):
        self.loaded: Any = None

    def load(self, obj: Any) -> None:
        """Replace the loaded object. Loading None unloads."""
        self.loaded = obj
        if obj is None:
            logger.info("Introspector unloaded")
        else:
            logger.info(f"Loaded instance of {type(obj).__qualname__}")

    # ------------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------------

    def _loaded_type(self, operation: str) -> type:
        if self.loaded is None:
            raise NotLoadedError(operation)
        return type(self.loaded)

    def _declared(self, operation: str, kind: MemberKind) -> List[Member]:
        cls = self._loaded_type(operation)
        return [
            m for klass in ancestors(cls, TraversalMode.DECLARED)
            for m in declared_members(klass) if m.kind is kind
        ]

    def _qualifying_parent(self, operation: str) -> Optional[type]:
        parent = superclass_of(self._loaded_type(operation))
        if parent is None or parent is ROOT_TYPE:
            return None
        return parent

    # ------------------------------------------------------------------------
    # declared members
    # ------------------------------------------------------------------------

    def total_number_of_methods(self) -> int:
        return len(self._declared("total_number_of_methods", MemberKind.METHOD))

    def total_number_of_constructors(self) -> int:
        return len(self._declared("total_number_of_constructors", MemberKind.CONSTRUCTOR))

    def total_number_of_fields(self) -> int:
        return len(self._declared("total_number_of_fields", MemberKind.FIELD))

    def all_implemented_interfaces(self) -> Set[str]:
        """Short names of the protocols the class lists as direct bases."""
        cls = self._loaded_type("all_implemented_interfaces")
        return {iface.__name__ for iface in interfaces_of(cls)}

    def count_of_constant_fields(self) -> int:
        fields = self._declared("count_of_constant_fields", MemberKind.FIELD)
        return sum(1 for f in fields if f.is_final)

    def count_of_static_methods(self) -> int:
        methods = self._declared("count_of_static_methods", MemberKind.METHOD)
        return sum(1 for m in methods if m.is_static)

    # ------------------------------------------------------------------------
    # hierarchy
    # ------------------------------------------------------------------------

    def is_extending(self) -> bool:
        return self._qualifying_parent("is_extending") is not None

    def parent_class_simple_name(self) -> Optional[str]:
        parent = self._qualifying_parent("parent_class_simple_name")
        return parent.__name__ if parent is not None else None

    def is_parent_class_abstract(self) -> bool:
        parent = self._qualifying_parent("is_parent_class_abstract")
        return parent is not None and is_abstract_class(parent)

    def names_of_all_fields_including_inheritance_chain(self) -> Set[str]:
        cls = self._loaded_type("names_of_all_fields_including_inheritance_chain")
        names = set()
        for klass in ancestors(cls, TraversalMode.ANCESTORS):
            names.update(m.name for m in declared_members(klass) if m.kind is MemberKind.FIELD)
        return names

    def inheritance_chain(self, delimiter: str) -> str:
        """
        Render the superclass chain from ``object`` down to the loaded class.

        Args:
            delimiter: Placed between consecutive class names (e.g. "->")

        Returns:
            e.g. "object->Base->Derived", or UNLOADED_CHAIN when nothing is loaded
        """
        if self.loaded is None:
            return UNLOADED_CHAIN
        chain = ancestors(type(self.loaded), TraversalMode.ANCESTORS)
        return delimiter.join(cls.__name__ for cls in reversed(chain))

    # ------------------------------------------------------------------------
    # reflective actions
    # ------------------------------------------------------------------------

    def invoke_method_that_returns_int(self, method_name: str, *args: Any) -> int:
        """
        Invoke the declared zero-parameter method ``method_name``.

        The method is found by name alone; ``args`` are passed through as given.
        Non-public methods are refused.

        Raises:
            InvocationError: on any lookup, access or invocation failure, or
                when the result is not an int
        """
        cls = self._loaded_type("invoke_method_that_returns_int")
        try:
            member = find_method(cls, method_name)
            if member.visibility is not Visibility.PUBLIC:
                raise AccessViolation(
                    f"{member.visibility.value} method '{method_name}' of {cls.__name__} is not accessible"
                )
            logger.debug(f"Invoking {cls.__name__}.{member.name} with {len(args)} argument(s)")
            result = bind_member(member, self.loaded)(*args)
            if isinstance(result, bool) or not isinstance(result, int):
                raise TypeError(f"'{method_name}' returned {type(result).__name__}, not int")
        except Exception as e:
            raise InvocationError(method_name, e) from e
        return result

    def create_instance(self, number_of_args: int, *args: Any) -> Any:
        """
        Build a new instance of the loaded class.

        A declared constructor taking exactly ``number_of_args`` parameters
        selects the call, then one that accepts that many through ``*args``
        or has an unreadable signature. A class declaring no constructor is
        matched against the one it inherits (see implicit_constructor()).
        ``self.loaded`` is left as it was.

        Raises:
            InvocationError: when no constructor matches or construction raises
        """
        cls = self._loaded_type("create_instance")
        label = f"{cls.__name__}()"
        try:
            constructors = self._declared("create_instance", MemberKind.CONSTRUCTOR)
            if not constructors:
                constructors = [implicit_constructor(cls)]
            constructor = next(
                (c for c in constructors if c.parameter_count == number_of_args),
                next((c for c in constructors if accepts_arity(c, number_of_args)), None),
            )
            if constructor is None:
                raise MemberLookupError(
                    f"{cls.__name__} has no constructor taking {number_of_args} argument(s)"
                )
            logger.debug(f"Constructing {cls.__name__} via {constructor.owner.__name__}.{constructor.name}")
            return cls(*args)
        except Exception as e:
            raise InvocationError(label, e) from e

    def elevate_method_and_invoke(self, name: str, parameter_types: Sequence[Any], *args: Any) -> Any:
        """
        Invoke a declared method whatever its visibility.

        Args:
            name: Method name; private methods may be named unmangled ("__secret")
            parameter_types: Exact parameter annotations, self excluded
            *args: Passed to the method as given

        Returns:
            Whatever the method returns

        Raises:
            InvocationError: on any lookup or invocation failure
        """
        cls = self._loaded_type("elevate_method_and_invoke")
        try:
            member = find_method(cls, name, parameter_types)
            logger.debug(f"Elevating {member.visibility.value} method {cls.__name__}.{member.name}")
            return bind_member(member, self.loaded)(*args)
        except Exception as e:
            raise InvocationError(name, e) from e
