"""
Type descriptors derived from a class's own namespace.

Python has no declared-member tables, so they are reconstructed here from
``cls.__dict__``, the class's own annotations and its ``__slots__``:

- Methods: functions, staticmethods, classmethods and builtin method
  descriptors (constructors excluded)
- Constructors: ``__new__`` and ``__init__``
- Fields: annotated names, slots, plain data attributes, properties and
  builtin member/getset descriptors

Nothing is cached; every call re-reads the class.
"""

import abc
import dataclasses
import functools
import inspect
import logging
import re
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from investigator.errors import MemberLookupError

logger = logging.getLogger(__name__)

ROOT_TYPE = object

CONSTRUCTOR_NAMES = ("__new__", "__init__")

# Bases that only mark a class (abstractness, genericity) and never count as
# its superclass.
MARKER_BASES = (abc.ABC, typing.Generic, typing.Protocol)

# Names the interpreter (abc, typing) writes into class namespaces.
BOOKKEEPING_NAMES = frozenset({"_abc_impl", "_is_protocol", "_is_runtime_protocol"})

# Entries the compiler generates for lazily evaluated annotations.
GENERATED_NAMES = frozenset({"__annotate__", "__annotate_func__", "__annotations_cache__"})

METHOD_TYPES = (
    types.FunctionType,
    staticmethod,
    classmethod,
    functools.partialmethod,
    functools.singledispatchmethod,
    types.BuiltinFunctionType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
)

STATIC_TYPES = (
    staticmethod,
    classmethod,
    types.BuiltinFunctionType,
    types.ClassMethodDescriptorType,
)

_FINAL_ANNOTATION = re.compile(r"^(?:typing\.|t\.)?Final\b")
_MISSING = object()


class MemberKind(str, Enum):
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    FIELD = "field"


class Visibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class TraversalMode(str, Enum):
    """How far up the superclass chain a query looks."""
    DECLARED = "declared"
    ANCESTORS = "ancestors"


@dataclass(frozen=True)
class Member:
    """A member declared directly on ``owner``."""
    name: str
    kind: MemberKind
    visibility: Visibility
    owner: type
    value: Any = field(default=None, repr=False, compare=False)
    is_static: bool = False
    is_final: bool = False
    is_abstract: bool = False
    parameter_count: Optional[int] = None
    variadic: bool = False


# ============================================================================
# NAMES
# ============================================================================

def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_sunder(name: str) -> bool:
    return (
        len(name) > 2
        and name[0] == name[-1] == "_"
        and name[1] != "_"
        and name[-2] != "_"
    )


def _mangle_prefix(cls: type) -> Optional[str]:
    stripped = cls.__name__.lstrip("_")
    return f"_{stripped}__" if stripped else None


def resolve_name(cls: type, name: str) -> str:
    """Apply private name mangling, so ``__secret`` finds ``_Cls__secret``."""
    prefix = _mangle_prefix(cls)
    if prefix and name.startswith("__") and not name.endswith("__"):
        return prefix + name[2:]
    return name


def visibility_of(cls: type, name: str) -> Visibility:
    if is_dunder(name):
        return Visibility.PUBLIC
    prefix = _mangle_prefix(cls)
    if name.startswith("__") or (prefix and name.startswith(prefix)):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


# ============================================================================
# SIGNATURES
# ============================================================================

def _unwrap(value: Any) -> Any:
    return value.__func__ if isinstance(value, (staticmethod, classmethod)) else value


def _signature(value: Any) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(_unwrap(value))
    except (TypeError, ValueError):
        return None


def _named_parameters(value: Any) -> Optional[List[inspect.Parameter]]:
    """Named parameters of a method, without the bound first one and without
    ``*args``/``**kwargs``. None when the signature cannot be read."""
    signature = _signature(value)
    if signature is None:
        return None
    function = _unwrap(value)

    parameters = list(signature.parameters.values())
    # __new__ is stored as a staticmethod but still receives the class.
    bound_first = not isinstance(value, staticmethod) or getattr(function, "__name__", "") == "__new__"
    if bound_first and parameters and parameters[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        parameters = parameters[1:]

    return [
        p for p in parameters
        if p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


def parameter_count(value: Any) -> Optional[int]:
    parameters = _named_parameters(value)
    return None if parameters is None else len(parameters)


def is_variadic(value: Any) -> bool:
    signature = _signature(value)
    return signature is not None and any(
        p.kind is inspect.Parameter.VAR_POSITIONAL for p in signature.parameters.values()
    )


def accepts_arity(member: Member, count: int) -> bool:
    """
    Whether ``member`` can be called with ``count`` positional arguments.

    Defaults make a range of counts acceptable and ``*args`` lifts the upper
    bound. An unreadable signature (common for builtins) accepts any count.
    """
    parameters = _named_parameters(member.value)
    if parameters is None:
        return True
    if any(p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty for p in parameters):
        return False

    positional = [p for p in parameters if p.kind is not inspect.Parameter.KEYWORD_ONLY]
    required = sum(1 for p in positional if p.default is inspect.Parameter.empty)
    if count < required:
        return False
    return member.variadic or count <= len(positional)


def parameter_types(member: Member) -> Optional[List[Any]]:
    """
    Resolved annotation of each named parameter, in order.

    Unannotated parameters come back as ``inspect.Parameter.empty``; string
    annotations that cannot be resolved come back as the string.
    """
    parameters = _named_parameters(member.value)
    if parameters is None:
        return None

    try:
        hints = typing.get_type_hints(_unwrap(member.value))
    except Exception:
        hints = {}

    return [hints.get(p.name, p.annotation) for p in parameters]


def _type_matches(annotation: Any, requested: Any) -> bool:
    if annotation is inspect.Parameter.empty:
        return requested is object or requested is typing.Any
    return annotation == requested


def signature_matches(member: Member, requested: Sequence[Any]) -> bool:
    actual = parameter_types(member)
    if actual is None or len(actual) != len(requested):
        return False
    return all(_type_matches(a, r) for a, r in zip(actual, requested))


# ============================================================================
# CLASSIFICATION
# ============================================================================

def _is_final_annotation(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return bool(_FINAL_ANNOTATION.match(annotation.strip()))
    return annotation is typing.Final or typing.get_origin(annotation) is typing.Final


def _own_annotations(cls: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(cls))
    except Exception as e:
        logger.debug(f"Could not read annotations of {cls.__qualname__}: {e}")
        return {}


def _own_slots(cls: type) -> List[str]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [name for name in slots if not is_dunder(name)]


def _is_synthesised(cls: type, name: str, value: Any) -> bool:
    """
    Routines written into the namespace rather than declared in the class
    body: hooks typing installs on Protocol subclasses, and an ancestor's
    ``__init__`` that typing copies down on first instantiation.
    """
    if not isinstance(value, METHOD_TYPES):
        return False
    if isinstance(value, types.FunctionType) and value.__module__ == "typing" and cls.__module__ != "typing":
        return True
    return any(base.__dict__.get(name, _MISSING) is value for base in cls.__mro__[1:])


def _classify(cls: type, name: str, value: Any) -> Optional[MemberKind]:
    if name in GENERATED_NAMES or _is_synthesised(cls, name, value):
        return None
    if name in CONSTRUCTOR_NAMES:
        return MemberKind.CONSTRUCTOR if isinstance(value, METHOD_TYPES) else None
    if isinstance(value, METHOD_TYPES):
        return MemberKind.METHOD
    if is_dunder(name) or is_sunder(name) or name in BOOKKEEPING_NAMES:
        return None
    if isinstance(value, type):
        # Nested classes are neither fields nor methods.
        return None
    return MemberKind.FIELD


def _frozen_dataclass_fields(cls: type) -> frozenset:
    params = cls.__dict__.get("__dataclass_params__")
    if params is None or not params.frozen:
        return frozenset()
    return frozenset(cls.__dict__.get("__dataclass_fields__", {}))


def _field_is_final(name: str, value: Any, annotation: Any, frozen: frozenset) -> bool:
    if annotation is not _MISSING and _is_final_annotation(annotation):
        return True
    if isinstance(value, property):
        return value.fset is None
    return name in frozen


def _routine_member(cls: type, name: str, value: Any, kind: MemberKind) -> Member:
    return Member(
        name=name,
        kind=kind,
        visibility=visibility_of(cls, name),
        owner=cls,
        value=value,
        is_static=isinstance(value, STATIC_TYPES),
        is_abstract=bool(getattr(value, "__isabstractmethod__", False)),
        parameter_count=parameter_count(value),
        variadic=is_variadic(value),
    )


def _field_member(cls: type, name: str, value: Any, annotation: Any, frozen: frozenset) -> Member:
    is_class_var = annotation is not _MISSING and (
        annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar
    )
    return Member(
        name=name,
        kind=MemberKind.FIELD,
        visibility=visibility_of(cls, name),
        owner=cls,
        value=None if value is _MISSING else value,
        is_static=is_class_var,
        is_final=_field_is_final(name, value, annotation, frozen),
        is_abstract=bool(getattr(value, "__isabstractmethod__", False)),
    )


def declared_members(cls: type) -> List[Member]:
    """
    List every member declared directly on ``cls``.

    Annotated fields come first in annotation order, then slots, then the
    remaining namespace entries in definition order. Names are unique.
    """
    namespace = cls.__dict__
    annotations = _own_annotations(cls)
    frozen = _frozen_dataclass_fields(cls)
    members: Dict[str, Member] = {}

    for name, annotation in annotations.items():
        if is_dunder(name) or isinstance(annotation, dataclasses.InitVar):
            continue
        value = namespace.get(name, _MISSING)
        if value is not _MISSING and _classify(cls, name, value) is not MemberKind.FIELD:
            continue
        members[name] = _field_member(cls, name, value, annotation, frozen)

    for name in _own_slots(cls):
        if name not in members:
            members[name] = _field_member(cls, name, namespace.get(name, _MISSING), _MISSING, frozen)

    for name, value in namespace.items():
        if name in members:
            continue
        kind = _classify(cls, name, value)
        if kind is None:
            continue
        if kind is MemberKind.FIELD:
            members[name] = _field_member(cls, name, value, _MISSING, frozen)
        else:
            members[name] = _routine_member(cls, name, value, kind)

    logger.debug(f"{cls.__qualname__} declares {len(members)} members")
    return list(members.values())


def implicit_constructor(cls: type) -> Member:
    """
    The constructor ``cls`` runs when it declares neither ``__new__`` nor
    ``__init__``: the nearest inherited ``__init__``, else the nearest
    inherited ``__new__``, else ``object``'s zero-argument one.
    """
    for name in reversed(CONSTRUCTOR_NAMES):
        for base in cls.__mro__[1:-1]:
            value = base.__dict__.get(name, _MISSING)
            if value is _MISSING or base in MARKER_BASES or _is_synthesised(base, name, value):
                continue
            return _routine_member(base, name, value, MemberKind.CONSTRUCTOR)

    return Member(
        name="__init__",
        kind=MemberKind.CONSTRUCTOR,
        visibility=Visibility.PUBLIC,
        owner=ROOT_TYPE,
        value=ROOT_TYPE.__init__,
        parameter_count=0,
    )


def find_method(cls: type, name: str, requested_types: Sequence[Any] = ()) -> Member:
    """
    Find the declared method ``name`` whose parameters are exactly
    ``requested_types``. Raises MemberLookupError otherwise.
    """
    resolved = resolve_name(cls, name)
    for member in declared_members(cls):
        if member.kind is not MemberKind.METHOD or member.name != resolved:
            continue
        if signature_matches(member, list(requested_types)):
            return member
        wanted = ", ".join(getattr(t, "__name__", str(t)) for t in requested_types)
        raise MemberLookupError(f"{cls.__name__}.{name} does not take ({wanted})")

    raise MemberLookupError(f"{cls.__name__} declares no method '{name}'")


def bind_member(member: Member, instance: Any):
    """Bind a raw namespace entry to ``instance`` through the descriptor
    protocol, regardless of its visibility."""
    getter = getattr(type(member.value), "__get__", None)
    if getter is None:
        return member.value
    return getter(member.value, instance, type(instance))


# ============================================================================
# HIERARCHY
# ============================================================================

def is_interface(cls: type) -> bool:
    """A class is an interface when it is a ``typing.Protocol``."""
    return (
        isinstance(cls, type)
        and cls is not typing.Protocol
        and bool(cls.__dict__.get("_is_protocol", False))
    )


def is_abstract_class(cls: type) -> bool:
    return inspect.isabstract(cls) or abc.ABC in cls.__bases__


def superclass_of(cls: type) -> Optional[type]:
    """The direct superclass, skipping interfaces and marker bases.

    Returns ``object`` when nothing else qualifies and None for ``object``.
    """
    if cls is ROOT_TYPE:
        return None
    for base in cls.__bases__:
        if base in MARKER_BASES or is_interface(base):
            continue
        return base
    return ROOT_TYPE


def interfaces_of(cls: type) -> List[type]:
    return [base for base in cls.__bases__ if is_interface(base)]


def ancestors(cls: type, mode: TraversalMode = TraversalMode.ANCESTORS) -> List[type]:
    """
    Classes a query should look at, most derived first.

    DECLARED yields only ``cls``; ANCESTORS follows superclass_of() up to and
    including ``object``.
    """
    if mode is TraversalMode.DECLARED:
        return [cls]

    chain = []
    current: Optional[type] = cls
    while current is not None:
        chain.append(current)
        current = superclass_of(current)
    return chain
