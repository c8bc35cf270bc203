"""
Resolve ``package.module:Attribute`` targets into objects to investigate.
"""

import builtins
import importlib
import logging
from typing import Any, List, Optional, Sequence

from investigator.errors import TargetError

logger = logging.getLogger(__name__)


def coerce_argument(raw: str) -> Any:
    """Convert a command-line string into int, float, bool, None or str."""
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered == "none":
        return None
    for convert in (int, float):
        try:
            return convert(raw)
        except ValueError:
            pass
    return raw


def resolve_target(target: str) -> Any:
    """
    Import ``module:attr.path`` and return the attribute.

    Raises:
        TargetError: If the module cannot be imported or the attribute is missing
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise TargetError(target, "expected the form 'package.module:Attribute'")

    try:
        obj = importlib.import_module(module_name)
    except Exception as e:
        raise TargetError(target, f"failed to import {module_name}: {e}", e) from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise TargetError(target, f"no attribute '{part}'", e) from e

    return obj


def resolve_type_name(name: str) -> Any:
    """Map a builtin type name ("int") or a "module:Qualname" target to a type."""
    if ":" in name:
        return resolve_target(name)
    builtin = getattr(builtins, name, None)
    if not isinstance(builtin, type):
        raise TargetError(name, "not a builtin type; use 'module:TypeName'")
    return builtin


def load_target(target: str, args: Optional[Sequence[str]] = None) -> Any:
    """
    Resolve ``target`` and instantiate it when it is a class.

    Args:
        target: "package.module:ClassName" (dotted paths after the colon allowed)
        args: Constructor arguments as strings, converted with coerce_argument()

    Returns:
        The new instance, or the resolved object itself when it is not a class
        and no arguments were given
    """
    obj = resolve_target(target)
    values: List[Any] = [coerce_argument(a) for a in (args or [])]

    if not isinstance(obj, type):
        if values:
            raise TargetError(target, "arguments given but the target is not a class")
        logger.debug(f"Target {target} is a {type(obj).__name__} instance")
        return obj

    try:
        instance = obj(*values)
    except Exception as e:
        raise TargetError(target, f"constructor raised {type(e).__name__}: {e}", e) from e

    logger.info(f"Instantiated {target} with {len(values)} argument(s)")
    return instance
