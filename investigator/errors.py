"""
Exceptions raised by the investigator.

Every reflective fault (a missing member, a visibility violation, an exception
raised by the invoked code) surfaces as a single InvocationError. The
underlying exception is chained with ``raise ... from`` and kept on ``cause``.
"""

from typing import Optional


class InvestigationError(RuntimeError):
    """Base class for all investigator errors."""


class NotLoadedError(InvestigationError):
    """Raised when a query runs before any object has been loaded."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"No object loaded; cannot run {operation}()")


class InvocationError(InvestigationError):
    """Generic failure for any reflective lookup or invocation."""

    def __init__(self, member: str, cause: BaseException):
        self.member = member
        self.cause = cause
        super().__init__(f"{member}: {type(cause).__name__}: {cause}")


class MemberLookupError(LookupError):
    """No declared member matches the requested name, arity or signature."""


class AccessViolation(PermissionError):
    """A non-public member was invoked without elevating it first."""


class TargetError(InvestigationError):
    """Raised when a ``module:attribute`` target cannot be resolved."""

    def __init__(self, target: str, reason: str, cause: Optional[BaseException] = None):
        self.target = target
        self.cause = cause
        super().__init__(f"Cannot load target '{target}': {reason}")
