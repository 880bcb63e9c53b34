"""Exception hierarchy for lifecycle hook dispatch.

All dispatch failures inherit from LifecycleException, so callers can catch
the base class to handle any teardown error, or a specific subclass for
targeted handling.

Categories:
- HookAccessDeniedException: the access policy refused to expose a hook
- InvalidHookTargetException: the hook cannot be called with zero arguments
- HookInvocationException: the hook body itself raised
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class LifecycleException(Exception):
    """Base exception for all lifecycle dispatch errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "HOOK_INVOCATION_FAILED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Dispatch Exceptions
# =============================================================================


class HookDispatchException(LifecycleException):
    """A marked hook was found on a type but could not be dispatched."""

    default_code = "HOOK_DISPATCH_FAILED"

    def __init__(self, message: str, *, type_name: str, hook_name: str | None) -> None:
        self.type_name = type_name
        self.hook_name = hook_name
        super().__init__(
            message,
            code=self.default_code,
            context={"type": type_name, "hook": hook_name},
        )


class HookAccessDeniedException(HookDispatchException):
    """The access policy refused to make a private hook callable."""

    default_code = "HOOK_ACCESS_DENIED"


class InvalidHookTargetException(HookDispatchException):
    """The hook cannot be invoked against the object with zero arguments."""

    default_code = "HOOK_INVALID_TARGET"


class HookInvocationException(HookDispatchException):
    """The hook body raised; the original error is kept as ``__cause__``."""

    default_code = "HOOK_INVOCATION_FAILED"
