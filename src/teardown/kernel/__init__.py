"""Teardown Kernel — exception hierarchy with zero external dependencies."""

from teardown.kernel.exceptions import (
    HookAccessDeniedException,
    HookDispatchException,
    HookInvocationException,
    InvalidHookTargetException,
    LifecycleException,
)

__all__ = [
    "HookAccessDeniedException",
    "HookDispatchException",
    "HookInvocationException",
    "InvalidHookTargetException",
    "LifecycleException",
]
