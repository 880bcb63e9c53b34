"""Teardown Dispatch — marked lifecycle hook discovery and invocation."""

from teardown.dispatch.dispatcher import (
    DispatchProperties,
    HookDispatcher,
    adestroy,
    adestroy_all,
    destroy,
    destroy_all,
    get_default_dispatcher,
    initialize,
)
from teardown.dispatch.introspection import DeclaredHook, find_hooks
from teardown.dispatch.locks import ObjectLockRegistry

__all__ = [
    "DeclaredHook",
    "DispatchProperties",
    "HookDispatcher",
    "ObjectLockRegistry",
    "adestroy",
    "adestroy_all",
    "destroy",
    "destroy_all",
    "find_hooks",
    "get_default_dispatcher",
    "initialize",
]
