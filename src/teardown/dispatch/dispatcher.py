# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""HookDispatcher — finds and runs marked lifecycle hooks on arbitrary objects.

Objects opt in by marking a method with ``@pre_destroy`` (or
``@post_construct``); no base class or protocol is involved. Each call
resolves the hook afresh from the object's type, runs it under a lock scoped
to that object, and reports whether a hook ran.
"""

from __future__ import annotations

import inspect
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from teardown.context.lifecycle import POST_CONSTRUCT, PRE_DESTROY
from teardown.core.config import Config, config_properties
from teardown.dispatch.introspection import DeclaredHook, accepts_no_arguments, find_hooks, type_name
from teardown.dispatch.locks import ObjectLockRegistry
from teardown.kernel.exceptions import (
    HookAccessDeniedException,
    HookDispatchException,
    HookInvocationException,
    InvalidHookTargetException,
)
from teardown.logging.port import LoggingPort
from teardown.logging.structlog_adapter import StructlogAdapter

_MODES = ("first", "all")

_MARKER_NAMES = {
    PRE_DESTROY: "pre_destroy",
    POST_CONSTRUCT: "post_construct",
}

# Shared by every dispatcher and by both the sync and async paths.
_OBJECT_LOCKS = ObjectLockRegistry()


@config_properties(prefix="teardown.dispatch")
@dataclass
class DispatchProperties:
    """Dispatch settings bound from ``teardown.dispatch``.

    ``mode`` is ``first`` (run the first marked method in declaration order)
    or ``all`` (run every marked method). ``allow_private`` controls whether
    hooks whose names start with an underscore may be made callable.
    """

    mode: str = "first"
    allow_private: bool = True

    def __post_init__(self) -> None:
        self.mode = str(self.mode).lower()
        if self.mode not in _MODES:
            raise ValueError(f"Unknown dispatch mode '{self.mode}', expected one of {_MODES}")


class HookDispatcher:
    """Locate and invoke marked lifecycle hooks.

    Args:
        logger: structlog-style logger receiving diagnostics. Defaults to
            the ``teardown.dispatch`` structlog logger.
        properties: Dispatch settings. Defaults to ``DispatchProperties()``.
    """

    def __init__(
        self,
        logger: Any | None = None,
        properties: DispatchProperties | None = None,
    ) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("teardown.dispatch")
        self._properties = properties or DispatchProperties()
        self._locks = _OBJECT_LOCKS

    @classmethod
    def from_config(cls, config: Config, logging_port: LoggingPort | None = None) -> HookDispatcher:
        """Build a dispatcher from configuration, optionally logging through *logging_port*."""
        logger = logging_port.get_logger("teardown.dispatch") if logging_port is not None else None
        return cls(logger=logger, properties=config.bind(DispatchProperties))

    @property
    def properties(self) -> DispatchProperties:
        return self._properties

    # ------------------------------------------------------------------
    # Synchronous dispatch
    # ------------------------------------------------------------------

    def destroy(self, obj: Any) -> bool:
        """Run the ``@pre_destroy`` hook of *obj*.

        Returns ``True`` if a hook ran, ``False`` if the type declares none.

        Raises:
            HookAccessDeniedException: private hooks are disallowed.
            InvalidHookTargetException: the hook cannot be called with no
                arguments, or is a coroutine function.
            HookInvocationException: the hook raised; the original error is
                the ``__cause__``.
        """
        return self.dispatch(obj, PRE_DESTROY)

    def initialize(self, obj: Any) -> bool:
        """Run the ``@post_construct`` hook of *obj*, with the semantics of :meth:`destroy`."""
        return self.dispatch(obj, POST_CONSTRUCT)

    def dispatch(self, obj: Any, marker: str) -> bool:
        """Run the hook(s) of *obj* carrying *marker*."""
        with self._locks.hold(obj):
            ran = False
            for hook in self._select(type(obj), marker):
                method = self._prepare(obj, hook, marker)
                if hook.is_coroutine:
                    raise self._fail(
                        InvalidHookTargetException,
                        hook,
                        marker,
                        "coroutine hooks require async dispatch",
                    )
                self._invoke(hook, marker, method)
                ran = True
            if not ran:
                self._log_not_found(obj, marker)
            return ran

    def destroy_all(self, mapping: Mapping[str, Any] | None) -> None:
        """Run :meth:`destroy` on every value of *mapping*.

        ``None`` and empty mappings are no-ops. The sweep holds the lock
        scoped to *mapping* throughout, and stops at the first failure.
        """
        if mapping is None:
            return
        with self._locks.hold(mapping):
            values = list(mapping.values())
            if not values:
                return
            for value in values:
                self.destroy(value)

    # ------------------------------------------------------------------
    # Asynchronous dispatch
    # ------------------------------------------------------------------

    async def adestroy(self, obj: Any) -> bool:
        """Async :meth:`destroy`; awaitable hook results are awaited.

        Shares the per-object lock with :meth:`destroy`, so a thread and a
        coroutine never run hooks of the same object at the same time.
        """
        return await self.adispatch(obj, PRE_DESTROY)

    async def ainitialize(self, obj: Any) -> bool:
        """Async :meth:`initialize`; awaitable hook results are awaited."""
        return await self.adispatch(obj, POST_CONSTRUCT)

    async def adispatch(self, obj: Any, marker: str) -> bool:
        """Async :meth:`dispatch`."""
        async with self._locks.hold_async(obj):
            ran = False
            for hook in self._select(type(obj), marker):
                method = self._prepare(obj, hook, marker)
                try:
                    result = method()
                    if inspect.isawaitable(result):
                        await result
                except Exception as exc:
                    raise self._fail(HookInvocationException, hook, marker, str(exc)) from exc
                self._log_invoked(hook, marker)
                ran = True
            if not ran:
                self._log_not_found(obj, marker)
            return ran

    async def adestroy_all(self, mapping: Mapping[str, Any] | None) -> None:
        """Async :meth:`destroy_all`, with the same no-op and abort rules."""
        if mapping is None:
            return
        async with self._locks.hold_async(mapping):
            values = list(mapping.values())
            if not values:
                return
            for value in values:
                await self.adestroy(value)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _select(self, cls: type, marker: str) -> list[DeclaredHook]:
        hooks = find_hooks(cls, marker)
        if self._properties.mode == "first":
            return hooks[:1]
        return hooks

    def _prepare(self, obj: Any, hook: DeclaredHook, marker: str) -> Any:
        """Bind *hook* to *obj* and check that it can be called bare."""
        if hook.is_private and not self._properties.allow_private:
            raise self._fail(
                HookAccessDeniedException,
                hook,
                marker,
                "private hooks are disabled (teardown.dispatch.allow-private)",
            )

        method = hook.bind(obj)
        if not callable(method):
            raise self._fail(InvalidHookTargetException, hook, marker, "marked attribute is not callable")
        if not accepts_no_arguments(method):
            raise self._fail(
                InvalidHookTargetException,
                hook,
                marker,
                f"hook requires arguments {inspect.signature(method)}",
            )
        return method

    def _invoke(self, hook: DeclaredHook, marker: str, method: Any) -> None:
        try:
            result = method()
        except Exception as exc:
            raise self._fail(HookInvocationException, hook, marker, str(exc)) from exc
        if inspect.iscoroutine(result):
            result.close()
            raise self._fail(
                InvalidHookTargetException,
                hook,
                marker,
                "hook returned a coroutine; use async dispatch",
            )
        self._log_invoked(hook, marker)

    def _log_invoked(self, hook: DeclaredHook, marker: str) -> None:
        self._logger.debug(
            "lifecycle_hook_invoked",
            type=hook.qualified_type,
            hook=hook.name,
            marker=_MARKER_NAMES.get(marker, marker),
        )

    def _log_not_found(self, obj: Any, marker: str) -> None:
        self._logger.debug(
            "lifecycle_hook_not_found",
            type=type_name(type(obj)),
            marker=_MARKER_NAMES.get(marker, marker),
        )

    def _fail(
        self,
        exc_type: type[HookDispatchException],
        hook: DeclaredHook,
        marker: str,
        reason: str,
    ) -> HookDispatchException:
        """Emit the failure diagnostic and build the exception to raise."""
        marker_name = _MARKER_NAMES.get(marker, marker)
        self._logger.error(
            "lifecycle_hook_failed",
            type=hook.qualified_type,
            hook=hook.name,
            marker=marker_name,
            error=reason,
        )
        return exc_type(
            f"An exception occurred while processing @{marker_name} on {hook.qualified_type}.{hook.name}(): {reason}",
            type_name=hook.qualified_type,
            hook_name=hook.name,
        )


_default_dispatcher: HookDispatcher | None = None
_default_lock = threading.Lock()


def get_default_dispatcher() -> HookDispatcher:
    """The shared dispatcher used by the module-level functions.

    Built lazily from the built-in defaults plus ``TEARDOWN_*`` environment
    overrides. Building it configures logging through :class:`StructlogAdapter`
    from ``teardown.logging.*``: diagnostics go to stderr and events below
    the root level (INFO by default) are dropped. Applications that manage
    structlog themselves should construct their own :class:`HookDispatcher`.
    """
    global _default_dispatcher
    with _default_lock:
        if _default_dispatcher is None:
            config = Config.defaults()
            adapter = StructlogAdapter()
            adapter.configure(config)
            _default_dispatcher = HookDispatcher.from_config(config, logging_port=adapter)
    return _default_dispatcher


def destroy(obj: Any) -> bool:
    """Run the ``@pre_destroy`` hook of *obj* with the default dispatcher."""
    return get_default_dispatcher().destroy(obj)


def destroy_all(mapping: Mapping[str, Any] | None) -> None:
    """Run :func:`destroy` on every value of *mapping* with the default dispatcher."""
    get_default_dispatcher().destroy_all(mapping)


def initialize(obj: Any) -> bool:
    return get_default_dispatcher().initialize(obj)


async def adestroy(obj: Any) -> bool:
    return await get_default_dispatcher().adestroy(obj)


async def adestroy_all(mapping: Mapping[str, Any] | None) -> None:
    await get_default_dispatcher().adestroy_all(mapping)
