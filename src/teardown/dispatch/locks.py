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
"""Per-object locks keyed by identity.

Entries are reference counted and dropped as soon as no caller holds them.
While a caller is inside ``hold(obj)`` it keeps *obj* alive, so ``id(obj)``
cannot be reused by another object for the lifetime of the entry.

Synchronous and asynchronous callers share one reentrant thread lock per
object. Coroutines take it without blocking the event loop by polling, and
the owning task is recorded so that other tasks on the same loop thread,
for which the lock would otherwise be reentrant, still wait their turn.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass, field
from typing import Any

_POLL_INTERVAL = 0.001


@dataclass
class _Entry:
    lock: Any = field(default_factory=threading.RLock)
    refs: int = 0
    # Task holding the lock through hold_async, and its nesting depth.
    task: Any = None
    depth: int = 0


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class ObjectLockRegistry:
    """One reentrant lock per live object identity, for threads and tasks alike."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[int, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def _acquire_entry(self, key: int) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.refs += 1
            return entry

    def _release_entry(self, key: int, entry: _Entry) -> None:
        with self._guard:
            entry.refs -= 1
            if entry.refs == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, obj: Any) -> Iterator[None]:
        """Hold the lock for *obj* for the duration of the block.

        Raises:
            RuntimeError: another task on this event loop thread holds the
                lock through :meth:`hold_async`; blocking here would stall
                the loop that has to release it.
        """
        key = id(obj)
        entry = self._acquire_entry(key)
        try:
            with entry.lock:
                if entry.task is not None and entry.task is not _current_task():
                    raise RuntimeError(
                        f"Lock for {type(obj).__name__} object is held by another task on this event loop"
                    )
                yield
        finally:
            self._release_entry(key, entry)

    @asynccontextmanager
    async def hold_async(self, obj: Any) -> AsyncIterator[None]:
        """Hold the lock for *obj* from a coroutine without blocking the loop.

        Reentrant for the task that already holds it.
        """
        key = id(obj)
        entry = self._acquire_entry(key)
        try:
            await self._acquire_for_task(entry, _current_task())
            try:
                yield
            finally:
                entry.depth -= 1
                if entry.depth == 0:
                    entry.task = None
                entry.lock.release()
        finally:
            self._release_entry(key, entry)

    @staticmethod
    async def _acquire_for_task(entry: _Entry, task: asyncio.Task | None) -> None:
        while True:
            if entry.lock.acquire(blocking=False):
                if entry.task is None or entry.task is task:
                    entry.task = task
                    entry.depth += 1
                    return
                # Reentrant acquire on the loop thread while another task holds it.
                entry.lock.release()
            await asyncio.sleep(_POLL_INTERVAL)
