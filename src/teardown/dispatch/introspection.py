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
"""Type introspection for marked lifecycle hooks.

Only methods declared directly on a type are considered. Inherited methods
are not, which keeps a subclass from re-running a hook its base class already
declares. Private and name-mangled methods are listed like any other.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any

from teardown.context.lifecycle import has_marker


@dataclass(frozen=True)
class DeclaredHook:
    """A marked attribute found in a type's own namespace."""

    owner: type
    name: str
    member: Any

    @property
    def function(self) -> Any:
        """The underlying function, unwrapped from static/class method wrappers."""
        return getattr(self.member, "__func__", self.member)

    @property
    def qualified_type(self) -> str:
        return type_name(self.owner)

    @property
    def is_private(self) -> bool:
        return self.name.startswith("_")

    @property
    def is_coroutine(self) -> bool:
        return inspect.iscoroutinefunction(self.function)

    def bind(self, instance: Any) -> Any:
        """Bind the hook to *instance* through the descriptor protocol."""
        getter = getattr(type(self.member), "__get__", None)
        if getter is None:
            return self.member
        return getter(self.member, instance, self.owner)


def type_name(cls: type) -> str:
    """Fully qualified name of a type, e.g. ``app.pool.ConnectionPool``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def find_hooks(cls: type, marker: str) -> list[DeclaredHook]:
    """Return the methods declared on *cls* that carry *marker*.

    Results follow declaration order, which is the order of the class body.
    """
    return [
        DeclaredHook(owner=cls, name=name, member=member)
        for name, member in vars(cls).items()
        if has_marker(member, marker)
    ]


def accepts_no_arguments(func: Any) -> bool:
    """Whether *func* can be called with zero arguments.

    Callables whose signature cannot be read are given the benefit of the
    doubt; a mismatch then surfaces when the hook is invoked.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return True
    try:
        signature.bind()
    except TypeError:
        return False
    return True
