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
"""Lifecycle markers: @post_construct and @pre_destroy.

A marker is a plain attribute set on the decorated function. Nothing else is
required of the class that declares it: the dispatcher finds marked methods by
inspecting the type, not through inheritance.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable)

POST_CONSTRUCT = "__teardown_post_construct__"
PRE_DESTROY = "__teardown_pre_destroy__"


def post_construct(func: F) -> F:
    """Mark a method to be called after the object is fully initialized."""
    setattr(func, POST_CONSTRUCT, True)
    return func


def pre_destroy(func: F) -> F:
    """Mark a method to be called before the object is destroyed."""
    setattr(func, PRE_DESTROY, True)
    return func


def has_marker(member: Any, marker: str) -> bool:
    """Return whether a class attribute carries *marker*.

    ``staticmethod`` and ``classmethod`` wrappers are looked through, so the
    decorator may sit on either side of them.
    """
    if getattr(member, marker, False) is True:
        return True
    func = getattr(member, "__func__", None)
    return func is not None and getattr(func, marker, False) is True
