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
"""Teardown — run ``@pre_destroy`` hooks on objects that carry them.

    from teardown import destroy, pre_destroy

    class Pool:
        @pre_destroy
        def _close(self) -> None:
            ...

    destroy(Pool())  # True
"""

from teardown.context.lifecycle import post_construct, pre_destroy
from teardown.dispatch.dispatcher import (
    DispatchProperties,
    HookDispatcher,
    adestroy,
    adestroy_all,
    destroy,
    destroy_all,
    initialize,
)
from teardown.kernel.exceptions import (
    HookAccessDeniedException,
    HookDispatchException,
    HookInvocationException,
    InvalidHookTargetException,
    LifecycleException,
)

__version__ = "1.0.0"

__all__ = [
    "DispatchProperties",
    "HookAccessDeniedException",
    "HookDispatchException",
    "HookDispatcher",
    "HookInvocationException",
    "InvalidHookTargetException",
    "LifecycleException",
    "adestroy",
    "adestroy_all",
    "destroy",
    "destroy_all",
    "initialize",
    "post_construct",
    "pre_destroy",
]
