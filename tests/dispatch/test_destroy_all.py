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
"""Tests for HookDispatcher.destroy_all — keyed collection dispatch."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from teardown.context.lifecycle import pre_destroy
from teardown.dispatch.dispatcher import HookDispatcher
from teardown.kernel.exceptions import HookInvocationException


class Resource:
    def __init__(self, name: str, log: list[str]) -> None:
        self.name = name
        self.log = log

    @pre_destroy
    def _release(self) -> None:
        self.log.append(self.name)


class Plain:
    def __init__(self) -> None:
        self.called = False

    def destroy(self) -> None:
        self.called = True


class Broken:
    @pre_destroy
    def close(self) -> None:
        raise RuntimeError("cannot close")


class TestDestroyAll:
    def test_marked_and_unmarked_values(self, recording_logger):
        log: list[str] = []
        plain = Plain()
        beans = {"A": Resource("A", log), "B": plain}

        HookDispatcher(logger=recording_logger).destroy_all(beans)

        assert log == ["A"]
        assert plain.called is False

    def test_none_is_noop(self, recording_logger):
        HookDispatcher(logger=recording_logger).destroy_all(None)
        assert recording_logger.events == []

    def test_empty_is_noop(self, recording_logger):
        HookDispatcher(logger=recording_logger).destroy_all({})
        assert recording_logger.events == []

    def test_every_hook_runs_once(self, recording_logger):
        log: list[str] = []
        beans = {f"bean-{i}": Resource(f"bean-{i}", log) for i in range(10)}

        HookDispatcher(logger=recording_logger).destroy_all(beans)

        assert sorted(log) == sorted(beans)

    def test_first_failure_aborts_sweep(self, recording_logger):
        log: list[str] = []
        beans = {"broken": Broken(), "after": Resource("after", log)}

        with pytest.raises(HookInvocationException) as exc_info:
            HookDispatcher(logger=recording_logger).destroy_all(beans)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert log == []
        assert len(recording_logger.errors()) == 1

    def test_mapping_is_not_mutated(self, recording_logger):
        log: list[str] = []
        beans = {"A": Resource("A", log)}
        snapshot = dict(beans)

        HookDispatcher(logger=recording_logger).destroy_all(beans)

        assert beans == snapshot

    def test_accepts_read_only_mapping(self, recording_logger):
        log: list[str] = []
        beans = MappingProxyType({"A": Resource("A", log)})

        HookDispatcher(logger=recording_logger).destroy_all(beans)

        assert log == ["A"]
