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
"""Tests for declared-hook introspection."""

from __future__ import annotations

from teardown.context.lifecycle import POST_CONSTRUCT, PRE_DESTROY, post_construct, pre_destroy
from teardown.dispatch.introspection import accepts_no_arguments, find_hooks, type_name


class Service:
    @post_construct
    def start(self):
        pass

    @pre_destroy
    def _flush(self):
        pass

    def helper(self):
        pass

    @pre_destroy
    def __close(self):
        pass


class TestFindHooks:
    def test_declaration_order(self):
        assert [h.name for h in find_hooks(Service, PRE_DESTROY)] == ["_flush", "_Service__close"]

    def test_filters_by_marker(self):
        assert [h.name for h in find_hooks(Service, POST_CONSTRUCT)] == ["start"]

    def test_excludes_inherited(self):
        class Child(Service):
            pass

        assert find_hooks(Child, PRE_DESTROY) == []

    def test_subclass_override_is_declared(self):
        class Child(Service):
            @pre_destroy
            def _flush(self):
                pass

        hooks = find_hooks(Child, PRE_DESTROY)
        assert [h.name for h in hooks] == ["_flush"]
        assert hooks[0].owner is Child

    def test_private_flag(self):
        hook = find_hooks(Service, PRE_DESTROY)[0]
        assert hook.is_private is True
        assert find_hooks(Service, POST_CONSTRUCT)[0].is_private is False

    def test_bind_returns_bound_method(self):
        svc = Service()
        method = find_hooks(Service, PRE_DESTROY)[0].bind(svc)
        assert method.__self__ is svc

    def test_qualified_type(self):
        hook = find_hooks(Service, PRE_DESTROY)[0]
        assert hook.qualified_type == f"{Service.__module__}.Service"
        assert type_name(Service) == hook.qualified_type


class TestAcceptsNoArguments:
    def test_bare(self):
        assert accepts_no_arguments(lambda: None) is True

    def test_defaults(self):
        assert accepts_no_arguments(lambda a=1, *args, **kw: None) is True

    def test_required(self):
        assert accepts_no_arguments(lambda a: None) is False

    def test_keyword_only_required(self):
        def f(*, timeout):
            pass

        assert accepts_no_arguments(f) is False
