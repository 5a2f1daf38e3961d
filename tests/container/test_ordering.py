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
"""Tests for @order and precedence constants."""

from flycors.container.ordering import HIGHEST_PRECEDENCE, LOWEST_PRECEDENCE, get_order, order
from flycors.web.adapters.starlette.filters.cors_filter import CorsFilter


class TestOrdering:
    def test_default_order_is_zero(self):
        class Plain:
            pass

        assert get_order(Plain) == 0

    def test_order_decorator_sets_value(self):
        @order(42)
        class Ordered:
            pass

        assert get_order(Ordered) == 42

    def test_sorting_by_order(self):
        @order(LOWEST_PRECEDENCE)
        class Last:
            pass

        @order(HIGHEST_PRECEDENCE)
        class First:
            pass

        @order(0)
        class Middle:
            pass

        result = sorted([Last, Middle, First], key=get_order)
        assert result == [First, Middle, Last]

    def test_cors_filter_runs_near_the_front(self):
        assert get_order(CorsFilter) == HIGHEST_PRECEDENCE + 100
        assert get_order(CorsFilter) < 0
