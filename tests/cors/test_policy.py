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
"""Tests for CorsPolicy — matching flags, Vary rule and cached header strings."""

from __future__ import annotations

import threading
from datetime import timedelta

import pytest

from flycors.cors.origin import OriginMatcher, PredicateOriginMatcher
from flycors.cors.policy import CorsPolicy, PolicyHeaderValues
from flycors.kernel.exceptions import InvalidArgumentException


class TestCorsPolicyDefaults:
    def test_defaults(self):
        policy = CorsPolicy()

        assert policy.origins == []
        assert policy.methods == []
        assert policy.headers == []
        assert policy.exposed_headers == []
        assert policy.supports_credentials is False
        assert policy.preflight_max_age is None
        assert policy.origin_matcher is None
        assert policy.headers_cached is False

    def test_duplicates_removed_preserving_order(self):
        policy = CorsPolicy(methods=["PUT", "GET", "PUT"])
        assert policy.methods == ["PUT", "GET"]


class TestCorsPolicyWildcards:
    def test_allow_any_flags(self):
        policy = CorsPolicy(origins=["*"], methods=["*"], headers=["*"])
        assert policy.allow_any_origin
        assert policy.allow_any_method
        assert policy.allow_any_header

    def test_no_wildcards(self):
        policy = CorsPolicy(origins=["http://a.com"], methods=["GET"], headers=["X-A"])
        assert not policy.allow_any_origin
        assert not policy.allow_any_method
        assert not policy.allow_any_header

    def test_wildcard_allows_any_origin(self):
        assert CorsPolicy(origins=["*"]).is_origin_allowed("http://anything.test")

    def test_matcher_consulted_before_literal_set(self):
        seen: list[str] = []

        def _record(origin: str) -> bool:
            seen.append(origin)
            return False

        policy = CorsPolicy(origins=["http://a.com"], origin_matcher=_record)
        assert policy.is_origin_allowed("http://a.com")
        assert seen == ["http://a.com"]

    def test_bare_callable_wrapped_in_predicate_matcher(self):
        policy = CorsPolicy(origin_matcher=lambda origin: origin.endswith(".test"))

        assert isinstance(policy.origin_matcher, PredicateOriginMatcher)
        assert isinstance(policy.origin_matcher, OriginMatcher)
        assert policy.is_origin_allowed("http://x.test")
        assert not policy.is_origin_allowed("http://x.example")

    def test_non_callable_matcher_rejected(self):
        with pytest.raises(TypeError):
            CorsPolicy(origin_matcher="http://a.com")  # type: ignore[arg-type]


class TestVaryByOrigin:
    def test_single_literal_origin_does_not_vary(self):
        assert CorsPolicy(origins=["http://a.com"]).vary_by_origin is False

    @pytest.mark.parametrize("supports_credentials", [True, False])
    def test_multiple_origins_vary_regardless_of_credentials(self, supports_credentials):
        policy = CorsPolicy(origins=["http://a.com", "http://b.com"], supports_credentials=supports_credentials)
        assert policy.vary_by_origin is True

    def test_matcher_varies(self):
        assert CorsPolicy(origin_matcher=lambda o: True).vary_by_origin is True

    def test_wildcard_with_credentials_varies(self):
        assert CorsPolicy(origins=["*"], supports_credentials=True).vary_by_origin is True

    def test_wildcard_without_credentials_does_not_vary(self):
        assert CorsPolicy(origins=["*"]).vary_by_origin is False


class TestPreflightMaxAge:
    def test_seconds_converted_to_timedelta(self):
        assert CorsPolicy(preflight_max_age=30).preflight_max_age == timedelta(seconds=30)

    def test_serialized_as_whole_seconds(self):
        policy = CorsPolicy(preflight_max_age=timedelta(minutes=10, milliseconds=500))
        assert policy.header_values.max_age == "600"

    def test_zero_max_age(self):
        assert CorsPolicy(preflight_max_age=0).header_values.max_age == "0"

    def test_negative_max_age_rejected(self):
        with pytest.raises(InvalidArgumentException) as exc_info:
            CorsPolicy(preflight_max_age=timedelta(seconds=-1))
        assert exc_info.value.code == "INVALID_MAX_AGE"


class TestHeaderValuesCache:
    def test_header_values(self):
        policy = CorsPolicy(
            methods=["GET", "PUT"],
            headers=["X-A"],
            exposed_headers=["X-B", "X-C"],
            preflight_max_age=5,
        )
        assert policy.header_values == PolicyHeaderValues(
            allow_methods="GET,PUT",
            allow_headers="X-A",
            expose_headers="X-B,X-C",
            max_age="5",
        )

    def test_computed_once(self):
        policy = CorsPolicy(methods=["GET"])
        first = policy.header_values
        policy.methods.append("PUT")
        policy.preflight_max_age = 99

        assert policy.header_values is first
        assert policy.header_values.allow_methods == "GET"
        assert policy.header_values.max_age is None

    def test_freeze_computes_eagerly(self):
        policy = CorsPolicy(headers=["X-A"])
        assert policy.freeze() is policy
        assert policy.headers_cached is True

    def test_concurrent_first_access_converges(self):
        policy = CorsPolicy(methods=["GET", "PUT", "DELETE"], headers=["*"])
        seen: list[PolicyHeaderValues] = []
        barrier = threading.Barrier(8)

        def _read() -> None:
            barrier.wait()
            seen.append(policy.header_values)

        threads = [threading.Thread(target=_read) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == 8
        assert all(v == seen[0] for v in seen)
        assert policy.header_values == seen[0]
