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
"""Tests for CorsPolicyBuilder."""

from __future__ import annotations

from datetime import timedelta

import pytest

from flycors.cors.origin import WildcardSubdomainOriginMatcher
from flycors.cors.policy import CorsPolicy
from flycors.cors.policy_builder import CorsPolicyBuilder
from flycors.kernel.exceptions import InvalidPolicyException


class TestCorsPolicyBuilder:
    def test_build_empty_policy(self):
        policy = CorsPolicyBuilder().build()

        assert isinstance(policy, CorsPolicy)
        assert policy.origins == []
        assert policy.supports_credentials is False

    def test_constructor_origins(self):
        policy = CorsPolicyBuilder("http://a.com", "http://b.com").build()
        assert policy.origins == ["http://a.com", "http://b.com"]

    def test_with_origins_normalizes(self):
        policy = CorsPolicyBuilder().with_origins("HTTP://Example.COM/", "https://api.example.com:8443").build()
        assert policy.origins == ["http://example.com", "https://api.example.com:8443"]

    def test_fluent_settings(self):
        policy = (
            CorsPolicyBuilder()
            .with_origins("http://localhost:5001")
            .with_methods("PUT", "DELETE")
            .with_headers("Header1")
            .with_exposed_headers("AllowedHeader")
            .set_preflight_max_age(timedelta(seconds=30))
            .allow_credentials()
            .build()
        )

        assert policy.origins == ["http://localhost:5001"]
        assert policy.methods == ["PUT", "DELETE"]
        assert policy.headers == ["Header1"]
        assert policy.exposed_headers == ["AllowedHeader"]
        assert policy.preflight_max_age == timedelta(seconds=30)
        assert policy.supports_credentials is True

    def test_max_age_accepts_seconds(self):
        policy = CorsPolicyBuilder().set_preflight_max_age(120).build()
        assert policy.preflight_max_age == timedelta(minutes=2)

    def test_disallow_credentials(self):
        policy = CorsPolicyBuilder().allow_credentials().disallow_credentials().build()
        assert policy.supports_credentials is False

    def test_allow_any_replaces_lists(self):
        policy = (
            CorsPolicyBuilder("http://a.com")
            .with_methods("GET")
            .with_headers("X-A")
            .allow_any_origin()
            .allow_any_method()
            .allow_any_header()
            .build()
        )

        assert policy.origins == ["*"]
        assert policy.methods == ["*"]
        assert policy.headers == ["*"]

    def test_any_origin_with_credentials_rejected(self):
        builder = CorsPolicyBuilder().allow_any_origin().allow_credentials()
        with pytest.raises(InvalidPolicyException) as exc_info:
            builder.build()
        assert exc_info.value.code == "CORS_WILDCARD_WITH_CREDENTIALS"

    def test_set_is_origin_allowed(self):
        policy = CorsPolicyBuilder().set_is_origin_allowed(lambda o: o == "http://x.com").build()
        assert policy.is_origin_allowed("http://x.com")
        assert not policy.is_origin_allowed("http://y.com")

    def test_wildcard_subdomains(self):
        policy = (
            CorsPolicyBuilder("https://*.example.com")
            .set_is_origin_allowed_to_allow_wildcard_subdomains()
            .build()
        )

        assert isinstance(policy.origin_matcher, WildcardSubdomainOriginMatcher)
        assert policy.is_origin_allowed("https://api.example.com")
        assert not policy.is_origin_allowed("https://example.com")

    def test_wildcard_subdomains_uses_origins_added_later(self):
        policy = (
            CorsPolicyBuilder()
            .set_is_origin_allowed_to_allow_wildcard_subdomains()
            .with_origins("https://*.example.com")
            .build()
        )
        assert policy.is_origin_allowed("https://a.example.com")

    def test_combine_copies_existing_policy(self):
        original = CorsPolicy(
            origins=["http://a.com"],
            methods=["GET"],
            exposed_headers=["X-A"],
            preflight_max_age=10,
            supports_credentials=True,
        )

        copy = CorsPolicyBuilder(policy=original).with_methods("POST").build()

        assert copy is not original
        assert copy.origins == ["http://a.com"]
        assert copy.methods == ["GET", "POST"]
        assert copy.exposed_headers == ["X-A"]
        assert copy.preflight_max_age == timedelta(seconds=10)
        assert copy.supports_credentials is True
        assert original.methods == ["GET"]
