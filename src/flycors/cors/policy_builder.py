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
"""CorsPolicyBuilder — fluent construction of :class:`CorsPolicy` instances.

Usage::

    policy = (
        CorsPolicyBuilder()
        .with_origins("https://app.example.com", "https://admin.example.com")
        .with_methods("GET", "PUT")
        .allow_any_header()
        .set_preflight_max_age(timedelta(minutes=10))
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta

from flycors.cors.constants import ANY_HEADER, ANY_METHOD, ANY_ORIGIN
from flycors.cors.origin import OriginMatcher, WildcardSubdomainOriginMatcher, normalize_origin
from flycors.cors.policy import CorsPolicy
from flycors.kernel.exceptions import InvalidPolicyException


class CorsPolicyBuilder:
    """Accumulates policy settings and produces a :class:`CorsPolicy` via :meth:`build`."""

    def __init__(self, *origins: str, policy: CorsPolicy | None = None) -> None:
        self._origins: list[str] = []
        self._methods: list[str] = []
        self._headers: list[str] = []
        self._exposed_headers: list[str] = []
        self._supports_credentials = False
        self._preflight_max_age: timedelta | None = None
        self._origin_matcher: OriginMatcher | Callable[[str], bool] | None = None
        self._wildcard_subdomains = False

        if policy is not None:
            self.combine(policy)
        self.with_origins(*origins)

    def combine(self, policy: CorsPolicy) -> CorsPolicyBuilder:
        """Copy every setting of an existing *policy* into this builder."""
        self._origins.extend(policy.origins)
        self._methods.extend(policy.methods)
        self._headers.extend(policy.headers)
        self._exposed_headers.extend(policy.exposed_headers)
        self._supports_credentials = policy.supports_credentials
        self._preflight_max_age = policy.preflight_max_age
        self._origin_matcher = policy.origin_matcher
        return self

    def with_origins(self, *origins: str) -> CorsPolicyBuilder:
        """Add allowed origins, lower-casing scheme and host and dropping a trailing ``/``."""
        self._origins.extend(normalize_origin(o) for o in origins)
        return self

    def with_methods(self, *methods: str) -> CorsPolicyBuilder:
        self._methods.extend(methods)
        return self

    def with_headers(self, *headers: str) -> CorsPolicyBuilder:
        self._headers.extend(headers)
        return self

    def with_exposed_headers(self, *headers: str) -> CorsPolicyBuilder:
        self._exposed_headers.extend(headers)
        return self

    def set_preflight_max_age(self, max_age: timedelta | int | float) -> CorsPolicyBuilder:
        if not isinstance(max_age, timedelta):
            max_age = timedelta(seconds=max_age)
        self._preflight_max_age = max_age
        return self

    def allow_credentials(self) -> CorsPolicyBuilder:
        self._supports_credentials = True
        return self

    def disallow_credentials(self) -> CorsPolicyBuilder:
        self._supports_credentials = False
        return self

    def allow_any_origin(self) -> CorsPolicyBuilder:
        self._origins = [ANY_ORIGIN]
        return self

    def allow_any_method(self) -> CorsPolicyBuilder:
        self._methods = [ANY_METHOD]
        return self

    def allow_any_header(self) -> CorsPolicyBuilder:
        self._headers = [ANY_HEADER]
        return self

    def set_is_origin_allowed(
        self, matcher: OriginMatcher | Callable[[str], bool]
    ) -> CorsPolicyBuilder:
        """Consult *matcher* for origins that are not in the literal origin list."""
        self._origin_matcher = matcher
        self._wildcard_subdomains = False
        return self

    def set_is_origin_allowed_to_allow_wildcard_subdomains(self) -> CorsPolicyBuilder:
        """Treat ``scheme://*.domain`` origins as patterns matching any subdomain."""
        self._origin_matcher = None
        self._wildcard_subdomains = True
        return self

    def build(self) -> CorsPolicy:
        """Create the policy.

        Raises:
            InvalidPolicyException: If any origin is allowed together with credentials.
        """
        if ANY_ORIGIN in self._origins and self._supports_credentials:
            raise InvalidPolicyException(
                "The CORS protocol does not allow specifying a wildcard (any) origin and "
                "credentials at the same time. Configure the policy by listing individual "
                "origins if credentials need to be supported.",
                code="CORS_WILDCARD_WITH_CREDENTIALS",
            )

        matcher = self._origin_matcher
        if self._wildcard_subdomains:
            matcher = WildcardSubdomainOriginMatcher(self._origins)

        return CorsPolicy(
            origins=self._origins,
            methods=self._methods,
            headers=self._headers,
            exposed_headers=self._exposed_headers,
            supports_credentials=self._supports_credentials,
            preflight_max_age=self._preflight_max_age,
            origin_matcher=matcher,
        )
