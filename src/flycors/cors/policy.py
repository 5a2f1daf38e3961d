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
"""CorsPolicy — the matching rules a server applies to cross-origin requests.

A policy is configured once (directly or through :class:`CorsPolicyBuilder`),
then shared by every request that evaluates it. The comma-joined header
strings derived from its collections are computed lazily on first use and
cached on the instance for its lifetime.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import timedelta

from flycors.cors.constants import ANY_HEADER, ANY_METHOD, ANY_ORIGIN
from flycors.cors.headers import join_header_values
from flycors.cors.origin import OriginMatcher, as_origin_matcher
from flycors.kernel.exceptions import InvalidArgumentException


@dataclass(frozen=True)
class PolicyHeaderValues:
    """Pre-joined response header values derived from a :class:`CorsPolicy`."""

    allow_methods: str
    allow_headers: str
    expose_headers: str
    max_age: str | None


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


class CorsPolicy:
    """Origins, methods and headers allowed for cross-origin requests.

    Args:
        origins: Exact origin strings (case-sensitive); ``"*"`` allows any origin.
        methods: Allowed HTTP methods; ``"*"`` allows any method.
        headers: Allowed request headers; ``"*"`` allows any header.
        exposed_headers: Response headers exposed to the browser on simple requests.
        supports_credentials: Whether credentialed requests are allowed.
        preflight_max_age: How long browsers may cache the preflight response.
            Accepts a ``timedelta`` or a number of seconds.
        origin_matcher: Optional :class:`OriginMatcher` (or a bare
            ``(origin) -> bool`` callable) consulted for origins not in ``origins``.
    """

    def __init__(
        self,
        origins: Iterable[str] = (),
        methods: Iterable[str] = (),
        headers: Iterable[str] = (),
        exposed_headers: Iterable[str] = (),
        supports_credentials: bool = False,
        preflight_max_age: timedelta | int | float | None = None,
        origin_matcher: OriginMatcher | Callable[[str], bool] | None = None,
    ) -> None:
        self.origins: list[str] = _unique(origins)
        self.methods: list[str] = _unique(methods)
        self.headers: list[str] = _unique(headers)
        self.exposed_headers: list[str] = _unique(exposed_headers)
        self.supports_credentials = supports_credentials
        self.origin_matcher = as_origin_matcher(origin_matcher)
        self._preflight_max_age: timedelta | None = None
        self.preflight_max_age = preflight_max_age  # type: ignore[assignment]
        self._header_values: PolicyHeaderValues | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def preflight_max_age(self) -> timedelta | None:
        return self._preflight_max_age

    @preflight_max_age.setter
    def preflight_max_age(self, value: timedelta | int | float | None) -> None:
        if value is not None and not isinstance(value, timedelta):
            value = timedelta(seconds=value)
        if value is not None and value < timedelta(0):
            raise InvalidArgumentException(
                "Preflight max age must not be negative",
                code="INVALID_MAX_AGE",
                context={"preflight_max_age": str(value)},
            )
        self._preflight_max_age = value

    @property
    def allow_any_origin(self) -> bool:
        return ANY_ORIGIN in self.origins

    @property
    def allow_any_method(self) -> bool:
        return ANY_METHOD in self.methods

    @property
    def allow_any_header(self) -> bool:
        return ANY_HEADER in self.headers

    @property
    def vary_by_origin(self) -> bool:
        """``True`` when the echoed origin depends on the request's ``Origin`` header."""
        return (
            len(self.origins) > 1
            or self.origin_matcher is not None
            or (self.allow_any_origin and self.supports_credentials)
        )

    def is_origin_allowed(self, origin: str) -> bool:
        """Match *origin* against the wildcard, the matcher and the literal origin set."""
        if self.allow_any_origin:
            return True
        if self.origin_matcher is not None and self.origin_matcher.is_origin_allowed(origin):
            return True
        return origin in self.origins

    # ------------------------------------------------------------------
    # Cached header strings
    # ------------------------------------------------------------------

    @property
    def headers_cached(self) -> bool:
        return self._header_values is not None

    @property
    def header_values(self) -> PolicyHeaderValues:
        """Joined header strings, computed on first access and never recomputed.

        Concurrent first accesses may each compute the values; every
        computation yields an equal immutable object and the last
        assignment wins.
        """
        values = self._header_values
        if values is None:
            values = self._compute_header_values()
            self._header_values = values
        return values

    def freeze(self) -> CorsPolicy:
        """Compute the cached header strings now instead of on the first request."""
        _ = self.header_values
        return self

    def _compute_header_values(self) -> PolicyHeaderValues:
        max_age = self._preflight_max_age
        return PolicyHeaderValues(
            allow_methods=join_header_values(self.methods),
            allow_headers=join_header_values(self.headers),
            expose_headers=join_header_values(self.exposed_headers),
            max_age=str(int(max_age.total_seconds())) if max_age is not None else None,
        )

    def __repr__(self) -> str:
        return (
            f"CorsPolicy(origins={self.origins!r}, methods={self.methods!r}, "
            f"headers={self.headers!r}, exposed_headers={self.exposed_headers!r}, "
            f"supports_credentials={self.supports_credentials!r}, "
            f"preflight_max_age={self._preflight_max_age!r})"
        )
