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
"""OriginMatcher — pluggable strategy for custom origin matching."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit


@runtime_checkable
class OriginMatcher(Protocol):
    """Decides whether an origin is allowed beyond the policy's literal origin set."""

    def is_origin_allowed(self, origin: str) -> bool:
        """Return ``True`` if *origin* (the exact ``Origin`` header value) is allowed."""
        ...


class PredicateOriginMatcher:
    """Adapts a plain ``(origin) -> bool`` callable to :class:`OriginMatcher`."""

    __slots__ = ("_predicate",)

    def __init__(self, predicate: Callable[[str], bool]) -> None:
        self._predicate = predicate

    def is_origin_allowed(self, origin: str) -> bool:
        return bool(self._predicate(origin))

    def __repr__(self) -> str:
        return f"PredicateOriginMatcher({self._predicate!r})"


class WildcardSubdomainOriginMatcher:
    """Allows origins matching ``scheme://*.domain[:port]`` patterns.

    ``https://*.example.com`` allows ``https://api.example.com`` and
    ``https://a.b.example.com`` but not ``https://example.com`` itself or
    ``http://api.example.com``. Patterns without ``*.`` are ignored.
    """

    def __init__(self, origins: Iterable[str]) -> None:
        self._patterns: list[tuple[str, str, int | None]] = []
        for pattern in origins:
            parsed = _split_origin(pattern)
            if parsed is None:
                continue
            scheme, host, port = parsed
            if host.startswith("*."):
                self._patterns.append((scheme, host[1:], port))

    def is_origin_allowed(self, origin: str) -> bool:
        parsed = _split_origin(origin)
        if parsed is None:
            return False
        scheme, host, port = parsed
        return any(
            scheme == p_scheme and port == p_port and host.endswith(suffix) and len(host) > len(suffix)
            for p_scheme, suffix, p_port in self._patterns
        )


def _split_origin(origin: str) -> tuple[str, str, int | None] | None:
    parts = urlsplit(origin.strip())
    if not parts.scheme or not parts.hostname:
        return None
    try:
        port = parts.port
    except ValueError:
        return None
    return parts.scheme.lower(), parts.hostname, port


def as_origin_matcher(value: OriginMatcher | Callable[[str], bool] | None) -> OriginMatcher | None:
    """Normalize a matcher-or-callable into an :class:`OriginMatcher` (or ``None``)."""
    if value is None or isinstance(value, OriginMatcher):
        return value
    if callable(value):
        return PredicateOriginMatcher(value)
    raise TypeError(f"Expected an OriginMatcher or callable, got {type(value).__name__}")


def normalize_origin(origin: str) -> str:
    """Lower-case the scheme and host of *origin* and drop a trailing ``/``.

    Values that do not look like ``scheme://host`` origins are returned
    with only the trailing slash removed.
    """
    trimmed = origin.strip().rstrip("/")
    parts = urlsplit(trimmed)
    if not parts.scheme or not parts.netloc:
        return trimmed
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"
