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
"""Helpers for reading request headers and composing CORS header values.

Framework-agnostic: works with Starlette ``Headers``/``MutableHeaders``
as well as plain mappings, so vendor types stay in the adapter layer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

from flycors.cors.constants import VARY


def join_header_values(values: Iterable[str]) -> str:
    """Join header tokens into a single comma-separated header value.

    A single value is returned verbatim. When several values are joined,
    any value containing a comma that is not already wrapped in double
    quotes is quoted so the list stays unambiguous.
    """
    items = list(values)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return ",".join(_quote_if_needed(v) for v in items)


def _quote_if_needed(value: str) -> str:
    if value and "," in value and not (value[0] == '"' and value[-1] == '"'):
        return f'"{value}"'
    return value


def get_header(headers: Any, name: str) -> str | None:
    """Return the value of request header *name*, or ``None`` when absent.

    Repeated header fields are joined with ``,``. A header that is present
    but empty yields ``""``, which is distinct from an absent header.
    """
    if headers is None:
        return None

    getlist = getattr(headers, "getlist", None)
    if callable(getlist):
        values = list(getlist(name))
        return ",".join(values) if values else None

    value = _lookup(headers, name)
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value) if value else None
    return str(value)


def _find_key(headers: Mapping[str, Any], name: str) -> str | None:
    if name in headers:
        return name
    lowered = name.lower()
    for key in headers:
        if key.lower() == lowered:
            return key
    return None


def _lookup(headers: Mapping[str, Any], name: str) -> Any:
    key = _find_key(headers, name)
    return headers[key] if key is not None else None


def add_vary(headers: MutableMapping[str, str], token: str) -> None:
    """Merge *token* into the ``Vary`` response header.

    Existing tokens are preserved and *token* is not added twice. Several
    ``Vary`` lines are folded into one so none of them is dropped.
    """
    getlist = getattr(headers, "getlist", None)
    if callable(getlist):
        key = VARY
        lines = [str(v) for v in getlist(VARY)]
    else:
        key = _find_key(headers, VARY) or VARY
        value = headers.get(key)
        lines = [str(value)] if value else []

    lines = [line for line in lines if line.strip()]
    if not lines:
        headers[key] = token
        return

    present = {t.strip().lower() for line in lines for t in line.split(",")}
    if token.lower() in present or "*" in present:
        return
    headers[key] = ", ".join([*lines, token])
