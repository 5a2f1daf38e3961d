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
"""CorsResult — the outcome of evaluating one request against a policy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CorsResult:
    """Which CORS response headers to write for a single request.

    Created per request by :meth:`CorsService.evaluate_policy` and consumed
    by :meth:`CorsService.apply_result`. String fields left as ``None`` (or
    set to ``""``) are not written.
    """

    is_cors_response_allowed: bool = False
    is_preflight_request: bool = False
    allowed_origin: str | None = None
    supports_credentials: bool = False
    vary_by_origin: bool = False
    access_control_allow_methods: str | None = None
    access_control_allow_headers: str | None = None
    access_control_expose_headers: str | None = None
    access_control_max_age: str | None = None
