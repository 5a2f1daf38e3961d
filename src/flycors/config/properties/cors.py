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
"""CORS configuration properties (flycors.cors.*)."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from flycors.core.config import config_properties


class CorsPolicyProperties(BaseModel):
    """Settings for a single CORS policy.

    Mirrors :class:`CorsPolicyBuilder`; ``max_age`` is in seconds and
    ``None`` omits ``Access-Control-Max-Age``.
    """

    allowed_origins: list[str] = Field(default_factory=list)
    allowed_methods: list[str] = Field(default_factory=list)
    allowed_headers: list[str] = Field(default_factory=list)
    exposed_headers: list[str] = Field(default_factory=list)
    allow_credentials: bool = False
    allow_wildcard_subdomains: bool = False
    max_age: int | None = Field(default=None, ge=0)

    @field_validator("allowed_origins", "allowed_methods", "allowed_headers", "exposed_headers", mode="before")
    @classmethod
    def _split_csv(cls, value: object) -> object:
        # Accept "a, b, c" as well as a YAML list.
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


@config_properties(prefix="flycors.cors")
class CorsProperties(BaseModel):
    """Configuration for the CORS subsystem (flycors.cors.*).

    ``default``, when set, is registered as the default policy (even one
    that lists no origins and so allows nothing); ``policies`` holds named
    policies.
    """

    enabled: bool = True
    default: CorsPolicyProperties | None = None
    policies: dict[str, CorsPolicyProperties] = Field(default_factory=dict)
