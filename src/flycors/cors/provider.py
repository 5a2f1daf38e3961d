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
"""CorsPolicyProvider — resolves the policy that applies to a request."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from flycors.cors.options import CorsOptions
from flycors.cors.policy import CorsPolicy


@runtime_checkable
class CorsPolicyProvider(Protocol):
    """Port for looking up the :class:`CorsPolicy` of a request.

    Returning ``None`` means no CORS policy applies and the response must
    be left untouched.
    """

    async def get_policy(self, request: Any, policy_name: str | None = None) -> CorsPolicy | None: ...


class DefaultCorsPolicyProvider:
    """Resolves policies by name from a :class:`CorsOptions` registry.

    ``policy_name=None`` selects the registry's default policy.
    """

    def __init__(self, options: CorsOptions) -> None:
        self._options = options

    async def get_policy(self, request: Any, policy_name: str | None = None) -> CorsPolicy | None:
        return self._options.get_policy(policy_name or self._options.default_policy_name)
