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
"""CorsOptions — registry of named CORS policies."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from flycors.cors.constants import ANY_ORIGIN
from flycors.cors.policy import CorsPolicy
from flycors.cors.policy_builder import CorsPolicyBuilder
from flycors.kernel.exceptions import InvalidArgumentException

if TYPE_CHECKING:
    from flycors.config.properties.cors import CorsPolicyProperties, CorsProperties

logger = structlog.get_logger("flycors.cors")

DEFAULT_POLICY_NAME = "__DefaultCorsPolicy"

PolicySource = CorsPolicy | Callable[[CorsPolicyBuilder], object]


class CorsOptions:
    """Holds the policies a :class:`CorsService` can look up by name.

    Policies are frozen (their header strings pre-computed) as they are
    registered, so request-time evaluation only reads them.
    """

    def __init__(self, default_policy_name: str = DEFAULT_POLICY_NAME) -> None:
        self._policies: dict[str, CorsPolicy] = {}
        self.default_policy_name = default_policy_name

    @property
    def policy_names(self) -> list[str]:
        return list(self._policies)

    def add_default_policy(self, policy: PolicySource) -> None:
        """Register *policy* under :attr:`default_policy_name`."""
        self.add_policy(self.default_policy_name, policy)

    def add_policy(self, name: str, policy: PolicySource) -> None:
        """Register a policy, or a ``configure(builder)`` callable that describes one.

        Registering a name twice replaces the earlier policy.
        """
        if not name:
            raise InvalidArgumentException.missing("name")
        if policy is None:
            raise InvalidArgumentException.missing("policy")

        if not isinstance(policy, CorsPolicy):
            builder = CorsPolicyBuilder()
            policy(builder)
            policy = builder.build()

        self._policies[name] = policy.freeze()
        logger.debug("cors_policy_registered", policy_name=name, policy=repr(policy))

    def get_policy(self, name: str) -> CorsPolicy | None:
        """Return the policy registered as *name*, or ``None``."""
        if not name:
            raise InvalidArgumentException.missing("name")
        return self._policies.get(name)

    resolve = get_policy

    @classmethod
    def from_properties(cls, properties: CorsProperties) -> CorsOptions:
        """Build a registry from bound ``flycors.cors`` configuration."""
        options = cls()
        if properties.default is not None:
            options.add_default_policy(_policy_from_properties(properties.default))
        for name, policy_props in properties.policies.items():
            options.add_policy(name, _policy_from_properties(policy_props))
        return options


def _policy_from_properties(props: CorsPolicyProperties) -> CorsPolicy:
    builder = CorsPolicyBuilder()

    if ANY_ORIGIN in props.allowed_origins:
        builder.allow_any_origin()
    else:
        builder.with_origins(*props.allowed_origins)

    builder.with_methods(*props.allowed_methods)
    builder.with_headers(*props.allowed_headers)
    builder.with_exposed_headers(*props.exposed_headers)

    if props.allow_credentials:
        builder.allow_credentials()
    if props.allow_wildcard_subdomains:
        builder.set_is_origin_allowed_to_allow_wildcard_subdomains()
    if props.max_age is not None:
        builder.set_preflight_max_age(props.max_age)

    return builder.build()
