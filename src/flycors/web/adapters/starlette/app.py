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
"""FlyCors web application factory built on Starlette."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from flycors.config.properties.cors import CorsProperties
from flycors.core.config import Config
from flycors.cors.options import CorsOptions
from flycors.cors.policy import CorsPolicy
from flycors.cors.provider import DefaultCorsPolicyProvider
from flycors.cors.service import CorsService
from flycors.logging.structlog_adapter import StructlogAdapter
from flycors.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flycors.web.adapters.starlette.filters.cors_filter import CorsFilter
from flycors.web.ports.filter import WebFilter

logger = structlog.get_logger("flycors.web")


def create_app(
    routes: Sequence[BaseRoute] | None = None,
    cors: CorsPolicy | CorsOptions | None = None,
    policy_name: str | None = None,
    config: Config | None = None,
    filters: Sequence[WebFilter] = (),
    debug: bool = False,
    lifespan: Any = None,
) -> Starlette:
    """Create a Starlette application with the FlyCors filter chain.

    The CORS filter is installed when:
    - ``cors`` is a :class:`CorsPolicy` (applied to every request), or
    - ``cors`` is a :class:`CorsOptions` registry (``policy_name`` selects the
      policy; ``None`` uses the registry's default), or
    - ``config`` is given and ``flycors.cors.enabled`` is true, in which case
      the registry is built from the ``flycors.cors`` section.

    When ``config`` is given, logging is configured from ``flycors.logging``.
    """
    web_filters: list[WebFilter] = list(filters)

    if config is not None:
        StructlogAdapter().configure(config)

    if cors is None and config is not None:
        props = config.bind(CorsProperties)
        if props.enabled:
            cors = CorsOptions.from_properties(props)

    if isinstance(cors, CorsPolicy):
        web_filters.append(CorsFilter(policy=cors))
    elif isinstance(cors, CorsOptions):
        web_filters.append(
            CorsFilter(
                policy_provider=DefaultCorsPolicyProvider(cors),
                policy_name=policy_name,
                service=CorsService(cors),
            )
        )

    logger.debug("web_app_created", filters=[type(f).__name__ for f in web_filters])

    return Starlette(
        debug=debug,
        routes=list(routes or []),
        middleware=[Middleware(WebFilterChainMiddleware, filters=web_filters)],
        lifespan=lifespan,
    )
