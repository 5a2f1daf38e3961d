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
"""CORS filter — evaluates each cross-origin request and writes CORS headers."""

from __future__ import annotations

from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from flycors.container.ordering import HIGHEST_PRECEDENCE, order
from flycors.cors.constants import ORIGIN
from flycors.cors.policy import CorsPolicy
from flycors.cors.provider import CorsPolicyProvider
from flycors.cors.service import CorsService
from flycors.kernel.exceptions import InvalidArgumentException
from flycors.web.filters import OncePerRequestFilter
from flycors.web.ports.filter import CallNext

logger = structlog.get_logger("flycors.web")


@order(HIGHEST_PRECEDENCE + 100)
class CorsFilter(OncePerRequestFilter):
    """Applies a CORS policy to every request that carries an ``Origin`` header.

    - Preflight requests are answered here with ``204 No Content``; the
      route handler is not called, whether or not the policy allows them.
    - Other requests run the rest of the chain, then receive the CORS
      headers on the handler's response. An exception raised downstream
      becomes a ``500 Internal Server Error`` that still carries them.
    - Requests without ``Origin`` or without a resolvable policy pass
      through untouched.

    Exactly one of *policy* or *policy_provider* must be given.
    """

    def __init__(
        self,
        policy: CorsPolicy | None = None,
        policy_provider: CorsPolicyProvider | None = None,
        policy_name: str | None = None,
        service: CorsService | None = None,
    ) -> None:
        if (policy is None) == (policy_provider is None):
            raise InvalidArgumentException(
                "CorsFilter requires exactly one of 'policy' or 'policy_provider'",
                code="CORS_FILTER_MISCONFIGURED",
            )
        self._policy = policy.freeze() if policy is not None else None
        self._policy_provider = policy_provider
        self._policy_name = policy_name
        self._service = service or CorsService()

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        if ORIGIN not in request.headers:
            return cast(Response, await call_next(request))

        policy = await self._resolve_policy(request)
        if policy is None:
            logger.debug("cors_no_policy", path=request.url.path, policy_name=self._policy_name)
            return cast(Response, await call_next(request))

        result = self._service.evaluate_policy(request, policy)

        if result.is_preflight_request:
            response = Response(status_code=204)
            self._service.apply_result(result, response)
            return response

        try:
            response = cast(Response, await call_next(request))
        except Exception:
            # A failing handler still yields a 500 that carries the CORS headers.
            logger.exception("cors_downstream_error", path=request.url.path, method=request.method)
            response = PlainTextResponse("Internal Server Error", status_code=500)
        self._service.apply_result(result, response)
        return response

    async def _resolve_policy(self, request: Request) -> CorsPolicy | None:
        if self._policy is not None:
            return self._policy
        assert self._policy_provider is not None
        return await self._policy_provider.get_policy(request, self._policy_name)
