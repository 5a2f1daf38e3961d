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
"""CorsService — evaluates requests against a policy and writes CORS headers.

Framework-agnostic: a request is any object exposing ``method`` and a
``headers`` mapping, a response any object exposing a mutable ``headers``
mapping. Starlette ``Request``/``Response`` satisfy both.

Usage::

    service = CorsService()
    result = service.evaluate_policy(request, policy)
    service.apply_result(result, response)
"""

from __future__ import annotations

from typing import Any

import structlog

from flycors.cors.constants import (
    ACCESS_CONTROL_ALLOW_CREDENTIALS,
    ACCESS_CONTROL_ALLOW_HEADERS,
    ACCESS_CONTROL_ALLOW_METHODS,
    ACCESS_CONTROL_ALLOW_ORIGIN,
    ACCESS_CONTROL_EXPOSE_HEADERS,
    ACCESS_CONTROL_MAX_AGE,
    ACCESS_CONTROL_REQUEST_HEADERS,
    ACCESS_CONTROL_REQUEST_METHOD,
    ORIGIN,
    PREFLIGHT_HTTP_METHOD,
)
from flycors.cors.headers import add_vary, get_header
from flycors.cors.options import CorsOptions
from flycors.cors.policy import CorsPolicy
from flycors.cors.result import CorsResult
from flycors.kernel.exceptions import InvalidArgumentException, PolicyNotFoundException

logger = structlog.get_logger("flycors.cors")


class CorsService:
    """Default CORS policy evaluator.

    Stateless apart from the policy registry it was created with; one
    instance can serve every request concurrently.
    """

    def __init__(self, options: CorsOptions | None = None) -> None:
        self._options = options if options is not None else CorsOptions()

    @property
    def options(self) -> CorsOptions:
        return self._options

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate_policy_by_name(self, request: Any, policy_name: str) -> CorsResult:
        """Look up *policy_name* in the registry and evaluate it.

        Raises:
            PolicyNotFoundException: If no policy is registered under that name.
        """
        if request is None:
            raise InvalidArgumentException.missing("request")

        policy = self._options.get_policy(policy_name)
        if policy is None:
            raise PolicyNotFoundException(
                f"No CORS policy named '{policy_name}' is registered",
                code="CORS_POLICY_NOT_FOUND",
                context={"policy_name": policy_name, "available": self._options.policy_names},
            )
        return self.evaluate_policy(request, policy)

    def evaluate_policy(self, request: Any, policy: CorsPolicy) -> CorsResult:
        """Classify *request* and match it against *policy*.

        A disallowed request yields a result with ``is_cors_response_allowed``
        set to ``False`` and every header field left empty.
        """
        if request is None:
            raise InvalidArgumentException.missing("request")
        if policy is None:
            raise InvalidArgumentException.missing("policy")

        origin = get_header(request.headers, ORIGIN)
        result = CorsResult(
            is_preflight_request=self.is_preflight_request(request),
            is_cors_response_allowed=self._is_origin_allowed(policy, origin),
        )
        if not result.is_cors_response_allowed:
            return result

        if result.is_preflight_request:
            self.evaluate_preflight_request(request, policy, result)
        else:
            self.evaluate_request(request, policy, result)

        logger.debug("cors_policy_success", origin=origin, preflight=result.is_preflight_request)
        return result

    def evaluate_request(self, request: Any, policy: CorsPolicy, result: CorsResult) -> None:
        self._calculate_result(request, policy, result)

    def evaluate_preflight_request(self, request: Any, policy: CorsPolicy, result: CorsResult) -> None:
        self._calculate_result(request, policy, result)

    @staticmethod
    def is_preflight_request(request: Any) -> bool:
        """``OPTIONS`` (any case) carrying ``Access-Control-Request-Method``.

        ``Access-Control-Request-Headers`` is not required.
        """
        method = str(request.method or "")
        return (
            method.upper() == PREFLIGHT_HTTP_METHOD
            and get_header(request.headers, ACCESS_CONTROL_REQUEST_METHOD) is not None
        )

    @staticmethod
    def _is_origin_allowed(policy: CorsPolicy, origin: str | None) -> bool:
        if not origin:
            logger.debug("cors_request_has_no_origin")
            return False

        if policy.is_origin_allowed(origin):
            return True

        logger.info("cors_origin_not_allowed", origin=origin)
        return False

    @staticmethod
    def _calculate_result(request: Any, policy: CorsPolicy, result: CorsResult) -> None:
        values = policy.header_values
        headers = request.headers

        # Always the literal request origin, never "*".
        result.allowed_origin = get_header(headers, ORIGIN)
        result.supports_credentials = policy.supports_credentials

        if policy.supports_credentials:
            # Credentialed responses may not carry "*": reflect the requested values when sent.
            requested_method = get_header(headers, ACCESS_CONTROL_REQUEST_METHOD)
            requested_headers = get_header(headers, ACCESS_CONTROL_REQUEST_HEADERS)
            result.access_control_allow_methods = (
                requested_method if requested_method is not None else values.allow_methods
            )
            result.access_control_allow_headers = (
                requested_headers if requested_headers is not None else values.allow_headers
            )
        else:
            result.access_control_allow_methods = values.allow_methods
            result.access_control_allow_headers = values.allow_headers

        result.access_control_expose_headers = values.expose_headers
        result.access_control_max_age = values.max_age
        result.vary_by_origin = policy.vary_by_origin

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply_result(self, result: CorsResult, response: Any) -> None:
        """Write the headers described by *result* onto *response*.

        Nothing is written when the request was not allowed. Headers the
        response already carries are kept; ``Vary`` is merged, not replaced.
        """
        if result is None:
            raise InvalidArgumentException.missing("result")
        if response is None:
            raise InvalidArgumentException.missing("response")

        if not result.is_cors_response_allowed:
            return

        headers = response.headers
        _write_header(headers, ACCESS_CONTROL_ALLOW_ORIGIN, result.allowed_origin)

        if result.supports_credentials:
            headers[ACCESS_CONTROL_ALLOW_CREDENTIALS] = "true"

        if result.is_preflight_request:
            logger.debug("cors_preflight_request", origin=result.allowed_origin)
            _write_header(headers, ACCESS_CONTROL_ALLOW_HEADERS, result.access_control_allow_headers)
            _write_header(headers, ACCESS_CONTROL_ALLOW_METHODS, result.access_control_allow_methods)
            _write_header(headers, ACCESS_CONTROL_MAX_AGE, result.access_control_max_age)
        else:
            _write_header(headers, ACCESS_CONTROL_EXPOSE_HEADERS, result.access_control_expose_headers)

        if result.vary_by_origin:
            add_vary(headers, ORIGIN)


def _write_header(headers: Any, name: str, value: str | None) -> None:
    if value:
        headers[name] = value
