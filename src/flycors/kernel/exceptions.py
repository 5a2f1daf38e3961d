"""Unified exception hierarchy for FlyCors.

All library exceptions inherit from FlyCorsException so callers can catch
a single type. A request whose origin, method or headers do not match a
policy is *not* an error: it is reported through ``CorsResult``.

Categories:
- InvalidArgumentException: Programming-contract violations (missing request,
  response, policy or result arguments)
- CorsConfigurationException: Invalid policy or registry configuration
- PolicyNotFoundException: Named policy lookup failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlyCorsException(Exception):
    """Base exception for all FlyCors errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_POLICY_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Contract Exceptions
# =============================================================================


class InvalidArgumentException(FlyCorsException, ValueError):
    """A required argument was missing or malformed."""

    @classmethod
    def missing(cls, name: str) -> InvalidArgumentException:
        return cls(f"Argument '{name}' must not be None", code="ARGUMENT_NULL", context={"argument": name})


# =============================================================================
# Configuration Exceptions
# =============================================================================


class CorsConfigurationException(FlyCorsException):
    """CORS configuration could not be applied."""


class InvalidPolicyException(CorsConfigurationException):
    """A policy violates a rule of the CORS protocol (e.g. ``*`` with credentials)."""


class PolicyNotFoundException(CorsConfigurationException, LookupError):
    """No policy is registered under the requested name."""
