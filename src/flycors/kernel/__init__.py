"""FlyCors kernel — shared exception hierarchy."""

from flycors.kernel.exceptions import (
    CorsConfigurationException,
    FlyCorsException,
    InvalidArgumentException,
    InvalidPolicyException,
    PolicyNotFoundException,
)

__all__ = [
    "CorsConfigurationException",
    "FlyCorsException",
    "InvalidArgumentException",
    "InvalidPolicyException",
    "PolicyNotFoundException",
]
