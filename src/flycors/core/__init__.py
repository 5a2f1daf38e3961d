"""FlyCors core — configuration."""

from flycors.core.config import Config, config_properties

__all__ = ["Config", "config_properties"]
