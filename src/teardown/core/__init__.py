"""Teardown Core — configuration."""

from teardown.core.config import Config, config_properties

__all__ = [
    "Config",
    "config_properties",
]
