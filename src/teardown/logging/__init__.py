"""Teardown Logging — hexagonal logging port and structlog adapter."""

from teardown.logging.port import LoggingPort
from teardown.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
