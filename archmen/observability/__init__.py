"""
Observability package.

Logging configuration, correlation IDs and request middleware.
"""

from archmen.observability.logger import configure_logging, get_logger
from archmen.observability.correlation import get_correlation_id, set_correlation_id

__all__ = ["configure_logging", "get_logger", "get_correlation_id", "set_correlation_id"]
