"""
Logging helpers shared by the gateway and the repository.

Provides a consistent logging setup for every entry point
so that requests can be traced through the logs by correlation ID.
"""

import logging
import uuid


def setup_logging(name: str, level: str = "INFO") -> logging.Logger:
    """
    Configure process logging and return a named logger.

    Args:
        name: Logger name (e.g. 'gateway.app').
        level: Log level string (e.g. 'INFO', 'DEBUG').

    Returns:
        Configured logger instance.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s",
    )
    return logging.getLogger(name)


def generate_correlation_id() -> str:
    """Generate a short unique ID for tracing a single request."""
    return uuid.uuid4().hex[:12]
