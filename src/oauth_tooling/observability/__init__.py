"""Observability module for OAuth tooling.

Structured logging via structlog, with console output for development
and JSON output for production.

Example:
    >>> from oauth_tooling.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("oauth.token.acquired", token_endpoint="https://auth.example.com/token")
"""

from oauth_tooling.observability.logging import (
    configure_logging,
    get_logger,
    sanitize_for_logging,
    scrub_credentials,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_for_logging",
    "scrub_credentials",
]
