"""Structured logging configuration for OAuth tooling.

structlog is configured with console output for development and JSON output
for production. Every event passes through a scrubbing processor that masks
bearer/basic credentials and ``access_token``/``code`` query values in string
fields, so httpx error messages carrying a tokeninfo URL never leak a token.

Environment Variables:
    OAUTH_TOOLING_LOG_FORMAT: "json" or "console"
    OAUTH_TOOLING_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
    OAUTH_TOOLING_SERVICE_NAME: Service name included in every event

Example:
    >>> from oauth_tooling.observability.logging import get_logger, configure_logging
    >>>
    >>> configure_logging(log_format="json", log_level="INFO")
    >>> logger = get_logger("oauth_tooling.auth.oauth2")
    >>> logger.info("oauth.token.acquired", token_endpoint="https://auth.example.com/token")
"""

import logging
import os
import re
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"
DEFAULT_SERVICE_NAME = "oauth-tooling"

ENV_LOG_FORMAT = "OAUTH_TOOLING_LOG_FORMAT"
ENV_LOG_LEVEL = "OAUTH_TOOLING_LOG_LEVEL"
ENV_SERVICE_NAME = "OAUTH_TOOLING_SERVICE_NAME"

REDACTED_PLACEHOLDER = "***REDACTED***"

# Key substrings (case-insensitive) whose values are never logged
_SENSITIVE_KEY_PATTERNS = frozenset(
    {"password", "token", "secret", "key", "authorization", "auth", "code"}
)

# "Bearer <token>" / "Basic <b64>" and token-bearing query parameters
_CREDENTIAL_IN_TEXT = re.compile(r"\b(Bearer|Basic)\s+[^\s,;\"']+", re.IGNORECASE)
_SECRET_QUERY_PARAM = re.compile(
    r"([?&](?:access_token|code|client_secret|password)=)[^&#\s\"']*", re.IGNORECASE
)

_logging_configured = False


def _is_sensitive_key(key: str) -> bool:
    lower = key.lower()
    return any(pattern in lower for pattern in _SENSITIVE_KEY_PATTERNS)


def sanitize_for_logging(data: dict[str, Any]) -> dict[str, Any]:
    """Redact sensitive values in an upstream response body before logging it.

    Keys containing password, token, secret, key, authorization, auth or
    code (case-insensitive) are replaced with REDACTED_PLACEHOLDER. Nested
    dicts and lists of dicts are handled recursively.

    Example:
        >>> sanitize_for_logging({"error": "invalid_grant", "access_token": "abc"})
        {'error': 'invalid_grant', 'access_token': '***REDACTED***'}
    """
    result: dict[str, Any] = {}
    for k, v in data.items():
        if _is_sensitive_key(k):
            result[k] = REDACTED_PLACEHOLDER
        elif isinstance(v, dict):
            result[k] = sanitize_for_logging(v)
        elif isinstance(v, list):
            result[k] = [
                sanitize_for_logging(item) if isinstance(item, dict) else item for item in v
            ]
        else:
            result[k] = v
    return result


def scrub_credentials(text: str) -> str:
    """Mask credentials embedded in free text (error messages, URLs).

    Example:
        >>> scrub_credentials("GET https://auth/tokeninfo?access_token=abc failed")
        'GET https://auth/tokeninfo?access_token=***REDACTED*** failed'
    """
    text = _CREDENTIAL_IN_TEXT.sub(lambda m: f"{m.group(1)} {REDACTED_PLACEHOLDER}", text)
    return _SECRET_QUERY_PARAM.sub(lambda m: f"{m.group(1)}{REDACTED_PLACEHOLDER}", text)


def _scrub_event(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    for k, v in event_dict.items():
        if isinstance(v, str):
            event_dict[k] = scrub_credentials(v)
    return event_dict


def _get_shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _scrub_event,
    ]


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    service_name: str | None = None,
    force: bool = False,
) -> None:
    """Configure structured logging for the process.

    Args:
        log_format: "json" or "console". Defaults to env var or "console"
        log_level: Minimum log level. Defaults to env var or "INFO"
        service_name: Service name for log context. Defaults to env var or "oauth-tooling"
        force: If True, reconfigure even if already configured
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    log_format = (log_format or os.environ.get(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT)).lower()
    log_level = (log_level or os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()
    service_name = service_name or os.environ.get(ENV_SERVICE_NAME, DEFAULT_SERVICE_NAME)

    shared_processors = _get_shared_processors()

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # stderr keeps stdout clean for CLI output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level))

    structlog.contextvars.bind_contextvars(service=service_name)

    _logging_configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, configuring defaults on first use."""
    if not _logging_configured:
        configure_logging()

    return structlog.stdlib.get_logger(name)
