"""OAuth Tooling Error Taxonomy.

This module defines the error hierarchy raised by token acquisition,
token introspection and credential loading. Every error carries a code,
a human-readable message and a details dict.

Unrecognized grant objects are programming errors and raise the built-in
``TypeError`` instead.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any


class OAuthToolingError(Exception):
    """Base exception for all OAuth tooling errors.

    Attributes:
        code: Error code following the oauth:<area>/<reason> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(OAuthToolingError):
    """Raised when required options are missing or invalid.

    Raised synchronously at setup or call time, before any I/O: a missing
    grant field, an unrecognized grant type, or a middleware without a
    tokeninfo endpoint. Never worth retrying.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(code="oauth:config/invalid", message=message, details=details or {})


class CredentialLoadError(OAuthToolingError):
    """Raised when a credential file is missing, unreadable or malformed.

    Attributes:
        path: The credential file that failed to load
        reason: Why loading failed
    """

    def __init__(self, path: str | Path, reason: str, details: dict[str, Any] | None = None) -> None:
        message = f"Could not load credentials from {path}: {reason}"
        super().__init__(
            code="oauth:credentials/load_failed",
            message=message,
            details={"path": str(path), "reason": reason, **(details or {})},
        )
        self.path = str(path)
        self.reason = reason


class UpstreamRejection(OAuthToolingError):
    """Raised when the token or tokeninfo endpoint answers with a non-200 status.

    Attributes:
        status: HTTP status returned by the endpoint
        data: Parsed JSON error body, or the raw text when it is not JSON
    """

    def __init__(self, status: int, data: Any, details: dict[str, Any] | None = None) -> None:
        message = f"Endpoint responded with status {status}"
        super().__init__(
            code="oauth:upstream/rejected",
            message=message,
            details={"status": status, **(details or {})},
        )
        self.status = status
        self.data = data


class TransportFailure(OAuthToolingError):
    """Raised when an endpoint could not be reached or returned no usable body.

    Attributes:
        msg: Message naming the endpoint, e.g.
            ``Error requesting access token from https://...``
        err: The underlying exception
    """

    def __init__(self, msg: str, err: BaseException, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="oauth:transport/failed",
            message=msg,
            details={"error": str(err), **(details or {})},
        )
        self.msg = msg
        self.err = err
