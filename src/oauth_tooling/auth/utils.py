"""Shared header and scope utilities for the auth module."""

from __future__ import annotations

import base64
import re
from typing import Any, Iterable, Sequence

import httpx

from oauth_tooling.errors import ConfigurationError, TransportFailure, UpstreamRejection

BEARER_SCHEME = "bearer"
HTTP_OK = 200


def build_basic_auth_header(client_id: str, client_secret: str) -> str:
    """Return the ``Authorization`` value for HTTP Basic client authentication.

    Example:
        >>> build_basic_auth_header("client", "secret")
        'Basic Y2xpZW50OnNlY3JldA=='
    """
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def extract_access_token(authorization: str | None) -> str | None:
    """Extract the token from a ``Bearer <token>`` header value.

    Returns None when the header is absent, uses another scheme, or does not
    split into exactly a scheme and a token.
    """
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None
    return parts[1]


def compile_public_endpoints(patterns: Iterable[str] | None) -> list[re.Pattern[str]]:
    """Compile public endpoint patterns once, at setup.

    Raises:
        ConfigurationError: A pattern is not a valid regular expression.
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns or []:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(
                f"invalid public endpoint pattern {pattern!r}: {e}",
                details={"pattern": pattern},
            ) from e
    return compiled


def match_public_endpoint(
    path: str, patterns: Sequence[str | re.Pattern[str]] | None
) -> bool:
    """Return True if ``path`` matches any pattern.

    Patterns are regular expressions anchored at the start of the path, so
    ``"/health"`` covers ``/health`` and ``/health/live``, and ``"/docs$"``
    covers only ``/docs``.
    Compiled patterns (see ``compile_public_endpoints``) are used as is.
    """
    if not patterns:
        return False
    return any(re.match(pattern, path) for pattern in patterns)


def parse_scope(claim: Any) -> list[str]:
    """Normalize scope claim to a list of strings.

    Tokeninfo scope can be a space-separated string (RFC 6749) or a list.

    Args:
        claim: Raw scope value from an introspection response.

    Returns:
        List of scope strings (empty if claim is None or invalid).
    """
    if claim is None:
        return []
    if isinstance(claim, list):
        return [str(s) for s in claim]
    if isinstance(claim, str):
        return [s.strip() for s in claim.split() if s.strip()]
    return []


def missing_scopes(required: Iterable[str], granted: Iterable[str]) -> set[str]:
    """Return the required scopes that are not granted (``required - granted``)."""
    return set(required) - set(granted)


def parse_endpoint_response(response: httpx.Response, error_message: str) -> Any:
    """Return the JSON body of a 200 response or raise.

    Args:
        response: Response from the token or tokeninfo endpoint.
        error_message: Message used when the body cannot be parsed.

    Raises:
        UpstreamRejection: Status is not 200; carries the JSON body, or the
            text when the body is not JSON.
        TransportFailure: Status is 200 but the body is not JSON.
    """
    if response.status_code != HTTP_OK:
        try:
            data: Any = response.json()
        except ValueError:
            data = response.text
        raise UpstreamRejection(response.status_code, data)
    try:
        return response.json()
    except ValueError as e:
        raise TransportFailure(error_message, e) from e
