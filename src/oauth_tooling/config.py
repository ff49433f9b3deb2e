"""Environment-driven settings.

Environment Variables:
    OAUTH_TOKEN_INFO_ENDPOINT: URL of the tokeninfo endpoint
    OAUTH_PUBLIC_ENDPOINTS: Comma-separated path patterns that skip validation
    OAUTH_ACCESS_TOKEN_ENDPOINT: URL of the token endpoint
    OAUTH_CREDENTIALS_DIR: Directory holding user.json and client.json
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

ENV_TOKEN_INFO_ENDPOINT = "OAUTH_TOKEN_INFO_ENDPOINT"
ENV_PUBLIC_ENDPOINTS = "OAUTH_PUBLIC_ENDPOINTS"
ENV_ACCESS_TOKEN_ENDPOINT = "OAUTH_ACCESS_TOKEN_ENDPOINT"
ENV_CREDENTIALS_DIR = "OAUTH_CREDENTIALS_DIR"


@dataclass(frozen=True)
class OAuthSettings:
    """Settings read from the environment; unset values are None or empty."""

    token_info_endpoint: str | None = None
    public_endpoints: tuple[str, ...] = field(default_factory=tuple)
    access_token_endpoint: str | None = None
    credentials_dir: str | None = None


def _get(name: str) -> str | None:
    value = os.environ.get(name, "").strip()
    return value or None


def _split_patterns(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(p.strip() for p in raw.split(",") if p.strip())


def load_settings() -> OAuthSettings:
    """Read OAuthSettings from the current environment."""
    return OAuthSettings(
        token_info_endpoint=_get(ENV_TOKEN_INFO_ENDPOINT),
        public_endpoints=_split_patterns(_get(ENV_PUBLIC_ENDPOINTS)),
        access_token_endpoint=_get(ENV_ACCESS_TOKEN_ENDPOINT),
        credentials_dir=_get(ENV_CREDENTIALS_DIR),
    )
