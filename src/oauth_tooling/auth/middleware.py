"""OAuth2 bearer token validation middleware.

Extracts ``Authorization: Bearer <token>``, validates the token against the
tokeninfo endpoint and attaches an AuthContext (token, granted scopes,
token info) to ``request.state.auth_context`` for downstream scope checks.

Returns 401 when the token is missing or malformed, and the tokeninfo
endpoint's 4xx status (401 for any other status) when validation fails.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Awaitable, Callable, Sequence

import httpx
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from oauth_tooling.auth.introspection import get_token_info
from oauth_tooling.auth.utils import (
    compile_public_endpoints,
    extract_access_token,
    match_public_endpoint,
    parse_scope,
)
from oauth_tooling.config import load_settings
from oauth_tooling.errors import ConfigurationError, TransportFailure, UpstreamRejection
from oauth_tooling.observability import get_logger

logger = get_logger(__name__)

HTTP_UNAUTHORIZED = 401
HTTP_CLIENT_ERROR_MIN = 400
HTTP_SERVER_ERROR_MIN = 500
AUTH_CONTEXT_ATTR = "auth_context"
ERROR_AUTH_REQUIRED = "Authentication required"
ERROR_INVALID_TOKEN = "Invalid authentication token"


@dataclass(frozen=True)
class AuthContext:
    """Request-scoped result of a successful token validation.

    Attributes:
        access_token: The validated bearer token.
        scopes: Scopes granted to the token.
        token_info: Full tokeninfo response.
    """

    access_token: str = field(repr=False)
    scopes: frozenset[str] = frozenset()
    token_info: dict[str, Any] = field(default_factory=dict)


@dataclass
class OAuthMiddlewareConfig:
    """Configuration for OAuthMiddleware.

    Attributes:
        token_info_endpoint: URL of the tokeninfo endpoint.
        public_endpoints: Path patterns (regular expressions matched at the
            start of the path) that skip validation.
    """

    token_info_endpoint: str
    public_endpoints: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> OAuthMiddlewareConfig:
        """Build from OAUTH_TOKEN_INFO_ENDPOINT and OAUTH_PUBLIC_ENDPOINTS."""
        settings = load_settings()
        if not settings.token_info_endpoint:
            raise ConfigurationError("OAUTH_TOKEN_INFO_ENDPOINT must be set")
        return cls(
            token_info_endpoint=settings.token_info_endpoint,
            public_endpoints=list(settings.public_endpoints),
        )


def get_auth_context(request: Request) -> AuthContext | None:
    """Return the AuthContext attached by OAuthMiddleware, if any."""
    context = getattr(request.state, AUTH_CONTEXT_ATTR, None)
    return context if isinstance(context, AuthContext) else None


def _rejection_status(upstream_status: int) -> int:
    """Forward 4xx tokeninfo statuses; anything else becomes 401."""
    if HTTP_CLIENT_ERROR_MIN <= upstream_status < HTTP_SERVER_ERROR_MIN:
        return upstream_status
    return HTTP_UNAUTHORIZED


def _reject(status_code: int) -> JSONResponse:
    if status_code == HTTP_UNAUTHORIZED:
        return JSONResponse(
            status_code=status_code,
            content={"detail": ERROR_INVALID_TOKEN},
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        detail = HTTPStatus(status_code).phrase
    except ValueError:
        detail = ERROR_INVALID_TOKEN
    return JSONResponse(status_code=status_code, content={"detail": detail})


class OAuthMiddleware(BaseHTTPMiddleware):
    """Middleware that validates bearer tokens against a tokeninfo endpoint.

    Requests whose path matches a public endpoint pattern pass through
    untouched. For all others the tokeninfo endpoint is called once; on
    success ``request.state.auth_context`` is set and the request continues.
    """

    def __init__(
        self,
        app: Any,
        token_info_endpoint: str,
        *,
        public_endpoints: Sequence[str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize OAuth middleware.

        Args:
            app: ASGI application.
            token_info_endpoint: URL of the tokeninfo endpoint.
            public_endpoints: Path patterns that skip validation; compiled here.
            transport: Optional httpx transport for testing (e.g. MockTransport).

        Raises:
            ConfigurationError: token_info_endpoint is empty, or a public
                endpoint pattern is not a valid regular expression.
        """
        if not token_info_endpoint:
            raise ConfigurationError("tokenInfoEndpoint must be defined")
        super().__init__(app)
        self._token_info_endpoint = token_info_endpoint
        self._public_endpoints = compile_public_endpoints(public_endpoints)
        self._transport = transport

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Validate the bearer token; return 401 (or a 4xx upstream status) or pass to next."""
        path = request.url.path
        if match_public_endpoint(path, self._public_endpoints):
            return await call_next(request)

        log = logger.bind(path=path, tokeninfo_endpoint=self._token_info_endpoint)
        token = extract_access_token(request.headers.get("Authorization"))
        if not token:
            log.warning("oauth.request.missing_token")
            return JSONResponse(
                status_code=HTTP_UNAUTHORIZED,
                content={"detail": ERROR_AUTH_REQUIRED},
                headers={"WWW-Authenticate": "Bearer"},
            )

        try:
            token_info = await get_token_info(
                self._token_info_endpoint, token, transport=self._transport
            )
        except UpstreamRejection as e:
            status = _rejection_status(e.status)
            log.warning("oauth.request.invalid_token", upstream_status=e.status, status=status)
            return _reject(status)
        except TransportFailure as e:
            log.error("oauth.request.tokeninfo_unavailable", error=e.msg)
            return _reject(HTTP_UNAUTHORIZED)

        if not isinstance(token_info, dict):
            token_info = {}
        scopes = frozenset(parse_scope(token_info.get("scope")))
        log.debug("oauth.request.authenticated", scopes=sorted(scopes))
        setattr(
            request.state,
            AUTH_CONTEXT_ATTR,
            AuthContext(access_token=token, scopes=scopes, token_info=token_info),
        )
        return await call_next(request)


def add_oauth_middleware(
    app: Any,
    config: OAuthMiddlewareConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Register OAuthMiddleware on a FastAPI/Starlette app from a config.

    Starlette builds middleware lazily, so the config is checked here.

    Raises:
        ConfigurationError: config.token_info_endpoint is empty, or a public
            endpoint pattern is not a valid regular expression.
    """
    if not config.token_info_endpoint:
        raise ConfigurationError("tokenInfoEndpoint must be defined")
    compile_public_endpoints(config.public_endpoints)
    app.add_middleware(
        OAuthMiddleware,
        token_info_endpoint=config.token_info_endpoint,
        public_endpoints=config.public_endpoints,
        transport=transport,
    )
