"""Scope-based authorization.

Provides a FastAPI dependency factory that checks the scopes attached by
OAuthMiddleware against the scopes a route requires.
"""

from __future__ import annotations

from typing import Callable, Iterable

from fastapi import HTTPException, Request

from oauth_tooling.auth.middleware import AuthContext, get_auth_context
from oauth_tooling.auth.utils import missing_scopes
from oauth_tooling.observability import get_logger

logger = get_logger(__name__)

HTTP_FORBIDDEN = 403
ERROR_INSUFFICIENT_SCOPE = "Insufficient scope"

_EMPTY_CONTEXT = AuthContext(access_token="")


def require_scopes(required: Iterable[str]) -> Callable[[Request], AuthContext]:
    """FastAPI dependency factory: require every scope in ``required``.

    Use as: ``Depends(require_scopes(["orders.read", "orders.write"]))``.
    A request without an AuthContext is treated as having no scopes, so it
    passes only when ``required`` is empty. Missing scopes raise 403.

    Args:
        required: Scopes the token must carry.

    Returns:
        A dependency callable that FastAPI will invoke with Request; it
        returns the request's AuthContext.

    Example:
        >>> from fastapi import Depends
        >>>
        >>> @app.get("/orders")
        >>> async def list_orders(
        ...     auth: AuthContext = Depends(require_scopes(["orders.read"])),
        ... ):
        ...     return {"scopes": sorted(auth.scopes)}
    """
    required_scopes = frozenset(required)

    def _dependency(request: Request) -> AuthContext:
        context = get_auth_context(request) or _EMPTY_CONTEXT
        missing = missing_scopes(required_scopes, context.scopes)
        if missing:
            logger.warning(
                "oauth.request.insufficient_scope",
                path=request.url.path,
                missing=sorted(missing),
            )
            raise HTTPException(
                status_code=HTTP_FORBIDDEN,
                detail=ERROR_INSUFFICIENT_SCOPE,
            )
        return context

    return _dependency
