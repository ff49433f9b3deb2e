"""OAuth tooling authentication layer.

- Token acquisition for the password and authorization_code grants
- Token validation against a tokeninfo endpoint
- Middleware attaching granted scopes to the request
- Scope enforcement as a FastAPI dependency

Public exports:
    get_access_token: Acquire a token for a grant request
    create_auth_code_request_uri: URI to request an authorization code
    get_token_info: Validate a token against the tokeninfo endpoint
    OAuthMiddleware: Bearer token validation middleware
    OAuthMiddlewareConfig: Config for the middleware
    add_oauth_middleware: Register the middleware from a config
    AuthContext: Request-scoped token, scopes and token info
    get_auth_context: Read the AuthContext of a request
    require_scopes: FastAPI dependency factory for scope-based authz
"""

from oauth_tooling.auth.introspection import get_token_info
from oauth_tooling.auth.middleware import (
    AuthContext,
    OAuthMiddleware,
    OAuthMiddlewareConfig,
    add_oauth_middleware,
    get_auth_context,
)
from oauth_tooling.auth.oauth2 import create_auth_code_request_uri, get_access_token
from oauth_tooling.auth.scopes import require_scopes

__all__ = [
    "AuthContext",
    "OAuthMiddleware",
    "OAuthMiddlewareConfig",
    "add_oauth_middleware",
    "create_auth_code_request_uri",
    "get_access_token",
    "get_auth_context",
    "get_token_info",
    "require_scopes",
]
