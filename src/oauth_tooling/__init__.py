"""OAuth2 tooling for HTTP services.

Acquire access tokens (password-credentials and authorization-code grants),
validate inbound bearer tokens against a tokeninfo endpoint and enforce
scopes on FastAPI/Starlette routes.

Example:
    >>> from oauth_tooling import PasswordCredentialsGrant, Realm, get_access_token
    >>> grant = PasswordCredentialsGrant(
    ...     realm=Realm.SERVICES,
    ...     scopes=["campaign.read_all"],
    ...     access_token_endpoint="https://auth.example.com/oauth2/access_token",
    ...     credentials_dir="/meta/credentials",
    ... )
    >>> body = await get_access_token(grant)
"""

from oauth_tooling.auth import (
    AuthContext,
    OAuthMiddleware,
    OAuthMiddlewareConfig,
    create_auth_code_request_uri,
    get_access_token,
    get_auth_context,
    get_token_info,
    require_scopes,
)
from oauth_tooling.errors import (
    ConfigurationError,
    CredentialLoadError,
    OAuthToolingError,
    TransportFailure,
    UpstreamRejection,
)
from oauth_tooling.models import (
    AuthorizationCodeGrant,
    GrantRequest,
    GrantType,
    PasswordCredentialsGrant,
    Realm,
    parse_grant_request,
)

__version__ = "0.1.0"

__all__ = [
    "AuthContext",
    "AuthorizationCodeGrant",
    "ConfigurationError",
    "CredentialLoadError",
    "GrantRequest",
    "GrantType",
    "OAuthMiddleware",
    "OAuthMiddlewareConfig",
    "OAuthToolingError",
    "PasswordCredentialsGrant",
    "Realm",
    "TransportFailure",
    "UpstreamRejection",
    "__version__",
    "create_auth_code_request_uri",
    "get_access_token",
    "get_auth_context",
    "get_token_info",
    "parse_grant_request",
    "require_scopes",
]
