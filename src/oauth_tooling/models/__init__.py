"""OAuth tooling models.

Enumerations, grant request variants and credential documents.
"""

from oauth_tooling.models.base import OAuthBaseModel
from oauth_tooling.models.credentials import (
    CLIENT_JSON,
    USER_JSON,
    ClientCredentials,
    UserCredentials,
)
from oauth_tooling.models.enums import GrantType, Realm
from oauth_tooling.models.grants import (
    AuthorizationCodeGrant,
    GrantRequest,
    PasswordCredentialsGrant,
    parse_grant_request,
)

__all__ = [
    "CLIENT_JSON",
    "USER_JSON",
    "AuthorizationCodeGrant",
    "ClientCredentials",
    "GrantRequest",
    "GrantType",
    "OAuthBaseModel",
    "PasswordCredentialsGrant",
    "Realm",
    "UserCredentials",
    "parse_grant_request",
]
