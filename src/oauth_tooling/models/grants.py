"""Grant requests for the token acquirer.

A grant request is a tagged union keyed by ``grant_type``: each variant
carries only the fields its flow needs, so a password grant can never be
built with an authorization code and vice versa.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import Discriminator, Field, TypeAdapter, ValidationError

from oauth_tooling.errors import ConfigurationError
from oauth_tooling.models.base import OAuthBaseModel
from oauth_tooling.models.enums import GrantType, Realm

# camelCase option names accepted by parse_grant_request
_OPTION_ALIASES = {
    "grantType": "grant_type",
    "accessTokenEndpoint": "access_token_endpoint",
    "credentialsDir": "credentials_dir",
    "redirectUri": "redirect_uri",
}


class PasswordCredentialsGrant(OAuthBaseModel):
    """Resource Owner Password Credentials Grant (RFC 6749 section 4.3).

    Attributes:
        realm: Realm appended to the token endpoint as ``?realm=``.
        scopes: Scopes requested, sent space-joined.
        access_token_endpoint: URL of the token endpoint.
        credentials_dir: Directory holding ``user.json`` and ``client.json``.
    """

    grant_type: Literal[GrantType.PASSWORD_CREDENTIALS] = GrantType.PASSWORD_CREDENTIALS
    realm: Realm
    scopes: list[str]
    access_token_endpoint: str = Field(..., min_length=1)
    credentials_dir: Path


class AuthorizationCodeGrant(OAuthBaseModel):
    """Authorization Code Grant (RFC 6749 section 4.1), code exchange step.

    Attributes:
        realm: Realm appended to the token endpoint as ``?realm=``.
        code: Authorization code received on the redirect URI.
        redirect_uri: Redirect URI used when the code was requested.
        access_token_endpoint: URL of the token endpoint.
        credentials_dir: Directory holding ``user.json`` and ``client.json``.
    """

    grant_type: Literal[GrantType.AUTHORIZATION_CODE] = GrantType.AUTHORIZATION_CODE
    realm: Realm
    code: str = Field(..., min_length=1)
    redirect_uri: str = Field(..., min_length=1)
    access_token_endpoint: str = Field(..., min_length=1)
    credentials_dir: Path


GrantRequest = Annotated[
    Union[PasswordCredentialsGrant, AuthorizationCodeGrant], Discriminator("grant_type")
]

_grant_adapter: TypeAdapter[GrantRequest] = TypeAdapter(GrantRequest)


def parse_grant_request(options: Mapping[str, Any]) -> PasswordCredentialsGrant | AuthorizationCodeGrant:
    """Build a grant request from an options mapping.

    Accepts snake_case keys or the camelCase names ``grantType``,
    ``accessTokenEndpoint``, ``credentialsDir`` and ``redirectUri``.

    Args:
        options: Raw options, e.g. loaded from configuration.

    Returns:
        The grant variant selected by ``grant_type``.

    Raises:
        ConfigurationError: Unrecognized grant type, or a field the grant
            requires is missing or invalid.
    """
    data = {_OPTION_ALIASES.get(key, key): value for key, value in options.items()}

    raw_grant_type = data.get("grant_type")
    if raw_grant_type is None:
        raise ConfigurationError("grant_type must be defined")
    try:
        data["grant_type"] = GrantType(raw_grant_type)
    except ValueError:
        raise ConfigurationError(
            f"invalid grant_type {raw_grant_type!r}",
            details={"supported": [g.value for g in GrantType]},
        ) from None

    try:
        return _grant_adapter.validate_python(data)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"][1:]) for err in e.errors()})
        raise ConfigurationError(
            f"invalid {data['grant_type'].value} grant options: {', '.join(fields)}",
            details={"fields": fields},
        ) from e
