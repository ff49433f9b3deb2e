"""OAuth2 token acquisition.

Supports two grants:
- password: Resource Owner Password Credentials Grant (service accounts)
- authorization_code: exchange of a code received on the redirect URI

Every call re-reads the credential files and performs exactly one token
request; there is no token cache, no refresh and no retry.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

import httpx

from oauth_tooling.auth.utils import build_basic_auth_header, parse_endpoint_response
from oauth_tooling.credentials import load_credentials
from oauth_tooling.errors import TransportFailure, UpstreamRejection
from oauth_tooling.models.credentials import UserCredentials
from oauth_tooling.models.enums import Realm
from oauth_tooling.models.grants import (
    AuthorizationCodeGrant,
    PasswordCredentialsGrant,
    parse_grant_request,
)
from oauth_tooling.observability import get_logger, sanitize_for_logging

logger = get_logger(__name__)

OAUTH_CONTENT_TYPE = "application/x-www-form-urlencoded"

Grant = Union[PasswordCredentialsGrant, AuthorizationCodeGrant]


def create_auth_code_request_uri(
    authorization_endpoint: str,
    client_id: str,
    redirect_uri: str,
    realm: Realm = Realm.EMPLOYEES,
) -> str:
    """Return the URI a user agent is sent to for an authorization code.

    Example:
        >>> create_auth_code_request_uri(
        ...     "https://auth.example.com/oauth2/authorize", "my-client", "https://app/cb"
        ... )
        'https://auth.example.com/oauth2/authorize?client_id=my-client&redirect_uri=https%3A%2F%2Fapp%2Fcb&response_type=code&realm=%2Femployees'
    """
    query = urlencode(
        {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "realm": realm.value,
        }
    )
    return f"{authorization_endpoint}?{query}"


def _build_body(grant: Grant, user: UserCredentials) -> dict[str, str]:
    if isinstance(grant, PasswordCredentialsGrant):
        return {
            "grant_type": grant.grant_type.value,
            "username": user.application_username,
            "password": user.application_password,
            "scope": " ".join(grant.scopes),
        }
    if isinstance(grant, AuthorizationCodeGrant):
        return {
            "grant_type": grant.grant_type.value,
            "code": grant.code,
            "redirect_uri": grant.redirect_uri,
        }
    raise TypeError("invalid grantType")


async def request_access_token(
    body: Mapping[str, str],
    authorization_header: str,
    access_token_endpoint: str,
    realm: Realm,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[str, Any]:
    """POST a form-encoded grant to ``access_token_endpoint?realm=<realm>``.

    Args:
        body: Grant parameters sent form-url-encoded.
        authorization_header: Value of the ``Authorization`` header.
        access_token_endpoint: URL of the token endpoint.
        realm: Realm added as query parameter.
        transport: Optional httpx transport for testing (e.g. MockTransport).

    Returns:
        The parsed JSON body of the 200 response.

    Raises:
        UpstreamRejection: The endpoint returned a status other than 200.
        TransportFailure: The endpoint could not be reached, or the body was not JSON.
    """
    error_message = f"Error requesting access token from {access_token_endpoint}"

    async with httpx.AsyncClient(transport=transport) as client:
        try:
            response = await client.post(
                access_token_endpoint,
                params={"realm": realm.value},
                data=dict(body),
                headers={
                    "Authorization": authorization_header,
                    "Content-Type": OAUTH_CONTENT_TYPE,
                },
            )
        except httpx.HTTPError as e:
            logger.error(
                "oauth.token.transport_failed",
                token_endpoint=access_token_endpoint,
                error=str(e),
            )
            raise TransportFailure(error_message, e) from e

    try:
        data: dict[str, Any] = parse_endpoint_response(response, error_message)
    except UpstreamRejection as e:
        logger.warning(
            "oauth.token.rejected",
            token_endpoint=access_token_endpoint,
            status=e.status,
            data=sanitize_for_logging(e.data) if isinstance(e.data, dict) else None,
        )
        raise

    logger.info(
        "oauth.token.acquired",
        token_endpoint=access_token_endpoint,
        grant_type=body.get("grant_type"),
        realm=realm.value,
    )
    return data


async def get_access_token(
    grant: Union[Grant, Mapping[str, Any]],
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[str, Any]:
    """Obtain an access token for the given grant.

    Loads user and client credentials from ``grant.credentials_dir``, builds
    the grant-specific body, authenticates the client with HTTP Basic and
    performs one token request.

    Args:
        grant: A grant variant, or an options mapping converted with
            ``parse_grant_request``.
        transport: Optional httpx transport for testing (e.g. MockTransport).

    Returns:
        The token endpoint's JSON body (e.g. ``{"access_token": ...}``).

    Raises:
        ConfigurationError: The options mapping is incomplete or names an
            unknown grant type.
        TypeError: ``grant`` is neither a grant variant nor a mapping.
        CredentialLoadError: A credential file could not be loaded.
        UpstreamRejection: The token endpoint returned a status other than 200.
        TransportFailure: The token endpoint could not be reached.

    Example:
        >>> body = await get_access_token(
        ...     {
        ...         "grantType": "password",
        ...         "realm": "/services",
        ...         "scopes": ["campaign.read_all"],
        ...         "accessTokenEndpoint": "https://auth.example.com/oauth2/access_token",
        ...         "credentialsDir": "/meta/credentials",
        ...     }
        ... )
        >>> body["access_token"]
    """
    if isinstance(grant, Mapping):
        grant = parse_grant_request(grant)
    if not isinstance(grant, (PasswordCredentialsGrant, AuthorizationCodeGrant)):
        raise TypeError("invalid grantType")

    user, client = await load_credentials(grant.credentials_dir)

    body = _build_body(grant, user)
    authorization_header = build_basic_auth_header(client.client_id, client.client_secret)

    return await request_access_token(
        body,
        authorization_header,
        grant.access_token_endpoint,
        grant.realm,
        transport=transport,
    )
