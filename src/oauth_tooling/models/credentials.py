"""Credential documents read from a credentials directory.

Two JSON files live side by side:

- ``user.json``: ``{"application_username": ..., "application_password": ...}``
- ``client.json``: ``{"client_id": ..., "client_secret": ...}``

Unknown keys are ignored; credential files commonly carry extra metadata.
"""

from pydantic import ConfigDict, Field

from oauth_tooling.models.base import OAuthBaseModel

USER_JSON = "user.json"
CLIENT_JSON = "client.json"


class UserCredentials(OAuthBaseModel):
    """Resource owner credentials used by the password grant."""

    model_config = ConfigDict(extra="ignore")

    application_username: str = Field(..., description="Resource owner username")
    application_password: str = Field(..., description="Resource owner password")


class ClientCredentials(OAuthBaseModel):
    """OAuth2 client credentials used for the Basic auth header."""

    model_config = ConfigDict(extra="ignore")

    client_id: str = Field(..., description="OAuth2 client identifier")
    client_secret: str = Field(..., description="OAuth2 client secret")
