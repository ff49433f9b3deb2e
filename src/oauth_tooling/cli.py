"""Command-line interface for OAuth tooling.

Example:
    >>> # From terminal:
    >>> # oauth-tooling --version
    >>> # oauth-tooling token --endpoint https://auth.example.com/oauth2/access_token \\
    >>> #     --credentials-dir ./credentials --realm /services --scope orders.read
    >>> # oauth-tooling token ... --code abc --redirect-uri https://app/cb
    >>> # oauth-tooling tokeninfo <token> --endpoint https://auth.example.com/oauth2/tokeninfo
    >>> # oauth-tooling auth-code-uri --endpoint https://auth.example.com/oauth2/authorize \\
    >>> #     --client-id my-client --redirect-uri https://app/cb
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any, NoReturn, Optional

import typer

from oauth_tooling import __version__
from oauth_tooling.auth.introspection import get_token_info
from oauth_tooling.auth.oauth2 import create_auth_code_request_uri, get_access_token
from oauth_tooling.config import (
    ENV_ACCESS_TOKEN_ENDPOINT,
    ENV_CREDENTIALS_DIR,
    ENV_TOKEN_INFO_ENDPOINT,
)
from oauth_tooling.errors import OAuthToolingError, UpstreamRejection
from oauth_tooling.models import GrantType, Realm, parse_grant_request

app = typer.Typer(help="OAuth2 token acquisition and validation.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """OAuth2 token acquisition and validation."""


def _fail(error: OAuthToolingError) -> NoReturn:
    typer.echo(f"Error: {error.message}", err=True)
    if isinstance(error, UpstreamRejection):
        typer.echo(json.dumps(error.data) if not isinstance(error.data, str) else error.data, err=True)
    raise typer.Exit(1) from error


def _print_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


@app.command("token")
def token(
    endpoint: Annotated[
        str,
        typer.Option(..., "--endpoint", "-e", envvar=ENV_ACCESS_TOKEN_ENDPOINT, help="Token endpoint URL."),
    ],
    credentials_dir: Annotated[
        Path,
        typer.Option(
            ...,
            "--credentials-dir",
            "-c",
            envvar=ENV_CREDENTIALS_DIR,
            help="Directory holding user.json and client.json.",
        ),
    ],
    realm: Annotated[Realm, typer.Option("--realm", "-r", help="Authorization realm.")] = Realm.SERVICES,
    scope: Annotated[
        Optional[list[str]],
        typer.Option("--scope", "-s", help="Scope to request (password grant, repeatable)."),
    ] = None,
    code: Annotated[
        Optional[str],
        typer.Option("--code", help="Authorization code; switches to the authorization_code grant."),
    ] = None,
    redirect_uri: Annotated[
        Optional[str],
        typer.Option("--redirect-uri", help="Redirect URI used when the code was requested."),
    ] = None,
) -> None:
    """Acquire an access token and print the token endpoint's JSON response."""
    options: dict[str, Any] = {
        "realm": realm,
        "access_token_endpoint": endpoint,
        "credentials_dir": credentials_dir,
    }
    if code is not None:
        if not redirect_uri:
            raise typer.BadParameter("--redirect-uri is required with --code")
        options.update(
            grant_type=GrantType.AUTHORIZATION_CODE, code=code, redirect_uri=redirect_uri
        )
    else:
        options.update(grant_type=GrantType.PASSWORD_CREDENTIALS, scopes=scope or [])
    try:
        grant = parse_grant_request(options)
        body = asyncio.run(get_access_token(grant))
    except OAuthToolingError as e:
        _fail(e)
    _print_json(body)


@app.command("tokeninfo")
def tokeninfo(
    access_token: Annotated[str, typer.Argument(help="Access token to validate.")],
    endpoint: Annotated[
        str,
        typer.Option(..., "--endpoint", "-e", envvar=ENV_TOKEN_INFO_ENDPOINT, help="Tokeninfo endpoint URL."),
    ],
) -> None:
    """Validate an access token and print the tokeninfo response."""
    try:
        info = asyncio.run(get_token_info(endpoint, access_token))
    except OAuthToolingError as e:
        _fail(e)
    _print_json(info)


@app.command("auth-code-uri")
def auth_code_uri(
    endpoint: Annotated[str, typer.Option(..., "--endpoint", "-e", help="Authorization endpoint URL.")],
    client_id: Annotated[str, typer.Option(..., "--client-id", help="OAuth2 client ID.")],
    redirect_uri: Annotated[str, typer.Option(..., "--redirect-uri", help="Redirect URI.")],
    realm: Annotated[Realm, typer.Option("--realm", "-r", help="Authorization realm.")] = Realm.EMPLOYEES,
) -> None:
    """Print the URI to request an authorization code."""
    typer.echo(create_auth_code_request_uri(endpoint, client_id, redirect_uri, realm))


if __name__ == "__main__":
    app()
