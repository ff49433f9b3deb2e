"""Credential loading from a credentials directory.

Reads ``user.json`` and ``client.json`` on every call; nothing is cached.
Both files are read concurrently in worker threads so the event loop is
never blocked on disk I/O.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from oauth_tooling.errors import CredentialLoadError
from oauth_tooling.models.base import OAuthBaseModel
from oauth_tooling.models.credentials import (
    CLIENT_JSON,
    USER_JSON,
    ClientCredentials,
    UserCredentials,
)

ModelT = TypeVar("ModelT", bound=OAuthBaseModel)


def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise CredentialLoadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise CredentialLoadError(path, f"not valid UTF-8: {e.reason}") from e


async def read_credential_file(credentials_dir: str | Path, file_name: str, model: type[ModelT]) -> ModelT:
    """Read and validate one credential document.

    Args:
        credentials_dir: Directory holding the credential files.
        file_name: File name inside the directory (e.g. ``client.json``).
        model: Model the JSON document is validated against.

    Returns:
        The validated credential model.

    Raises:
        CredentialLoadError: File missing, unreadable, not JSON, or missing keys.
    """
    path = Path(credentials_dir) / file_name
    raw = await asyncio.to_thread(_read_file, path)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CredentialLoadError(path, f"invalid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise CredentialLoadError(path, "expected a JSON object")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        missing = sorted(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise CredentialLoadError(path, f"missing or invalid keys: {', '.join(missing)}") from e


async def load_credentials(credentials_dir: str | Path) -> tuple[UserCredentials, ClientCredentials]:
    """Load user and client credentials concurrently.

    Raises:
        CredentialLoadError: Either document could not be loaded.
    """
    user, client = await asyncio.gather(
        read_credential_file(credentials_dir, USER_JSON, UserCredentials),
        read_credential_file(credentials_dir, CLIENT_JSON, ClientCredentials),
    )
    return user, client
