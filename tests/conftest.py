"""Shared pytest fixtures for OAuth tooling tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

DATA_DIR = Path(__file__).parent / "data"
CREDENTIALS_DIR = DATA_DIR / "credentials"

# base64("<client_id>:<client_secret>") of tests/data/credentials/client.json
VALID_BASIC_AUTH_HEADER = (
    "Basic c3R1cHNfY2FtcC1mcm9udGVuZF80NTgxOGFkZC1jNDdkLTQ3MzEtYTQwZC1jZWExZmZkMGUwYzk6"
    "Nmk1Z2hCI1MyaUJLKSVidGI3JU14Z3hRWDcxUXIuKSo="
)


@pytest.fixture
def credentials_dir() -> Path:
    """Directory with the checked-in user.json and client.json."""
    return CREDENTIALS_DIR


@pytest.fixture
def write_credentials(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing user.json/client.json into a temp dir.

    Pass a dict to write it as JSON, a str to write it verbatim, or None
    to skip the file.
    """

    def _write(
        user: dict[str, str] | str | None = None,
        client: dict[str, str] | str | None = None,
    ) -> Path:
        for name, content in (("user.json", user), ("client.json", client)):
            if content is None:
                continue
            text = content if isinstance(content, str) else json.dumps(content)
            (tmp_path / name).write_text(text, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def valid_basic_auth_header() -> str:
    """Basic auth header matching tests/data/credentials/client.json."""
    return VALID_BASIC_AUTH_HEADER
