"""Unit tests for tokeninfo validation."""

from __future__ import annotations

import httpx
import pytest

from oauth_tooling.auth.introspection import get_token_info
from oauth_tooling.errors import TransportFailure, UpstreamRejection

TOKENINFO_URL = "https://auth.example.com/oauth2/tokeninfo"


def _make_tokeninfo_transport(
    response_json: dict | None = None,
    status_code: int = 200,
    calls: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Build MockTransport that validates the tokeninfo request and returns given JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        assert request.method == "GET"
        assert request.url.path == "/oauth2/tokeninfo"
        return httpx.Response(status_code=status_code, json=response_json)

    return httpx.MockTransport(handler)


async def test_get_token_info_returns_body_for_valid_token() -> None:
    body = {"uid": "alice", "scope": ["uid", "orders.read"], "expires_in": 3599}
    calls: list[httpx.Request] = []

    result = await get_token_info(
        TOKENINFO_URL, "opaque-token-xyz", transport=_make_tokeninfo_transport(body, calls=calls)
    )

    assert result == body
    assert len(calls) == 1
    assert calls[0].url.params["access_token"] == "opaque-token-xyz"


async def test_get_token_info_rejects_invalid_token() -> None:
    transport = _make_tokeninfo_transport(
        {"error": "invalid_token", "error_description": "Access Token not valid"},
        status_code=401,
    )

    with pytest.raises(UpstreamRejection) as exc_info:
        await get_token_info(TOKENINFO_URL, "revoked-token", transport=transport)

    assert exc_info.value.status == 401
    assert exc_info.value.data["error"] == "invalid_token"


async def test_get_token_info_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(TransportFailure) as exc_info:
        await get_token_info(TOKENINFO_URL, "token", transport=httpx.MockTransport(handler))

    assert exc_info.value.msg == f"Error requesting tokeninfo from {TOKENINFO_URL}"
    assert exc_info.value.to_dict()["code"] == "oauth:transport/failed"


async def test_get_token_info_is_not_cached() -> None:
    calls: list[httpx.Request] = []
    transport = _make_tokeninfo_transport({"scope": []}, calls=calls)

    await get_token_info(TOKENINFO_URL, "same-token", transport=transport)
    await get_token_info(TOKENINFO_URL, "same-token", transport=transport)

    assert len(calls) == 2
