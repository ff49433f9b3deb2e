"""Tests for auth utils (headers, bearer extraction, public paths, scopes)."""

from __future__ import annotations

import httpx
import pytest

from oauth_tooling.auth.utils import (
    build_basic_auth_header,
    compile_public_endpoints,
    extract_access_token,
    match_public_endpoint,
    missing_scopes,
    parse_endpoint_response,
    parse_scope,
)
from oauth_tooling.errors import ConfigurationError, TransportFailure, UpstreamRejection


def test_build_basic_auth_header_encodes_id_and_secret() -> None:
    assert build_basic_auth_header("client", "secret") == "Basic Y2xpZW50OnNlY3JldA=="


def test_build_basic_auth_header_keeps_special_characters(valid_basic_auth_header: str) -> None:
    header = build_basic_auth_header(
        "stups_camp-frontend_45818add-c47d-4731-a40d-cea1ffd0e0c9",
        "6i5ghB#S2iBK)%btb7%MxgxQX71Qr.)*",
    )
    assert header == valid_basic_auth_header


def test_extract_access_token_returns_token() -> None:
    assert extract_access_token("Bearer abc123") == "abc123"
    assert extract_access_token("bearer abc123") == "abc123"


@pytest.mark.parametrize(
    "header",
    [None, "", "Bearer", "Bearer ", "Basic abc123", "Bearer abc 123", "abc123"],
)
def test_extract_access_token_rejects_missing_or_malformed(header: str | None) -> None:
    assert extract_access_token(header) is None


def test_match_public_endpoint_prefix_and_anchor() -> None:
    patterns = ["/health", "/docs$"]
    assert match_public_endpoint("/health", patterns) is True
    assert match_public_endpoint("/health/live", patterns) is True
    assert match_public_endpoint("/docs", patterns) is True
    assert match_public_endpoint("/docs/oauth2-redirect", patterns) is False
    assert match_public_endpoint("/api/health", patterns) is False


def test_match_public_endpoint_without_patterns() -> None:
    assert match_public_endpoint("/health", None) is False
    assert match_public_endpoint("/health", []) is False


def test_compile_public_endpoints_matches_like_raw_patterns() -> None:
    compiled = compile_public_endpoints(["/health", "/docs$"])
    assert match_public_endpoint("/health/live", compiled) is True
    assert match_public_endpoint("/docs/oauth2-redirect", compiled) is False
    assert compile_public_endpoints(None) == []


def test_compile_public_endpoints_rejects_invalid_regex() -> None:
    with pytest.raises(ConfigurationError, match="invalid public endpoint pattern") as exc_info:
        compile_public_endpoints(["/health", "/orders/(?P<id"])

    assert exc_info.value.code == "oauth:config/invalid"
    assert exc_info.value.details == {"pattern": "/orders/(?P<id"}


def test_parse_scope_none_returns_empty() -> None:
    assert parse_scope(None) == []


def test_parse_scope_list_returns_strings() -> None:
    assert parse_scope(["a", "b", "c"]) == ["a", "b", "c"]
    assert parse_scope([1, 2]) == ["1", "2"]


def test_parse_scope_str_splits_and_strips() -> None:
    assert parse_scope("uid orders.read") == ["uid", "orders.read"]
    assert parse_scope("  a   b  ") == ["a", "b"]


def test_parse_scope_invalid_type_returns_empty() -> None:
    assert parse_scope(123) == []
    assert parse_scope({}) == []


def test_missing_scopes_is_set_difference() -> None:
    assert missing_scopes(["A", "B"], ["A", "B", "C"]) == set()
    assert missing_scopes(["A", "B"], ["A"]) == {"B"}
    assert missing_scopes([], []) == set()


def test_parse_endpoint_response_returns_json_on_200() -> None:
    response = httpx.Response(200, json={"access_token": "abc"})
    assert parse_endpoint_response(response, "boom") == {"access_token": "abc"}


def test_parse_endpoint_response_raises_rejection_with_json_body() -> None:
    response = httpx.Response(400, json={"error": "invalid_grant"})
    with pytest.raises(UpstreamRejection) as exc_info:
        parse_endpoint_response(response, "boom")
    assert exc_info.value.status == 400
    assert exc_info.value.data == {"error": "invalid_grant"}


def test_parse_endpoint_response_raises_rejection_with_text_body() -> None:
    response = httpx.Response(401, text="Unauthorized")
    with pytest.raises(UpstreamRejection) as exc_info:
        parse_endpoint_response(response, "boom")
    assert exc_info.value.status == 401
    assert exc_info.value.data == "Unauthorized"


def test_parse_endpoint_response_non_json_success_is_transport_failure() -> None:
    response = httpx.Response(200, text="<html>")
    with pytest.raises(TransportFailure) as exc_info:
        parse_endpoint_response(response, "Error requesting tokeninfo from x")
    assert exc_info.value.msg == "Error requesting tokeninfo from x"
