"""Tests for grant type and realm enumerations."""

import pytest

from oauth_tooling.models.enums import GrantType, Realm


class TestGrantType:
    """Tests for GrantType enum."""

    def test_wire_values(self) -> None:
        assert GrantType.PASSWORD_CREDENTIALS.value == "password"
        assert GrantType.AUTHORIZATION_CODE.value == "authorization_code"

    def test_is_closed(self) -> None:
        assert len(GrantType) == 2
        with pytest.raises(ValueError):
            GrantType("client_credentials")


class TestRealm:
    """Tests for Realm enum."""

    def test_wire_values(self) -> None:
        assert Realm.EMPLOYEES.value == "/employees"
        assert Realm.SERVICES.value == "/services"

    def test_lookup_by_value(self) -> None:
        assert Realm("/services") is Realm.SERVICES
