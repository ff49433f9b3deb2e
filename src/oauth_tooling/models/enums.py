"""Enumerations for OAuth tooling.

Grant types and realms are closed sets; modelling them as enums keeps
magic strings out of call sites.
"""

from enum import Enum


class GrantType(str, Enum):
    """OAuth2 grant types supported by the token acquirer.

    Example:
        >>> GrantType.PASSWORD_CREDENTIALS.value
        'password'
    """

    PASSWORD_CREDENTIALS = "password"
    AUTHORIZATION_CODE = "authorization_code"


class Realm(str, Enum):
    """Authorization realms passed to the token and auth-code endpoints.

    Example:
        >>> Realm.SERVICES.value
        '/services'
    """

    EMPLOYEES = "/employees"
    SERVICES = "/services"
