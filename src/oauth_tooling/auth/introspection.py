"""Access token validation against a tokeninfo endpoint.

The token is passed as ``?access_token=`` on a GET request; the endpoint
answers with a JSON document describing the token, including its scopes.
Results are never cached: each call is one round trip.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from oauth_tooling.auth.utils import parse_endpoint_response
from oauth_tooling.errors import TransportFailure, UpstreamRejection
from oauth_tooling.observability import get_logger

logger = get_logger(__name__)


async def get_token_info(
    token_info_url: str,
    access_token: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[str, Any]:
    """Validate ``access_token`` and return its token information.

    Args:
        token_info_url: URL of the tokeninfo endpoint.
        access_token: The bearer token to validate.
        transport: Optional httpx transport for testing (e.g. MockTransport).

    Returns:
        The parsed JSON body of the 200 response (contains ``scope``).

    Raises:
        UpstreamRejection: The endpoint returned a status other than 200,
            e.g. 401 for an unknown or expired token.
        TransportFailure: The endpoint could not be reached, or the body was not JSON.
    """
    error_message = f"Error requesting tokeninfo from {token_info_url}"

    async with httpx.AsyncClient(transport=transport) as client:
        try:
            response = await client.get(token_info_url, params={"access_token": access_token})
        except httpx.HTTPError as e:
            logger.error(
                "oauth.tokeninfo.transport_failed",
                tokeninfo_endpoint=token_info_url,
                error=str(e),
            )
            raise TransportFailure(error_message, e) from e

    try:
        return parse_endpoint_response(response, error_message)
    except UpstreamRejection as e:
        logger.info(
            "oauth.tokeninfo.rejected",
            tokeninfo_endpoint=token_info_url,
            status=e.status,
        )
        raise
