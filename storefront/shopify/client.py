"""Storefront API GraphQL proxy."""
from typing import Any

import httpx

from storefront.config import get_storefront_access_token, get_storefront_api_url
from storefront.errors import UpstreamError
from storefront.http import HttpService
from storefront.logging import get_logger

logger = get_logger(__name__)

ACCESS_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"


class StorefrontClient(HttpService):
    """Forwards GraphQL documents to the Storefront API with the static access token.

    Returns the raw response body; callers pick the fields they need and
    treat missing data as empty. No retries.
    """

    async def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        client = await self._get_http_client()
        try:
            response = await client.post(
                get_storefront_api_url(),
                json={"query": query, "variables": variables or {}},
                headers={
                    "Content-Type": "application/json",
                    ACCESS_TOKEN_HEADER: get_storefront_access_token(),
                },
            )
        except httpx.HTTPError as e:
            raise UpstreamError(f"Storefront request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Storefront returned non-JSON response ({response.status_code})",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise UpstreamError("Storefront returned unexpected payload", status_code=response.status_code)

        if body.get("errors"):
            logger.warning(f"Storefront GraphQL errors: {body['errors']}")
        return body
