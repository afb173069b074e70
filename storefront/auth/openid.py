"""
OpenID discovery and the OAuth2 token exchange.

The shop publishes two discovery documents:
- /.well-known/openid-configuration: authorization and token endpoints
- /.well-known/customer-account-api: the Customer Account GraphQL endpoint
"""
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from storefront.config import get_customer_account_client_id, get_store_domain
from storefront.errors import UpstreamError
from storefront.http import HttpService
from storefront.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)

CUSTOMER_ACCOUNT_SCOPE = "openid email profile https://api.shopify.com/auth/customer-account-api:full"

__all__ = [
    "CUSTOMER_ACCOUNT_SCOPE",
    "OpenIdClient",
    "OpenIdConfig",
    "TokenResponse",
    "get_customer_account_client_id",
    "get_store_domain",
]


class OpenIdConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    authorization_endpoint: str
    token_endpoint: str


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: str | None = None
    expires_in: float | None = None


class OpenIdClient(HttpService):
    """Client for the shop's identity provider."""

    async def get_openid_config(self) -> OpenIdConfig:
        url = f"https://{get_store_domain()}/.well-known/openid-configuration"
        client = await self._get_http_client()
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise UpstreamError(f"OpenID config request failed: {e}") from e
        if not response.is_success:
            raise UpstreamError(
                f"OpenID config failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return OpenIdConfig.model_validate(response.json())

    async def exchange_code(
        self,
        token_endpoint: str,
        *,
        code: str,
        code_verifier: str,
        redirect_uri: str,
        client_id: str | None = None,
    ) -> TokenResponse:
        """Exchange an authorization code for an access token."""
        form = {
            "grant_type": "authorization_code",
            "client_id": client_id or get_customer_account_client_id(),
            "redirect_uri": redirect_uri,
            "code": code,
            "code_verifier": code_verifier,
        }
        client = await self._get_http_client()
        # Transport errors propagate: only a rejected exchange is an UpstreamError
        response = await client.post(token_endpoint, data=form)
        if not response.is_success:
            logger.error(
                f"Token exchange failed: {response.status_code} "
                f"{sanitize_string_for_logging(response.text, max_length=200)}"
            )
            raise UpstreamError("Token exchange failed", status_code=response.status_code)
        return TokenResponse.model_validate(response.json())

    async def get_customer_account_api_endpoint(self) -> str | None:
        """GraphQL endpoint of the Customer Account API, None if not published."""
        url = f"https://{get_store_domain()}/.well-known/customer-account-api"
        client = await self._get_http_client()
        response = await client.get(url)
        if not response.is_success:
            logger.warning(f"customer-account-api discovery failed: {response.status_code}")
            return None
        config: Any = response.json()
        if not isinstance(config, dict):
            logger.warning("customer-account-api discovery returned unexpected payload")
            return None
        endpoint = config.get("graphql_api") or config.get("api_endpoint")
        return endpoint if isinstance(endpoint, str) else None
