"""Customer Account API access for logged-in customers."""
import httpx
from pydantic import BaseModel

from storefront.auth.openid import OpenIdClient
from storefront.http import HttpService
from storefront.logging import get_logger

from .mappers import dig, map_customer
from .queries import CUSTOMER_QUERY

logger = get_logger(__name__)


class SessionCustomer(BaseModel):
    id: str
    firstName: str | None = None
    lastName: str | None = None
    email: str | None = None


class CustomerAccountClient(HttpService):
    """Looks up the customer behind an access token.

    Every failure (discovery, transport, GraphQL errors, no customer)
    yields None: an unknown customer is rendered as logged out.
    """

    def __init__(self, openid: OpenIdClient, http_client: httpx.AsyncClient | None = None):
        super().__init__(http_client)
        self.openid = openid

    async def get_customer(self, access_token: str) -> SessionCustomer | None:
        try:
            endpoint = await self.openid.get_customer_account_api_endpoint()
            if not endpoint:
                logger.warning("No Customer Account API endpoint published")
                return None

            client = await self._get_http_client()
            response = await client.post(
                endpoint,
                json={"query": CUSTOMER_QUERY},
                headers={
                    "Content-Type": "application/json",
                    "Authorization": access_token,
                },
            )
            if not response.is_success:
                logger.warning(f"Customer query failed: {response.status_code}")
                return None

            body = response.json()
            if not isinstance(body, dict):
                logger.warning("Customer query returned unexpected payload")
                return None
            if body.get("errors"):
                logger.warning("Customer query returned errors")
                return None

            customer = map_customer(dig(body, "data", "customer"))
            if customer is None:
                return None
            return SessionCustomer(**customer)
        except Exception as e:
            # Unknown customer renders as logged out
            logger.warning(f"Customer lookup failed: {e}")
            return None
