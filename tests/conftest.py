"""Pytest configuration and fixtures"""
import json
import os
import re
from collections.abc import Callable

import httpx
import pytest

# Set test environment variables before the app is imported
os.environ.setdefault("SESSION_SECRET", "test-session-secret-0123456789abcdef")
os.environ.setdefault("SHOPIFY_STORE_DOMAIN", "test-shop.myshopify.com")
os.environ.setdefault("SHOPIFY_CUSTOMER_ACCOUNT_CLIENT_ID", "test-client-id")
os.environ.setdefault("SHOPIFY_STOREFRONT_API_URL", "https://test-shop.myshopify.com/api/2026-01/graphql.json")
os.environ.setdefault("SHOPIFY_STOREFRONT_ACCESS_TOKEN", "test-storefront-token")
os.environ.setdefault("AUTH_RATE_LIMIT_PER_MINUTE", "10000")

from fastapi.testclient import TestClient  # noqa: E402

from api.index import app  # noqa: E402
from storefront.auth.openid import OpenIdClient  # noqa: E402
from storefront.routers.deps import (  # noqa: E402
    get_customer_client,
    get_openid_client,
    get_storefront_client,
)
from storefront.shopify import CustomerAccountClient, StorefrontClient  # noqa: E402

STORE = "https://test-shop.myshopify.com"
AUTHORIZATION_ENDPOINT = "https://shopify.com/authentication/1/oauth/authorize"
TOKEN_ENDPOINT = "https://shopify.com/authentication/1/oauth/token"
CUSTOMER_API_ENDPOINT = "https://shopify.com/1/account/customer/api/2026-01/graphql"

Handler = Callable[[httpx.Request], httpx.Response]


def mock_http(handler: Handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def graphql_body(request: httpx.Request) -> dict:
    return json.loads(request.content)


def operation_name(query: str) -> str | None:
    match = re.match(r"\s*(?:query|mutation)\s+(\w+)", query)
    return match.group(1) if match else None


class GraphQLStub:
    """Storefront API stand-in: maps operation name -> response payload.

    Records every request body so tests can assert on variables.
    """

    def __init__(self, responses: dict[str, dict] | None = None, status_code: int = 200):
        self.responses = responses or {}
        self.status_code = status_code
        self.calls: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = graphql_body(request)
        self.calls.append(body)
        payload = self.responses.get(operation_name(body["query"]))
        if payload is not None:
            return httpx.Response(self.status_code, json=payload)
        return httpx.Response(self.status_code, json={"data": {}})

    def operations(self) -> list[str]:
        return [operation_name(call["query"]) for call in self.calls]


def openid_handler(
    token_response: httpx.Response | None = None,
    customer_response: httpx.Response | None = None,
    discovery_status: int = 200,
) -> Handler:
    """Identity provider stand-in for discovery, token and customer calls."""

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url == f"{STORE}/.well-known/openid-configuration":
            if discovery_status != 200:
                return httpx.Response(discovery_status)
            return httpx.Response(
                200,
                json={
                    "issuer": "https://shopify.com/authentication/1",
                    "authorization_endpoint": AUTHORIZATION_ENDPOINT,
                    "token_endpoint": TOKEN_ENDPOINT,
                },
            )
        if url == f"{STORE}/.well-known/customer-account-api":
            return httpx.Response(200, json={"graphql_api": CUSTOMER_API_ENDPOINT})
        if url == TOKEN_ENDPOINT:
            return token_response or httpx.Response(200, json={"access_token": "shcat_test", "expires_in": 3600})
        if url == CUSTOMER_API_ENDPOINT:
            return customer_response or httpx.Response(200, json={"data": {"customer": None}})
        return httpx.Response(404)

    return handler


@pytest.fixture
def client():
    """Test client; dependency overrides are cleared afterwards."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_storefront():
    """Route Storefront API calls through a stub handler."""

    def _install(handler: Handler) -> StorefrontClient:
        storefront = StorefrontClient(http_client=mock_http(handler))
        app.dependency_overrides[get_storefront_client] = lambda: storefront
        return storefront

    return _install


@pytest.fixture
def use_identity():
    """Route identity provider and Customer Account API calls through a handler."""

    def _install(handler: Handler) -> OpenIdClient:
        openid = OpenIdClient(http_client=mock_http(handler))
        customer = CustomerAccountClient(openid, http_client=mock_http(handler))
        app.dependency_overrides[get_openid_client] = lambda: openid
        app.dependency_overrides[get_customer_client] = lambda: customer
        return openid

    return _install
