"""
Shared Dependencies for Routers

Lazy-loaded singletons for the upstream clients plus cookie helpers.
Tests swap the clients through ``app.dependency_overrides``.
"""
from typing import Optional
from urllib.parse import urlsplit

from fastapi import Request
from fastapi.responses import Response

from storefront.auth.cookies import CookieSpec
from storefront.auth.openid import OpenIdClient
from storefront.config import is_production
from storefront.shopify import CustomerAccountClient, StorefrontClient

# ==================== LAZY SINGLETONS ====================

_storefront_client: Optional[StorefrontClient] = None
_openid_client: Optional[OpenIdClient] = None
_customer_client: Optional[CustomerAccountClient] = None


def get_storefront_client() -> StorefrontClient:
    """Get or create StorefrontClient singleton (lazy loaded)"""
    global _storefront_client
    if _storefront_client is None:
        _storefront_client = StorefrontClient()
    return _storefront_client


def get_openid_client() -> OpenIdClient:
    """Get or create OpenIdClient singleton (lazy loaded)"""
    global _openid_client
    if _openid_client is None:
        _openid_client = OpenIdClient()
    return _openid_client


def get_customer_client() -> CustomerAccountClient:
    """Get or create CustomerAccountClient singleton (lazy loaded)"""
    global _customer_client
    if _customer_client is None:
        _customer_client = CustomerAccountClient(get_openid_client())
    return _customer_client


# ==================== COOKIES ====================

def set_cookie(response: Response, spec: CookieSpec, value: str) -> None:
    response.set_cookie(
        key=spec.name,
        value=value,
        max_age=spec.max_age,
        path="/",
        httponly=True,
        secure=is_production(),
        samesite="lax",
    )


def delete_cookie(response: Response, spec: CookieSpec) -> None:
    response.delete_cookie(key=spec.name, path="/")


# ==================== URLS ====================

def request_origin(request: Request, trust_forwarded: bool = False) -> str:
    """Scheme and host of the incoming request.

    With ``trust_forwarded`` the proxy headers win, so redirects point at the
    public host rather than the internal one.
    """
    if trust_forwarded:
        host = request.headers.get("x-forwarded-host") or request.headers.get("host")
        if host:
            proto = request.headers.get("x-forwarded-proto") or "https"
            return f"{proto}://{host}"
    return f"{request.url.scheme}://{request.url.netloc}"


def safe_return_path(value: str | None, default: str) -> str:
    """Accept only same-origin relative paths for post-login/logout redirects."""
    if not value or not value.startswith("/") or value.startswith("//") or "\\" in value:
        return default
    parts = urlsplit(value)
    if parts.scheme or parts.netloc:
        return default
    return value


# ==================== SHUTDOWN HELPERS ====================

async def shutdown_services():
    """Cleanly close singleton services (http clients)."""
    global _storefront_client, _openid_client, _customer_client
    for service in (_storefront_client, _customer_client, _openid_client):
        if service is not None:
            await service.aclose()
    _storefront_client = None
    _openid_client = None
    _customer_client = None
