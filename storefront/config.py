"""Environment configuration.

Settings are read from the environment on every call so that deployments
(and tests) can change them without reloading modules. Each setting accepts
the server-side name first and the legacy ``NEXT_PUBLIC_*`` name second.
"""
import os
import re

from storefront.errors import ConfigurationError

MIN_SECRET_LENGTH = 32


def _first_env(*names: str) -> str | None:
    """Return the first non-empty environment variable among ``names``."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def get_session_secret() -> str:
    """HMAC key for signed cookies (SESSION_SECRET or AUTH_SECRET)."""
    secret = _first_env("SESSION_SECRET", "AUTH_SECRET")
    if not secret or len(secret) < MIN_SECRET_LENGTH:
        raise ConfigurationError(
            f"SESSION_SECRET or AUTH_SECRET must be set and at least {MIN_SECRET_LENGTH} characters"
        )
    return secret


def get_store_domain() -> str:
    """Shop domain (e.g. ``store.myshopify.com``) without scheme."""
    domain = _first_env("SHOPIFY_STORE_DOMAIN", "NEXT_PUBLIC_SHOPIFY_STORE_DOMAIN")
    if not domain:
        raise ConfigurationError(
            "SHOPIFY_STORE_DOMAIN or NEXT_PUBLIC_SHOPIFY_STORE_DOMAIN must be set"
        )
    return re.sub(r"^https?://", "", domain)


def get_customer_account_client_id() -> str:
    """OAuth client id of the Customer Account API (headless channel)."""
    client_id = _first_env(
        "SHOPIFY_CUSTOMER_ACCOUNT_CLIENT_ID",
        "NEXT_PUBLIC_SHOPIFY_CUSTOMER_ACCOUNT_CLIENT_ID",
    )
    if not client_id:
        raise ConfigurationError(
            "SHOPIFY_CUSTOMER_ACCOUNT_CLIENT_ID must be set (from Customer Account API config)"
        )
    return client_id


def get_storefront_api_url() -> str:
    url = _first_env("SHOPIFY_STOREFRONT_API_URL", "NEXT_PUBLIC_API_URL")
    if not url:
        raise ConfigurationError("SHOPIFY_STOREFRONT_API_URL must be set")
    return url


def get_storefront_access_token() -> str:
    return _first_env("SHOPIFY_STOREFRONT_ACCESS_TOKEN", "NEXT_PUBLIC_ACCESS_TOKEN") or ""


def is_production() -> bool:
    """Whether cookies should carry the Secure flag."""
    env = _first_env("ENVIRONMENT", "VERCEL_ENV") or ""
    return env.lower() == "production"


def get_cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_auth_rate_limit() -> int:
    """Requests per minute allowed on /api/auth routes per client."""
    try:
        return int(os.environ.get("AUTH_RATE_LIMIT_PER_MINUTE", "30"))
    except ValueError:
        return 30
