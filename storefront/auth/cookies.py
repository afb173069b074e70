"""
Signed cookie codec.

Cookie values have the form ``<payload>.<signature>`` where ``payload`` is
base64url-encoded and ``signature`` is base64url(HMAC-SHA256(secret, payload)).
A value that does not verify is treated as absent: decoders return None and
never raise on bad input.
"""
import base64
import binascii
import hashlib
import hmac
import json
from dataclasses import dataclass

from storefront.config import get_session_secret

from .pkce import b64url

SEPARATOR = "."

PKCE_COOKIE = "shopify_pkce"
SESSION_COOKIE = "shopify_customer_session"
CART_ID_COOKIE = "shopify_cart_id"

PKCE_MAX_AGE = 60 * 10  # 10 minutes
SESSION_MAX_AGE = 60 * 60 * 24 * 14  # 14 days
CART_ID_MAX_AGE = 60 * 60 * 24 * 14  # 14 days


@dataclass(frozen=True)
class CookieSpec:
    name: str
    max_age: int


AUTH_COOKIES = {
    "pkce": CookieSpec(name=PKCE_COOKIE, max_age=PKCE_MAX_AGE),
    "session": CookieSpec(name=SESSION_COOKIE, max_age=SESSION_MAX_AGE),
}

CART_COOKIE = CookieSpec(name=CART_ID_COOKIE, max_age=CART_ID_MAX_AGE)


@dataclass(frozen=True)
class PkceState:
    """State and code verifier kept between /login and /callback."""

    state: str
    code_verifier: str


def sign(payload: str, secret: str | None = None) -> str:
    """HMAC-SHA256 of ``payload``, base64url encoded."""
    key = (secret or get_session_secret()).encode("utf-8")
    digest = hmac.new(key, payload.encode("utf-8"), hashlib.sha256).digest()
    return b64url(digest)


def _b64url_decode(encoded: str) -> bytes:
    padding = "=" * (-len(encoded) % 4)
    return base64.b64decode(encoded + padding, altchars=b"-_", validate=True)


def _encode(raw: str, secret: str | None = None) -> str:
    encoded = b64url(raw.encode("utf-8"))
    return f"{encoded}{SEPARATOR}{sign(encoded, secret)}"


def _verified_payload(value: str | None, secret: str | None = None) -> str | None:
    """Return the decoded payload text if the signature matches, else None."""
    if not value:
        return None
    parts = value.split(SEPARATOR)
    if len(parts) != 2:
        return None
    encoded, signature = parts
    if not encoded or not signature:
        return None
    if not hmac.compare_digest(signature, sign(encoded, secret)):
        return None
    try:
        return _b64url_decode(encoded).decode("utf-8")
    except (binascii.Error, ValueError):
        return None


def encode_pkce_cookie(state: str, code_verifier: str, secret: str | None = None) -> str:
    payload = json.dumps({"state": state, "codeVerifier": code_verifier}, separators=(",", ":"))
    return _encode(payload, secret)


def decode_pkce_cookie(value: str | None, secret: str | None = None) -> PkceState | None:
    payload = _verified_payload(value, secret)
    if payload is None:
        return None
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    state = data.get("state")
    code_verifier = data.get("codeVerifier")
    if not isinstance(state, str) or not isinstance(code_verifier, str):
        return None
    if not state or not code_verifier:
        return None
    return PkceState(state=state, code_verifier=code_verifier)


def encode_session_cookie(access_token: str, secret: str | None = None) -> str:
    return _encode(access_token, secret)


def decode_session_cookie(value: str | None, secret: str | None = None) -> str | None:
    payload = _verified_payload(value, secret)
    return payload or None
