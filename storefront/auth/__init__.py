"""Authentication package: PKCE, signed cookies, identity provider discovery."""
from .cookies import (
    AUTH_COOKIES,
    CookieSpec,
    PkceState,
    decode_pkce_cookie,
    decode_session_cookie,
    encode_pkce_cookie,
    encode_session_cookie,
)
from .pkce import generate_code_challenge, generate_code_verifier, generate_state

__all__ = [
    "AUTH_COOKIES",
    "CookieSpec",
    "PkceState",
    "decode_pkce_cookie",
    "decode_session_cookie",
    "encode_pkce_cookie",
    "encode_session_cookie",
    "generate_code_challenge",
    "generate_code_verifier",
    "generate_state",
]
