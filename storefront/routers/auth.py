"""
Auth Router

Customer login via the Customer Account API (OAuth 2.0 Authorization Code
with PKCE). No server-side session storage: the PKCE pair and the access
token live in signed cookies.

Flow:
1. /login stores {state, codeVerifier} in a 10-minute cookie and redirects
   to the identity provider with the S256 challenge.
2. /callback checks the state against the cookie, exchanges the code and
   stores the access token in a 14-day session cookie.
"""
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from storefront import errors
from storefront.auth import (
    AUTH_COOKIES,
    decode_pkce_cookie,
    decode_session_cookie,
    encode_pkce_cookie,
    encode_session_cookie,
    generate_code_challenge,
    generate_code_verifier,
    generate_state,
)
from storefront.auth.openid import CUSTOMER_ACCOUNT_SCOPE, OpenIdClient, get_customer_account_client_id
from storefront.errors import UpstreamError
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.shopify import CustomerAccountClient

from .deps import (
    delete_cookie,
    get_customer_client,
    get_openid_client,
    request_origin,
    safe_return_path,
    set_cookie,
)
from .models import SessionResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

DEFAULT_LOGIN_RETURN = "/account"
DEFAULT_LOGOUT_RETURN = "/"


def _callback_url(request: Request) -> str:
    return f"{request_origin(request)}/api/auth/callback"


def _error_redirect(request: Request, code: str, **extra: str) -> RedirectResponse:
    query = urlencode({"error": code, **extra})
    return RedirectResponse(f"{request_origin(request)}/?{query}")


@router.get("/login")
async def login(request: Request, openid: OpenIdClient = Depends(get_openid_client)):
    """Start the PKCE flow and redirect to the identity provider."""
    try:
        config = await openid.get_openid_config()
        client_id = get_customer_account_client_id()

        code_verifier = generate_code_verifier()
        state = generate_state()
        pkce_value = encode_pkce_cookie(state, code_verifier)

        params = {
            "client_id": client_id,
            "response_type": "code",
            "redirect_uri": _callback_url(request),
            "scope": CUSTOMER_ACCOUNT_SCOPE,
            "state": state,
            "code_challenge": generate_code_challenge(code_verifier),
            "code_challenge_method": "S256",
        }
        separator = "&" if "?" in config.authorization_endpoint else "?"
        response = RedirectResponse(f"{config.authorization_endpoint}{separator}{urlencode(params)}")
        set_cookie(response, AUTH_COOKIES["pkce"], pkce_value)
        return response
    except Exception as e:
        logger.error(f"Auth login error: {e}", exc_info=True)
        return _error_redirect(request, errors.AUTH_ERROR_CONFIG)


@router.get("/callback")
async def callback(request: Request, openid: OpenIdClient = Depends(get_openid_client)):
    """Finish the PKCE flow: verify state, exchange the code, set the session cookie."""
    params = request.query_params
    code = params.get("code")
    state = params.get("state")
    error_param = params.get("error")

    if error_param:
        logger.info(f"Auth denied by provider: {sanitize_string_for_logging(error_param)}")
        return _error_redirect(request, errors.AUTH_ERROR_DENIED, message=error_param)

    if not code or not state:
        return _error_redirect(request, errors.AUTH_ERROR_CALLBACK_MISSING)

    pkce_cookie = request.cookies.get(AUTH_COOKIES["pkce"].name)
    if not pkce_cookie:
        return _error_redirect(request, errors.AUTH_ERROR_SESSION_EXPIRED)

    try:
        pkce = decode_pkce_cookie(pkce_cookie)
        if pkce is None or pkce.state != state:
            return _error_redirect(request, errors.AUTH_ERROR_INVALID_STATE)

        config = await openid.get_openid_config()
        try:
            token = await openid.exchange_code(
                config.token_endpoint,
                code=code,
                code_verifier=pkce.code_verifier,
                redirect_uri=_callback_url(request),
            )
        except UpstreamError:
            return _error_redirect(request, errors.AUTH_ERROR_TOKEN_FAILED)

        if not token.access_token:
            return _error_redirect(request, errors.AUTH_ERROR_NO_TOKEN)

        session_value = encode_session_cookie(token.access_token)
        return_to = safe_return_path(params.get("returnTo"), DEFAULT_LOGIN_RETURN)

        response = RedirectResponse(f"{request_origin(request)}{return_to}")
        delete_cookie(response, AUTH_COOKIES["pkce"])
        set_cookie(response, AUTH_COOKIES["session"], session_value)
        return response
    except Exception as e:
        logger.error(f"Auth callback error: {e}", exc_info=True)
        return _error_redirect(request, errors.AUTH_ERROR_CALLBACK)


@router.get("/logout")
async def logout_redirect(request: Request):
    """Clear auth cookies and redirect back to the store."""
    return_to = safe_return_path(request.query_params.get("returnTo"), DEFAULT_LOGOUT_RETURN)
    origin = request_origin(request, trust_forwarded=True)

    response = RedirectResponse(f"{origin}{return_to}")
    delete_cookie(response, AUTH_COOKIES["session"])
    delete_cookie(response, AUTH_COOKIES["pkce"])
    return response


@router.post("/logout")
async def logout():
    """Clear auth cookies (XHR variant)."""
    response = JSONResponse({"ok": True})
    delete_cookie(response, AUTH_COOKIES["session"])
    delete_cookie(response, AUTH_COOKIES["pkce"])
    return response


@router.get("/session", response_model=SessionResponse)
async def session(
    request: Request,
    customer_client: CustomerAccountClient = Depends(get_customer_client),
):
    """Current customer, or null when logged out or the token no longer works."""
    session_cookie = request.cookies.get(AUTH_COOKIES["session"].name)
    if not session_cookie:
        return SessionResponse(customer=None)

    try:
        access_token = decode_session_cookie(session_cookie)
    except errors.ConfigurationError as e:
        logger.error(f"Session decode failed: {e}")
        return SessionResponse(customer=None)
    if not access_token:
        return SessionResponse(customer=None)

    customer = await customer_client.get_customer(access_token)
    return SessionResponse(customer=customer.model_dump() if customer else None)
