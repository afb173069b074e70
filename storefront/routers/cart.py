"""
Cart Router

Thin proxy over Storefront API cart mutations. The cart itself (lines,
prices, availability) lives on the commerce platform; only its id is kept
in a cookie.

Response format:
- GET returns {count, checkoutUrl, lines}; failures look like an empty cart
- mutations return 400 for bad input, 422 for commerce user errors and 500
  for unparseable bodies or upstream failures, always as {"error": message}
"""
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from storefront import errors
from storefront.auth.cookies import CART_COOKIE
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.shopify import StorefrontClient
from storefront.shopify.mappers import cart_line_count, dig, map_cart_lines, user_errors
from storefront.shopify.mutations import (
    CART_CREATE_MUTATION,
    CART_LINES_ADD_MUTATION,
    CART_LINES_REMOVE_MUTATION,
    CART_LINES_UPDATE_MUTATION,
)
from storefront.shopify.queries import CART_QUERY

from .deps import get_storefront_client, set_cookie
from .models import AddToCartRequest, RemoveCartLinesRequest, UpdateCartLineRequest, clamp_quantity

logger = get_logger(__name__)

router = APIRouter(prefix="/api/cart", tags=["cart"])

MAX_LINE_QUANTITY = 99
EMPTY_CART: dict[str, Any] = {"count": 0, "checkoutUrl": None, "lines": []}


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _read_json(request: Request) -> dict[str, Any] | None:
    """Request body as a dict; non-object JSON reads as {}, unparseable JSON as None."""
    try:
        body = await request.json()
    except ValueError as e:
        logger.warning(f"Unparseable cart request body: {e}")
        return None
    return body if isinstance(body, dict) else {}


def _user_error_response(body: dict[str, Any], mutation: str, fallback: str) -> JSONResponse | None:
    problems = user_errors(body, mutation)
    if not problems:
        return None
    message = problems[0].get("message") or fallback
    logger.info(f"Cart {mutation} rejected: {message}")
    return _error(message, 422)


@router.get("")
async def get_cart(request: Request, storefront: StorefrontClient = Depends(get_storefront_client)):
    """Line count, checkout URL and lines of the current cart."""
    cart_id = request.cookies.get(CART_COOKIE.name)
    if not cart_id:
        return dict(EMPTY_CART)

    try:
        body = await storefront.query(CART_QUERY, {"id": cart_id})
        cart = dig(body, "data", "cart")
        if not isinstance(cart, dict):
            return dict(EMPTY_CART)
        return {
            "count": cart_line_count(cart),
            "checkoutUrl": cart.get("checkoutUrl"),
            "lines": map_cart_lines(cart),
        }
    except Exception as e:
        logger.warning(f"Failed to load cart {sanitize_id_for_logging(cart_id)}: {e}")
        return dict(EMPTY_CART)


@router.post("/add")
async def add_to_cart(
    request: Request,
    storefront: StorefrontClient = Depends(get_storefront_client),
):
    """Add a variant to the cart, creating the cart on first use."""
    data = await _read_json(request)
    if data is None:
        return _error(errors.ERROR_SOMETHING_WENT_WRONG, 500)
    payload = AddToCartRequest.model_validate(data)

    variant_id = payload.merchandise_id or payload.variant_id
    if not variant_id or not isinstance(variant_id, str):
        return _error(errors.ERROR_MERCHANDISE_REQUIRED, 400)
    quantity = clamp_quantity(payload.quantity, 1, MAX_LINE_QUANTITY, default=1)
    lines = [{"merchandiseId": variant_id, "quantity": quantity}]

    cart_id = request.cookies.get(CART_COOKIE.name)
    try:
        if cart_id:
            body = await storefront.query(CART_LINES_ADD_MUTATION, {"cartId": cart_id, "lines": lines})
            rejected = _user_error_response(body, "cartLinesAdd", errors.ERROR_ADD_TO_CART)
            if rejected:
                return rejected
            cart = dig(body, "data", "cartLinesAdd", "cart") or {}
            return {
                "cartId": cart.get("id") or cart_id,
                "checkoutUrl": cart.get("checkoutUrl"),
            }

        body = await storefront.query(CART_CREATE_MUTATION, {"lines": lines})
        rejected = _user_error_response(body, "cartCreate", errors.ERROR_CREATE_CART)
        if rejected:
            return rejected
        cart = dig(body, "data", "cartCreate", "cart") or {}
        new_cart_id = cart.get("id")
        if not new_cart_id:
            return _error(errors.ERROR_CREATE_CART, 500)

        logger.info(f"Created cart {sanitize_id_for_logging(new_cart_id)}")
        response = JSONResponse({"cartId": new_cart_id, "checkoutUrl": cart.get("checkoutUrl")})
        set_cookie(response, CART_COOKIE, new_cart_id)
        return response
    except Exception as e:
        logger.error(f"Cart add error: {e}", exc_info=True)
        return _error(errors.ERROR_SOMETHING_WENT_WRONG, 500)


@router.post("/update")
async def update_cart_line(
    request: Request,
    storefront: StorefrontClient = Depends(get_storefront_client),
):
    """Set a line's quantity (0 removes it on the platform side)."""
    data = await _read_json(request)
    if data is None:
        return _error(errors.ERROR_SOMETHING_WENT_WRONG, 500)
    payload = UpdateCartLineRequest.model_validate(data)

    line_id = payload.line_id
    if not line_id or not isinstance(line_id, str):
        return _error(errors.ERROR_LINE_ID_REQUIRED, 400)
    quantity = clamp_quantity(payload.quantity, 0, MAX_LINE_QUANTITY, default=0)

    cart_id = request.cookies.get(CART_COOKIE.name)
    if not cart_id:
        return _error(errors.ERROR_NO_CART, 400)

    try:
        body = await storefront.query(
            CART_LINES_UPDATE_MUTATION,
            {"cartId": cart_id, "lines": [{"id": line_id, "quantity": quantity}]},
        )
        rejected = _user_error_response(body, "cartLinesUpdate", errors.ERROR_UPDATE_LINE)
        if rejected:
            return rejected
        return {"ok": True}
    except Exception as e:
        logger.error(f"Cart update error: {e}", exc_info=True)
        return _error(errors.ERROR_SOMETHING_WENT_WRONG, 500)


@router.post("/remove")
async def remove_cart_lines(
    request: Request,
    storefront: StorefrontClient = Depends(get_storefront_client),
):
    """Remove one line (lineId) or several (lineIds)."""
    data = await _read_json(request)
    if data is None:
        return _error(errors.ERROR_SOMETHING_WENT_WRONG, 500)
    payload = RemoveCartLinesRequest.model_validate(data)

    if isinstance(payload.line_ids, list):
        line_ids = [line_id for line_id in payload.line_ids if isinstance(line_id, str)]
    elif isinstance(payload.line_id, str):
        line_ids = [payload.line_id]
    else:
        line_ids = []

    if not line_ids:
        return _error(errors.ERROR_LINE_IDS_REQUIRED, 400)

    cart_id = request.cookies.get(CART_COOKIE.name)
    if not cart_id:
        return _error(errors.ERROR_NO_CART, 400)

    try:
        body = await storefront.query(CART_LINES_REMOVE_MUTATION, {"cartId": cart_id, "lineIds": line_ids})
        rejected = _user_error_response(body, "cartLinesRemove", errors.ERROR_REMOVE_LINE)
        if rejected:
            return rejected
        return {"ok": True}
    except Exception as e:
        logger.error(f"Cart remove error: {e}", exc_info=True)
        return _error(errors.ERROR_SOMETHING_WENT_WRONG, 500)
