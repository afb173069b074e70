"""
Products Router

Quick-view data for the product preview modal.
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from storefront import errors
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.shopify import StorefrontClient
from storefront.shopify.mappers import dig, map_product_preview
from storefront.shopify.queries import SINGLE_PRODUCT_BY_HANDLE_QUERY, SINGLE_PRODUCT_QUERY

from .deps import get_storefront_client

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("/preview")
async def product_preview(
    handle: str | None = Query(None),
    product_id: str | None = Query(None, alias="id"),
    storefront: StorefrontClient = Depends(get_storefront_client),
):
    """Product title, image and variants by handle (or GID); null when not found."""
    if handle:
        query, variables = SINGLE_PRODUCT_BY_HANDLE_QUERY, {"handle": handle}
    elif product_id:
        query, variables = SINGLE_PRODUCT_QUERY, {"id": product_id}
    else:
        return JSONResponse({"error": errors.ERROR_HANDLE_REQUIRED}, status_code=400)

    try:
        body = await storefront.query(query, variables)
    except Exception as e:
        logger.error(f"Preview failed for {sanitize_string_for_logging(handle or product_id)}: {e}", exc_info=True)
        return JSONResponse(None, status_code=500)

    product = dig(body, "data", "product")
    if not isinstance(product, dict) or not product:
        return JSONResponse(None)
    return map_product_preview(product)
