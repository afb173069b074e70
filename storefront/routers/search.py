"""
Search Router

Search overlay endpoint: product hits from the Storefront API plus static
navigation pages whose label matches the query.
"""
from fastapi import APIRouter, Depends, Query

from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.shopify import StorefrontClient
from storefront.shopify.mappers import dig, map_search_products
from storefront.shopify.queries import PRODUCT_SEARCH_QUERY

from .deps import get_storefront_client

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["search"])

MIN_QUERY_LENGTH = 2
OVERLAY_RESULT_LIMIT = 12

SEARCH_PAGES: list[dict[str, str]] = [
    {"label": "All", "href": "/"},
    {"label": "Women", "href": "/women"},
    {"label": "Men", "href": "/men"},
    {"label": "Kids", "href": "/kids"},
    {"label": "Brands", "href": "/brands"},
    {"label": "Collections", "href": "/collections"},
    {"label": "Sale", "href": "/sale"},
    {"label": "Wishlist", "href": "/wishlist"},
    {"label": "Return Form", "href": "/returns"},
]


def matching_pages(query: str) -> list[dict[str, str]]:
    return [page for page in SEARCH_PAGES if query in page["label"].lower()]


@router.get("/search")
async def search(
    q: str = Query("", description="Search text"),
    storefront: StorefrontClient = Depends(get_storefront_client),
):
    query = q.strip().lower()
    if len(query) < MIN_QUERY_LENGTH:
        return {"products": [], "productCount": 0, "pages": []}

    products = []
    try:
        body = await storefront.query(PRODUCT_SEARCH_QUERY, {"query": query, "first": OVERLAY_RESULT_LIMIT})
        products = map_search_products(dig(body, "data", "products"), with_price=True)
    except Exception as e:
        # Bad search syntax surfaces here too
        logger.warning(f"Search failed for {sanitize_string_for_logging(query)!r}: {e}")

    return {
        "products": products,
        "productCount": len(products),
        "pages": matching_pages(query),
    }
