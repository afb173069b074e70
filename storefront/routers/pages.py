"""
Pages Router

Data for the server-rendered pages (home, collections, new arrivals,
search results, product detail). Each endpoint returns the JSON a page
template needs; upstream failures render as empty listings.
"""
import asyncio
from typing import Any, Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront import errors
from storefront.errors import StorefrontError
from storefront.logging import get_logger
from storefront.shopify import StorefrontClient
from storefront.shopify.mappers import (
    collection_tags,
    dig,
    filter_and_sort,
    map_collection_products,
    map_discover_categories,
    map_product_detail,
    map_products,
    map_search_products,
    related_products,
)
from storefront.shopify.queries import (
    ALL_PRODUCTS_QUERY,
    COLLECTION_QUERY,
    DISCOVER_COLLECTION_QUERY,
    PRODUCT_SEARCH_QUERY,
    PRODUCTS_QUERY,
    SINGLE_PRODUCT_BY_HANDLE_QUERY,
)

from .deps import get_storefront_client

logger = get_logger(__name__)

router = APIRouter(prefix="/api/pages", tags=["pages"])

DISCOVER_HANDLE = "discover"
COLLECTION_PAGE_SIZE = 50
NEW_ARRIVALS_PAGE_SIZE = 100
SEARCH_PAGE_SIZE = 50
RELATED_POOL_SIZE = 12

SortOption = Literal["title-asc", "title-desc"]


async def _fetch(storefront: StorefrontClient, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
    """Run a query, treating upstream failure as an empty response."""
    try:
        return await storefront.query(query, variables)
    except StorefrontError as e:
        logger.warning(f"Page query failed: {e}")
        return {}


def _listing(title: str, handle: str, products: list[dict[str, Any]], tag: str | None, sort: str) -> dict[str, Any]:
    return {
        "title": title,
        "handle": handle,
        "tags": collection_tags(products),
        "selectedTag": tag,
        "sort": sort,
        "products": filter_and_sort(products, tag=tag, sort=sort),
    }


@router.get("/home")
async def home(storefront: StorefrontClient = Depends(get_storefront_client)):
    products_body, discover_body = await asyncio.gather(
        _fetch(storefront, PRODUCTS_QUERY),
        _fetch(storefront, DISCOVER_COLLECTION_QUERY, {"handle": DISCOVER_HANDLE}),
    )
    return {
        "products": map_products(dig(products_body, "data", "products")),
        "discover": map_discover_categories(dig(discover_body, "data", "collection", "products")),
    }


@router.get("/collections/{handle}")
async def collection(
    handle: str,
    tag: str | None = Query(None),
    sort: SortOption = Query("title-asc"),
    storefront: StorefrontClient = Depends(get_storefront_client),
):
    body = await _fetch(storefront, COLLECTION_QUERY, {"handle": handle, "first": COLLECTION_PAGE_SIZE})
    data = dig(body, "data", "collection")
    if not isinstance(data, dict):
        data = {}
    products = map_collection_products(data.get("products"))
    return _listing(data.get("title") or handle.upper(), handle, products, tag, sort)


@router.get("/new-arrivals")
async def new_arrivals(
    tag: str | None = Query(None),
    sort: SortOption = Query("title-asc"),
    storefront: StorefrontClient = Depends(get_storefront_client),
):
    body = await _fetch(storefront, ALL_PRODUCTS_QUERY, {"first": NEW_ARRIVALS_PAGE_SIZE})
    products = map_collection_products(dig(body, "data", "products"))
    return _listing("NEW ARRIVALS", "new-arrivals", products, tag, sort)


@router.get("/search")
async def search_results(
    q: str = Query(""),
    storefront: StorefrontClient = Depends(get_storefront_client),
):
    query = q.strip()
    products: list[dict[str, Any]] = []
    if len(query) >= 2:
        body = await _fetch(storefront, PRODUCT_SEARCH_QUERY, {"query": query, "first": SEARCH_PAGE_SIZE})
        products = map_search_products(dig(body, "data", "products"))
    return {"query": query, "products": products}


@router.get("/products/{handle}")
async def product_page(handle: str, storefront: StorefrontClient = Depends(get_storefront_client)):
    product_body, related_body = await asyncio.gather(
        _fetch(storefront, SINGLE_PRODUCT_BY_HANDLE_QUERY, {"handle": handle}),
        _fetch(storefront, ALL_PRODUCTS_QUERY, {"first": RELATED_POOL_SIZE}),
    )
    raw_product = dig(product_body, "data", "product")
    if not isinstance(raw_product, dict) or not raw_product:
        raise HTTPException(status_code=404, detail=errors.ERROR_PRODUCT_NOT_FOUND)

    product = map_product_detail(raw_product)
    related = map_search_products(dig(related_body, "data", "products"))
    return {
        "product": product,
        "related": related_products(related, product["handle"]),
    }
