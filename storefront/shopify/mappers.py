"""
Response shaping for Storefront API payloads.

GraphQL connections arrive as ``{"edges": [{"node": {...}}]}``. The mappers
below flatten them into the JSON the browser consumes. Every mapper accepts
missing or partial input and returns an empty result instead of raising.
"""
from typing import Any

DEFAULT_DETAIL_PRICE = {"amount": "0", "currencyCode": "USD"}
DEFAULT_PREVIEW_PRICE = {"amount": "0", "currencyCode": "NGN"}


def dig(data: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def nodes(connection: Any) -> list[dict[str, Any]]:
    """Non-empty nodes of a GraphQL connection."""
    edges = dig(connection, "edges")
    if not isinstance(edges, list):
        return []
    return [
        edge["node"]
        for edge in edges
        if isinstance(edge, dict) and isinstance(edge.get("node"), dict) and edge["node"]
    ]


def user_errors(body: dict[str, Any], mutation: str) -> list[dict[str, Any]]:
    problems = dig(body, "data", mutation, "userErrors")
    if not isinstance(problems, list):
        return []
    return [problem for problem in problems if isinstance(problem, dict)]


def _card(node: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": node.get("id"),
        "title": node.get("title"),
        "handle": node.get("handle"),
        "image": node.get("featuredImage"),
    }


def map_products(connection: Any) -> list[dict[str, Any]]:
    """Home page grid: image comes from the first media entry."""
    products = []
    for node in nodes(connection):
        first_media = nodes(node.get("media"))
        products.append(
            {
                "id": node.get("id"),
                "title": node.get("title"),
                "handle": node.get("handle"),
                "image": first_media[0].get("image") if first_media else None,
            }
        )
    return products


def map_discover_categories(connection: Any) -> list[dict[str, Any]]:
    return [{**_card(node), "href": f"/products/{node.get('handle')}"} for node in nodes(connection)]


def map_collection_products(connection: Any) -> list[dict[str, Any]]:
    return [{**_card(node), "tags": node.get("tags") or []} for node in nodes(connection)]


def map_search_products(connection: Any, with_price: bool = False) -> list[dict[str, Any]]:
    products = []
    for node in nodes(connection):
        product = _card(node)
        if with_price:
            product["price"] = dig(node, "priceRange", "minVariantPrice", "amount")
        products.append(product)
    return products


def collection_tags(products: list[dict[str, Any]]) -> list[str]:
    """Distinct tags across products (exact match), sorted ignoring case."""
    tags = {tag for product in products for tag in product.get("tags") or []}
    return sorted(tags, key=str.lower)


def filter_and_sort(
    products: list[dict[str, Any]],
    tag: str | None = None,
    sort: str = "title-asc",
) -> list[dict[str, Any]]:
    if tag:
        products = [p for p in products if tag in (p.get("tags") or [])]
    return sorted(
        products,
        key=lambda p: (p.get("title") or "").lower(),
        reverse=sort == "title-desc",
    )


def map_product_detail(raw: dict[str, Any]) -> dict[str, Any]:
    media = [{"image": node.get("image")} for node in nodes(raw.get("media"))]
    variants = [
        {
            "id": node.get("id"),
            "title": node.get("title"),
            "availableForSale": node.get("availableForSale") or False,
            "quantityAvailable": node.get("quantityAvailable"),
            "selectedOptions": node.get("selectedOptions") or [],
            "price": node.get("price") or dict(DEFAULT_DETAIL_PRICE),
        }
        for node in nodes(raw.get("variants"))
    ]
    featured_media_image = dig(raw, "featuredMedia", "image")
    return {
        "id": raw.get("id"),
        "title": raw.get("title"),
        "handle": raw.get("handle"),
        "description": raw.get("description"),
        "descriptionHtml": raw.get("descriptionHtml"),
        "featuredImage": featured_media_image or raw.get("featuredImage"),
        "media": media,
        "variants": variants,
    }


def map_product_preview(raw: dict[str, Any]) -> dict[str, Any]:
    variants = [
        {
            "id": node.get("id"),
            "title": node.get("title"),
            "availableForSale": node.get("availableForSale") or False,
            "price": node.get("price") or dict(DEFAULT_PREVIEW_PRICE),
        }
        for node in nodes(raw.get("variants"))
    ]
    return {
        "id": raw.get("id"),
        "title": raw.get("title"),
        "handle": raw.get("handle"),
        "featuredImage": raw.get("featuredImage"),
        "variants": variants,
    }


def related_products(
    products: list[dict[str, Any]], current_handle: str, limit: int = 4
) -> list[dict[str, Any]]:
    return [p for p in products if p.get("handle") != current_handle][:limit]


def _quantity(node: dict[str, Any]) -> int:
    quantity = node.get("quantity")
    return quantity if isinstance(quantity, int) else 0


def cart_line_count(cart: dict[str, Any] | None) -> int:
    return sum(_quantity(node) for node in nodes(dig(cart, "lines")))


def map_cart_lines(cart: dict[str, Any] | None) -> list[dict[str, Any]]:
    lines = []
    for node in nodes(dig(cart, "lines")):
        merchandise = node.get("merchandise") or {}
        product = merchandise.get("product") or {}
        lines.append(
            {
                "id": node.get("id"),
                "quantity": _quantity(node),
                "merchandiseId": merchandise.get("id"),
                "title": product.get("title") or merchandise.get("title"),
                "variantTitle": merchandise.get("title"),
                "image": merchandise.get("image") or product.get("featuredImage"),
                "price": merchandise.get("price"),
                "compareAtPrice": merchandise.get("compareAtPrice"),
                "productHandle": product.get("handle"),
                "cost": dig(node, "cost", "totalAmount"),
            }
        )
    return lines


def map_customer(raw: dict[str, Any] | None) -> dict[str, Any] | None:
    if not isinstance(raw, dict) or not raw.get("id"):
        return None
    return {
        "id": raw["id"],
        "firstName": raw.get("firstName"),
        "lastName": raw.get("lastName"),
        "email": dig(raw, "emailAddress", "emailAddress"),
    }
