"""Tests for Storefront response mappers"""
from storefront.shopify import mappers


def _edges(*nodes):
    return {"edges": [{"node": node} for node in nodes]}


IMAGE = {"url": "https://cdn.shopify.com/a.jpg", "altText": "A"}


class TestListings:
    def test_missing_connection_is_empty(self):
        assert mappers.map_products(None) == []
        assert mappers.map_collection_products({}) == []
        assert mappers.map_search_products({"edges": None}) == []

    def test_null_nodes_skipped(self):
        connection = {"edges": [{"node": None}, None, {"node": {"id": "1", "title": "T", "handle": "t"}}]}
        assert [p["id"] for p in mappers.map_search_products(connection)] == ["1"]

    def test_malformed_connection_is_empty(self):
        assert mappers.nodes({"edges": "oops"}) == []
        assert mappers.nodes({"edges": [{"node": "gid://shopify/Product/1"}]}) == []
        assert mappers.map_collection_products("products") == []

    def test_home_products_use_first_media_image(self):
        node = {
            "id": "gid://shopify/Product/1",
            "title": "Prayer Mat",
            "handle": "prayer-mat",
            "media": _edges({"image": IMAGE}, {"image": {"url": "second"}}),
        }
        assert mappers.map_products(_edges(node)) == [
            {"id": "gid://shopify/Product/1", "title": "Prayer Mat", "handle": "prayer-mat", "image": IMAGE}
        ]

    def test_home_products_without_media(self):
        node = {"id": "1", "title": "T", "handle": "t"}
        assert mappers.map_products(_edges(node))[0]["image"] is None

    def test_discover_categories_link_to_product(self):
        node = {"id": "1", "title": "Oud", "handle": "oud", "featuredImage": IMAGE}
        assert mappers.map_discover_categories(_edges(node)) == [
            {"id": "1", "title": "Oud", "handle": "oud", "image": IMAGE, "href": "/products/oud"}
        ]

    def test_collection_products_default_tags(self):
        node = {"id": "1", "title": "T", "handle": "t"}
        assert mappers.map_collection_products(_edges(node))[0]["tags"] == []

    def test_search_products_with_price(self):
        node = {"id": "1", "title": "T", "handle": "t", "priceRange": {"minVariantPrice": {"amount": "12.5"}}}
        assert mappers.map_search_products(_edges(node), with_price=True)[0]["price"] == "12.5"
        assert "price" not in mappers.map_search_products(_edges(node))[0]


class TestFilterAndSort:
    products = [
        {"title": "banana", "tags": ["Fruit"]},
        {"title": "Apple", "tags": ["Fruit", "Red"]},
        {"title": "carrot", "tags": ["veg"]},
    ]

    def test_tags_sorted_case_insensitive(self):
        assert mappers.collection_tags(self.products) == ["Fruit", "Red", "veg"]

    def test_tags_deduplicate_by_exact_value(self):
        products = [{"tags": ["Sale", "new"]}, {"tags": ["sale", "Sale"]}]
        assert sorted(mappers.collection_tags(products)) == ["Sale", "new", "sale"]
        assert [t.lower() for t in mappers.collection_tags(products)] == ["new", "sale", "sale"]

    def test_sort_by_title(self):
        assert [p["title"] for p in mappers.filter_and_sort(self.products)] == ["Apple", "banana", "carrot"]
        assert [p["title"] for p in mappers.filter_and_sort(self.products, sort="title-desc")] == [
            "carrot",
            "banana",
            "Apple",
        ]

    def test_filter_by_tag(self):
        assert [p["title"] for p in mappers.filter_and_sort(self.products, tag="Fruit")] == ["Apple", "banana"]


class TestProductDetail:
    def test_full_product(self):
        raw = {
            "id": "1",
            "title": "Abaya",
            "handle": "abaya",
            "description": "Black",
            "descriptionHtml": "<p>Black</p>",
            "featuredImage": IMAGE,
            "media": _edges({"image": IMAGE}, {"image": None}),
            "variants": _edges(
                {
                    "id": "v1",
                    "title": "S",
                    "availableForSale": True,
                    "quantityAvailable": 3,
                    "selectedOptions": [{"name": "Size", "value": "S"}],
                    "price": {"amount": "50.0", "currencyCode": "NGN"},
                },
                {"id": "v2", "title": "M"},
            ),
        }
        product = mappers.map_product_detail(raw)
        assert product["featuredImage"] == IMAGE
        assert product["media"] == [{"image": IMAGE}, {"image": None}]
        assert product["variants"][0]["quantityAvailable"] == 3
        assert product["variants"][1] == {
            "id": "v2",
            "title": "M",
            "availableForSale": False,
            "quantityAvailable": None,
            "selectedOptions": [],
            "price": {"amount": "0", "currencyCode": "USD"},
        }

    def test_featured_media_wins(self):
        other = {"url": "https://cdn.shopify.com/b.jpg"}
        raw = {"id": "1", "featuredImage": IMAGE, "featuredMedia": {"image": other}}
        assert mappers.map_product_detail(raw)["featuredImage"] == other

    def test_preview_default_price(self):
        raw = {"id": "1", "title": "T", "handle": "t", "variants": _edges({"id": "v1", "title": "Default"})}
        preview = mappers.map_product_preview(raw)
        assert preview["featuredImage"] is None
        assert preview["variants"] == [
            {"id": "v1", "title": "Default", "availableForSale": False, "price": {"amount": "0", "currencyCode": "NGN"}}
        ]

    def test_related_excludes_current(self):
        products = [{"handle": h} for h in ["a", "b", "c", "d", "e", "f"]]
        assert [p["handle"] for p in mappers.related_products(products, "b")] == ["a", "c", "d", "e"]


class TestCart:
    cart = {
        "id": "gid://shopify/Cart/1",
        "lines": _edges(
            {
                "id": "line-1",
                "quantity": 2,
                "cost": {"totalAmount": {"amount": "20.0", "currencyCode": "NGN"}},
                "merchandise": {
                    "id": "variant-1",
                    "title": "Large",
                    "price": {"amount": "10.0", "currencyCode": "NGN"},
                    "compareAtPrice": None,
                    "image": None,
                    "product": {"title": "Kufi", "handle": "kufi", "featuredImage": IMAGE},
                },
            },
            {"id": "line-2", "quantity": 3, "merchandise": {}},
        ),
    }

    def test_line_count(self):
        assert mappers.cart_line_count(self.cart) == 5
        assert mappers.cart_line_count(None) == 0

    def test_lines(self):
        first, second = mappers.map_cart_lines(self.cart)
        assert first == {
            "id": "line-1",
            "quantity": 2,
            "merchandiseId": "variant-1",
            "title": "Kufi",
            "variantTitle": "Large",
            "image": IMAGE,
            "price": {"amount": "10.0", "currencyCode": "NGN"},
            "compareAtPrice": None,
            "productHandle": "kufi",
            "cost": {"amount": "20.0", "currencyCode": "NGN"},
        }
        assert second["merchandiseId"] is None
        assert second["cost"] is None

    def test_user_errors(self):
        body = {"data": {"cartLinesAdd": {"userErrors": [{"message": "Sold out"}]}}}
        assert mappers.user_errors(body, "cartLinesAdd") == [{"message": "Sold out"}]
        assert mappers.user_errors({}, "cartLinesAdd") == []
        assert mappers.user_errors({"data": {"cartLinesAdd": {"userErrors": "bad"}}}, "cartLinesAdd") == []

    def test_non_integer_quantity_counts_zero(self):
        cart = {"lines": _edges({"id": "a", "quantity": "2"}, {"id": "b", "quantity": 1})}
        assert mappers.cart_line_count(cart) == 1
        assert [line["quantity"] for line in mappers.map_cart_lines(cart)] == [0, 1]


def test_map_customer():
    raw = {"id": "gid://shopify/Customer/1", "firstName": "Aisha", "emailAddress": {"emailAddress": "a@example.com"}}
    assert mappers.map_customer(raw) == {
        "id": "gid://shopify/Customer/1",
        "firstName": "Aisha",
        "lastName": None,
        "email": "a@example.com",
    }
    assert mappers.map_customer(None) is None
    assert mappers.map_customer({"firstName": "No id"}) is None
    assert mappers.map_customer("gid://shopify/Customer/1") is None
