"""Storefront API and Customer Account API query documents."""

CART_QUERY = """
query Cart($id: ID!) {
  cart(id: $id) {
    id
    checkoutUrl
    lines(first: 100) {
      edges {
        node {
          id
          quantity
          cost {
            totalAmount {
              amount
              currencyCode
            }
          }
          merchandise {
            ... on ProductVariant {
              id
              title
              price {
                amount
                currencyCode
              }
              compareAtPrice {
                amount
                currencyCode
              }
              image {
                url
                altText
              }
              product {
                title
                handle
                featuredImage {
                  url
                  altText
                }
              }
            }
          }
        }
      }
    }
  }
}
"""

DISCOVER_COLLECTION_QUERY = """
query DiscoverCollection($handle: String!) {
  collection(handle: $handle) {
    id
    title
    handle
    products(first: 8) {
      edges {
        node {
          id
          title
          handle
          featuredImage {
            url
            altText
          }
        }
      }
    }
  }
}
"""

COLLECTION_QUERY = """
query Collection($handle: String!, $first: Int!) {
  collection(handle: $handle) {
    id
    title
    handle
    products(first: $first) {
      edges {
        node {
          id
          title
          handle
          tags
          featuredImage {
            url
            altText
          }
        }
      }
    }
  }
}
"""

PRODUCT_SEARCH_QUERY = """
query ProductSearch($query: String!, $first: Int!) {
  products(first: $first, query: $query) {
    edges {
      node {
        id
        title
        handle
        featuredImage {
          url
          altText
        }
        priceRange {
          minVariantPrice {
            amount
          }
        }
      }
    }
  }
}
"""

# All products with tags, for collection-style listings (new arrivals, related)
ALL_PRODUCTS_QUERY = """
query AllProducts($first: Int!) {
  products(first: $first) {
    edges {
      node {
        id
        title
        handle
        tags
        featuredImage {
          url
          altText
        }
      }
    }
  }
}
"""

PRODUCTS_QUERY = """
query Products {
  products(first: 20) {
    edges {
      node {
        id
        title
        handle
        priceRange {
          minVariantPrice {
            amount
          }
        }
        media(first: 1) {
          edges {
            node {
              ... on MediaImage {
                image {
                  url
                  altText
                }
              }
            }
          }
        }
      }
    }
  }
}
"""

_PRODUCT_DETAIL_FIELDS = """
    id
    title
    handle
    description
    descriptionHtml
    featuredImage {
      url
      altText
    }
    media(first: 20) {
      edges {
        node {
          ... on MediaImage {
            image {
              url
              altText
            }
          }
        }
      }
    }
    variants(first: 50) {
      edges {
        node {
          id
          title
          availableForSale
          quantityAvailable
          selectedOptions {
            name
            value
          }
          price {
            amount
            currencyCode
          }
        }
      }
    }
"""

SINGLE_PRODUCT_QUERY = (
    """
query SingleProduct($id: ID!) {
  product(id: $id) {"""
    + _PRODUCT_DETAIL_FIELDS
    + """  }
}
"""
)

SINGLE_PRODUCT_BY_HANDLE_QUERY = (
    """
query SingleProductByHandle($handle: String!) {
  product(handle: $handle) {"""
    + _PRODUCT_DETAIL_FIELDS
    + """  }
}
"""
)

# Customer Account API
CUSTOMER_QUERY = """
query Customer {
  customer {
    id
    firstName
    lastName
    emailAddress {
      emailAddress
    }
  }
}
"""
