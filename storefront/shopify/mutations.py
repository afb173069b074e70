"""Storefront API cart mutations."""

_CART_PAYLOAD = """
    cart {
      id
      checkoutUrl
    }
    userErrors {
      field
      message
    }
"""

CART_CREATE_MUTATION = (
    """
mutation CartCreate($lines: [CartLineInput!]) {
  cartCreate(input: { lines: $lines }) {"""
    + _CART_PAYLOAD
    + """  }
}
"""
)

CART_LINES_ADD_MUTATION = (
    """
mutation CartLinesAdd($cartId: ID!, $lines: [CartLineInput!]!) {
  cartLinesAdd(cartId: $cartId, lines: $lines) {"""
    + _CART_PAYLOAD
    + """  }
}
"""
)

CART_LINES_UPDATE_MUTATION = (
    """
mutation CartLinesUpdate($cartId: ID!, $lines: [CartLineUpdateInput!]!) {
  cartLinesUpdate(cartId: $cartId, lines: $lines) {"""
    + _CART_PAYLOAD
    + """  }
}
"""
)

CART_LINES_REMOVE_MUTATION = (
    """
mutation CartLinesRemove($cartId: ID!, $lineIds: [ID!]!) {
  cartLinesRemove(cartId: $cartId, lineIds: $lineIds) {"""
    + _CART_PAYLOAD
    + """  }
}
"""
)
