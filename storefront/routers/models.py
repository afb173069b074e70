"""
Storefront API Pydantic Models

Request bodies for the cart endpoints. The handlers parse the JSON themselves
and validate these models from it, so a non-object body reads as empty.
Fields keep the camelCase names the browser sends and are typed loosely:
bad values get a 400 with a readable message from the handler.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ==================== CART MODELS ====================

class AddToCartRequest(_CamelModel):
    merchandise_id: Any = Field(None, alias="merchandiseId")
    variant_id: Any = Field(None, alias="variantId")
    quantity: Any = None


class UpdateCartLineRequest(_CamelModel):
    line_id: Any = Field(None, alias="lineId")
    quantity: Any = None


class RemoveCartLinesRequest(_CamelModel):
    line_ids: Any = Field(None, alias="lineIds")
    line_id: Any = Field(None, alias="lineId")


# ==================== AUTH MODELS ====================

class SessionResponse(BaseModel):
    customer: dict[str, Any] | None = None


def clamp_quantity(value: Any, low: int, high: int, default: int) -> int:
    """Coerce ``value`` to an int within [low, high]; unparseable → ``default``."""
    try:
        quantity = int(float(value))
    except (TypeError, ValueError, OverflowError):
        quantity = default
    if quantity == 0 and low > 0:
        quantity = default
    return max(low, min(high, quantity))
