"""
Error types and shared error messages.

Messages are module constants so routers and tests agree on the exact text.
"""


class StorefrontError(Exception):
    """Base error for the storefront service."""


class ConfigurationError(StorefrontError):
    """A required environment setting is missing or invalid."""


class UpstreamError(StorefrontError):
    """A call to the commerce platform failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


# Cart errors
ERROR_MERCHANDISE_REQUIRED = "merchandiseId (variant ID) is required"
ERROR_LINE_ID_REQUIRED = "lineId is required"
ERROR_LINE_IDS_REQUIRED = "lineIds or lineId is required"
ERROR_NO_CART = "No cart"
ERROR_ADD_TO_CART = "Failed to add to cart"
ERROR_CREATE_CART = "Failed to create cart"
ERROR_UPDATE_LINE = "Failed to update line"
ERROR_REMOVE_LINE = "Failed to remove line"

# Product errors
ERROR_HANDLE_REQUIRED = "handle required"
ERROR_PRODUCT_NOT_FOUND = "Product not found"

# Generic errors
ERROR_INVALID_REQUEST = "Invalid request"
ERROR_SOMETHING_WENT_WRONG = "Something went wrong"
ERROR_RATE_LIMITED = "Too many requests. Please try again later."

# Auth redirect codes (sent as ?error=<code>)
AUTH_ERROR_CONFIG = "auth_config"
AUTH_ERROR_DENIED = "auth_denied"
AUTH_ERROR_CALLBACK_MISSING = "auth_callback_missing"
AUTH_ERROR_SESSION_EXPIRED = "auth_session_expired"
AUTH_ERROR_INVALID_STATE = "auth_invalid_state"
AUTH_ERROR_TOKEN_FAILED = "auth_token_failed"
AUTH_ERROR_NO_TOKEN = "auth_no_token"
AUTH_ERROR_CALLBACK = "auth_callback_error"
