"""HTTP middleware."""
from .rate_limit import RateLimitMiddleware
from .security import SecurityHeadersMiddleware

__all__ = ["RateLimitMiddleware", "SecurityHeadersMiddleware"]
