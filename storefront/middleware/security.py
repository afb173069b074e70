"""
Security headers for storefront responses.

The CSP allows what the storefront pages load: product imagery from the
Shopify CDN and Unsplash, Google Fonts, and form posts to the Shopify
login and checkout hosts. HSTS is only sent in production, where the
site is served over HTTPS.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from storefront.config import is_production

CSP_DIRECTIVES: dict[str, tuple[str, ...]] = {
    "default-src": ("'self'",),
    "script-src": ("'self'",),
    "style-src": ("'self'", "'unsafe-inline'", "https://fonts.googleapis.com"),
    "font-src": ("'self'", "https://fonts.gstatic.com", "data:"),
    "img-src": (
        "'self'",
        "data:",
        "https://cdn.shopify.com",
        "https://images.unsplash.com",
        "https://unsplash.com",
        "https://plus.unsplash.com",
    ),
    "connect-src": ("'self'",),
    "object-src": ("'none'",),
    "base-uri": ("'self'",),
    "form-action": ("'self'", "https://shopify.com", "https://*.myshopify.com"),
    "frame-ancestors": ("'none'",),
}

CONTENT_SECURITY_POLICY = "; ".join(
    f"{directive} {' '.join(sources)}" for directive, sources in CSP_DIRECTIVES.items()
)

STATIC_HEADERS = {
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
}

HSTS_HEADER = "max-age=31536000; includeSubDomains"

# Reveal the server stack
STRIPPED_HEADERS = ("Server", "X-Powered-By")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)

        response.headers.update(STATIC_HEADERS)
        if is_production():
            response.headers["Strict-Transport-Security"] = HSTS_HEADER

        for header in STRIPPED_HEADERS:
            if header in response.headers:
                del response.headers[header]

        return response
