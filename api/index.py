"""
Storefront - Main FastAPI Application

Single entry point for all API routes (one Vercel serverless function).
"""
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Vercel runs this file from api/, the package lives one level up
_base_path = Path(__file__).parent.parent
if str(_base_path) not in sys.path:
    sys.path.insert(0, str(_base_path))

from storefront.config import get_auth_rate_limit, get_cors_origins  # noqa: E402
from storefront.errors import ERROR_SOMETHING_WENT_WRONG, ConfigurationError  # noqa: E402
from storefront.logging import get_logger  # noqa: E402
from storefront.middleware import RateLimitMiddleware, SecurityHeadersMiddleware  # noqa: E402
from storefront.routers import router as api_router  # noqa: E402
from storefront.routers.deps import shutdown_services  # noqa: E402

logger = get_logger(__name__)


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    yield
    await shutdown_services()


app = FastAPI(
    title="Storefront",
    description="Headless storefront API: catalog, cart, search and customer login",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RateLimitMiddleware, requests_per_minute=get_auth_rate_limit())

cors_origins = get_cors_origins()
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(api_router)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse({"error": ERROR_SOMETHING_WENT_WRONG}, status_code=500)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront"}
