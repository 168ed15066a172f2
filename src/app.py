"""Storefront FastAPI application.

Serves the product catalogue and order endpoints. Commands are processed
synchronously inside the storefront domain context pushed per request.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - unset / "test" → in-memory provider
#   - "production"   → PostgreSQL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.config import settings
from storefront.domain import storefront
from storefront.utils.logging import bind_request_context, clear_request_context

storefront.init()

_API_PREFIX = "/api"


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Grocery storefront: product catalogue, order placement and order lifecycle",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context for API requests."""
    if request.url.path.startswith(_API_PREFIX):
        clear_request_context()
        bind_request_context(
            method=request.method,
            path=request.url.path,
            user_id=request.headers.get("x-user-id"),
        )
        with storefront.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error handlers
# ---------------------------------------------------------------------------
from storefront.api import order_router, product_router, register_error_handlers  # noqa: E402

app.include_router(product_router)
app.include_router(order_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "environment": settings.environment,
            "domain": storefront.name,
        }
    )
