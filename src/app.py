"""Aura storefront FastAPI application.

Processes commands synchronously via HTTP. Every request runs inside the
storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)

# Initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay.
storefront.init()

_started_at = time.monotonic()

app = FastAPI(
    title="Aura Storefront API",
    description="Checkout, order tracking and customer sessions",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context and bind request details to the log context."""
    add_context(method=request.method, path=request.url.path)
    try:
        with storefront.domain_context():
            return await call_next(request)
    finally:
        clear_context()


register_exception_handlers(app)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error while processing request",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api import auth_router, order_router  # noqa: E402

app.include_router(order_router)
app.include_router(auth_router)


@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "uptime": round(time.monotonic() - _started_at, 3),
        }
    )
