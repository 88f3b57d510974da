"""Storefront FastAPI application.

Single-domain web server that processes commands synchronously via HTTP.
Every request runs inside the storefront domain context with a bound
logging context (request id, method, path).

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - unset        → in-memory database
#   - "production" → PostgreSQL
from storefront.domain import storefront  # noqa: E402
from storefront.utils.logging import add_context, clear_context, get_logger  # noqa: E402

storefront.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Camera e-commerce storefront: catalogue, cart and orders",
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
    """Push the Protean domain context and bind request logging context."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    add_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        with storefront.domain_context():
            response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Error handlers & Routers
# ---------------------------------------------------------------------------
from storefront.api import routers  # noqa: E402
from storefront.api.errors import register_exception_handlers  # noqa: E402

register_exception_handlers(app)

for router in routers:
    app.include_router(router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
