"""Inventory service FastAPI application.

Web server that processes stock commands synchronously via HTTP. Each
request is wrapped in the inventory domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - unset / "test" -> event_processing = "sync"  (projectors and the
#                       low stock monitor fire right after the UoW commits)
#   - "production"   -> event_processing = "async" (they fire in the Engine,
#                       see server.py)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from inventory.domain import inventory
from inventory.utils.logging import add_context, clear_context

inventory.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Inventory API",
    description="Stock accounting per product variant: levels, reservations, adjustments",
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
    """Push the inventory domain context and bind request details to the log context."""
    clear_context()
    add_context(
        request_id=request.headers.get("X-Request-ID", uuid4().hex),
        method=request.method,
        path=request.url.path,
    )
    if request.url.path.startswith("/inventory"):
        with inventory.domain_context():
            return await call_next(request)
    # No domain match: pass through (health check, docs, etc.)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error mapping
# ---------------------------------------------------------------------------
from inventory.api import inventory_router, register_inventory_exception_handlers  # noqa: E402

app.include_router(inventory_router)
register_inventory_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"inventory": {"name": inventory.name}},
        }
    )
