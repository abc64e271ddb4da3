"""Exception-to-HTTP mapping for the Inventory API.

Builds on Protean's standard mapping (400 validation, 404 not found,
409 invalid state, 422 invalid operation) and adds:
- 409 with available/requested counts for insufficient stock
- 503 for concurrency conflicts that survived the retries and failed transactions
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, TransactionError
from protean.integrations.fastapi import register_exception_handlers

from inventory.stock.stock import InsufficientStockError

logger = structlog.get_logger(__name__)


def register_inventory_exception_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(InsufficientStockError)
    async def insufficient_stock_handler(request: Request, exc: InsufficientStockError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"error": str(exc), "available": exc.available, "requested": exc.requested},
        )

    @app.exception_handler(ExpectedVersionError)
    @app.exception_handler(TransactionError)
    async def transient_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Stock mutation failed",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(status_code=503, content={"error": "Inventory is busy, please retry"})
