"""FastAPI routes for the Inventory domain.

Thin adapters that translate HTTP requests into domain commands and
queries. No business logic: schema -> command -> response translation.
"""

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from inventory.api.schemas import (
    AdjustmentResponse,
    AdjustStockRequest,
    AvailabilityResponse,
    InitializeStockRequest,
    ReleaseStockRequest,
    ReserveStockRequest,
    StockRecordListResponse,
    StockRecordResponse,
    UpdateStockSettingsRequest,
)
from inventory.projections.queries import adjustment_history, list_stock, low_stock_items
from inventory.stock.adjustment import AdjustStock
from inventory.stock.initialization import InitializeStock
from inventory.stock.records import check_availability, get_stock_record
from inventory.stock.reservation import ReleaseStock, ReserveStock
from inventory.stock.settings import UpdateStockSettings

inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------
def _record_response(record) -> StockRecordResponse:
    """Map a StockRecord aggregate to its external representation."""
    return StockRecordResponse(
        id=str(record.id),
        product_variant_id=str(record.variant_id),
        product_id=str(record.product_id) if record.product_id else None,
        sku=record.sku,
        product_name=record.product_name,
        variant_name=record.variant_name,
        quantity=record.levels.quantity,
        reserved=record.levels.reserved,
        available=record.levels.available,
        low_stock_threshold=record.low_stock_threshold,
        track_inventory=record.track_inventory,
        allow_backorder=record.allow_backorder,
        last_restocked_at=record.last_restocked_at,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _level_response(level) -> StockRecordResponse:
    """Map a StockLevel read-model row to the same representation."""
    return StockRecordResponse(
        id=str(level.stock_record_id),
        product_variant_id=str(level.variant_id),
        product_id=str(level.product_id) if level.product_id else None,
        sku=level.sku or None,
        product_name=level.product_name or None,
        variant_name=level.variant_name or None,
        quantity=level.quantity,
        reserved=level.reserved,
        available=level.available,
        low_stock_threshold=level.low_stock_threshold,
        track_inventory=level.track_inventory,
        allow_backorder=level.allow_backorder,
        last_restocked_at=level.last_restocked_at,
        created_at=level.created_at,
        updated_at=level.updated_at,
    )


def _current_state(variant_id: str) -> StockRecordResponse:
    return _record_response(get_stock_record(variant_id))


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
@inventory_router.get("", response_model=StockRecordListResponse)
async def list_inventory(
    search: str | None = None,
    low_stock_only: bool = Query(default=False, alias="lowStockOnly"),
    out_of_stock_only: bool = Query(default=False, alias="outOfStockOnly"),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
    page: int = 1,
    limit: int | None = None,
) -> StockRecordListResponse:
    result = list_stock(
        search=search,
        low_stock_only=low_stock_only,
        out_of_stock_only=out_of_stock_only,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return StockRecordListResponse(
        data=[_level_response(level) for level in result["data"]],
        total=result["total"],
        page=result["page"],
        limit=result["limit"],
        total_pages=result["total_pages"],
    )


@inventory_router.get("/low-stock", response_model=list[StockRecordResponse])
async def get_low_stock() -> list[StockRecordResponse]:
    return [_level_response(level) for level in low_stock_items()]


@inventory_router.get("/variant/{variant_id}", response_model=StockRecordResponse)
async def get_by_variant(variant_id: str) -> StockRecordResponse:
    return _current_state(variant_id)


@inventory_router.get("/variant/{variant_id}/availability", response_model=AvailabilityResponse)
async def get_availability(variant_id: str, quantity: int = Query(default=1, ge=1)) -> AvailabilityResponse:
    result = check_availability(variant_id, quantity)
    return AvailabilityResponse(available=result.available, current_stock=result.current_stock)


@inventory_router.get("/{stock_record_id}/history", response_model=list[AdjustmentResponse])
async def get_history(stock_record_id: str) -> list[AdjustmentResponse]:
    return [
        AdjustmentResponse(
            id=str(entry.id),
            inventory_id=stock_record_id,
            quantity_change=entry.quantity_change,
            reason=entry.reason,
            notes=entry.notes,
            user_id=str(entry.actor_id) if entry.actor_id else None,
            created_at=entry.created_at,
        )
        for entry in adjustment_history(stock_record_id)
    ]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@inventory_router.post("", status_code=201, response_model=StockRecordResponse)
async def initialize_stock(body: InitializeStockRequest) -> StockRecordResponse:
    command = InitializeStock(
        variant_id=body.product_variant_id,
        product_id=body.product_id,
        sku=body.sku,
        product_name=body.product_name,
        variant_name=body.variant_name,
        initial_quantity=body.quantity,
        low_stock_threshold=body.low_stock_threshold,
        track_inventory=body.track_inventory,
        allow_backorder=body.allow_backorder,
        actor_id=body.user_id,
    )
    variant_id = current_domain.process(command, asynchronous=False)
    return _current_state(variant_id)


@inventory_router.post("/adjust", response_model=StockRecordResponse)
async def adjust_stock(body: AdjustStockRequest) -> StockRecordResponse:
    command = AdjustStock(
        variant_id=body.product_variant_id,
        quantity_change=body.quantity_change,
        reason=body.reason,
        notes=body.notes,
        actor_id=body.user_id,
    )
    current_domain.process(command, asynchronous=False)
    return _current_state(body.product_variant_id)


@inventory_router.post("/reserve", response_model=StockRecordResponse)
async def reserve_stock(body: ReserveStockRequest) -> StockRecordResponse:
    command = ReserveStock(variant_id=body.product_variant_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _current_state(body.product_variant_id)


@inventory_router.post("/release", response_model=StockRecordResponse)
async def release_stock(body: ReleaseStockRequest) -> StockRecordResponse:
    command = ReleaseStock(variant_id=body.product_variant_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _current_state(body.product_variant_id)


@inventory_router.patch("/variant/{variant_id}/settings", response_model=StockRecordResponse)
async def update_settings(variant_id: str, body: UpdateStockSettingsRequest) -> StockRecordResponse:
    command = UpdateStockSettings(
        variant_id=variant_id,
        low_stock_threshold=body.low_stock_threshold,
        track_inventory=body.track_inventory,
        allow_backorder=body.allow_backorder,
    )
    current_domain.process(command, asynchronous=False)
    return _current_state(variant_id)
