"""Pydantic request/response schemas for the Inventory API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands. Field names travel as camelCase on the wire;
snake_case is accepted on input too.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class InitializeStockRequest(CamelModel):
    product_variant_id: str = Field(min_length=1)
    product_id: str | None = None
    sku: str | None = Field(default=None, max_length=100)
    product_name: str | None = Field(default=None, max_length=255)
    variant_name: str | None = Field(default=None, max_length=255)
    quantity: int = Field(ge=0, default=0)
    low_stock_threshold: int | None = Field(default=None, ge=0)
    track_inventory: bool = True
    allow_backorder: bool = False
    user_id: str | None = None


class AdjustStockRequest(CamelModel):
    product_variant_id: str = Field(min_length=1)
    quantity_change: int
    reason: str = Field(min_length=1, max_length=255)
    notes: str | None = Field(default=None, max_length=1000)
    user_id: str | None = None


class ReserveStockRequest(CamelModel):
    product_variant_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)


class ReleaseStockRequest(CamelModel):
    product_variant_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)


class UpdateStockSettingsRequest(CamelModel):
    low_stock_threshold: int | None = Field(default=None, ge=0)
    track_inventory: bool | None = None
    allow_backorder: bool | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StockRecordResponse(CamelModel):
    id: str
    product_variant_id: str
    product_id: str | None = None
    sku: str | None = None
    product_name: str | None = None
    variant_name: str | None = None
    quantity: int
    reserved: int
    available: int
    low_stock_threshold: int
    track_inventory: bool
    allow_backorder: bool
    last_restocked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StockRecordListResponse(CamelModel):
    data: list[StockRecordResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class AdjustmentResponse(CamelModel):
    id: str
    inventory_id: str
    quantity_change: int
    reason: str
    notes: str | None = None
    user_id: str | None = None
    created_at: datetime


class AvailabilityResponse(CamelModel):
    available: bool
    current_stock: int
