"""Read-side queries over the StockLevel projection and the adjustment ledger.

Nothing here mutates state.
"""

import math

from protean import Q
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from inventory.projections.stock_level import StockLevel
from inventory.stock.records import get_stock_record

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Sortable columns by their API (camelCase) and attribute (snake_case) names
SORTABLE_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "lastRestockedAt": "last_restocked_at",
    "quantity": "quantity",
    "reserved": "reserved",
    "available": "available",
    "lowStockThreshold": "low_stock_threshold",
    "sku": "sku",
    "productName": "product_name",
    "variantName": "variant_name",
    "productVariantId": "variant_id",
}
SORTABLE_FIELDS.update({v: v for v in list(SORTABLE_FIELDS.values())})


def _page_size_limits():
    custom = current_domain.config["custom"]
    return (
        custom.get("default_page_size", DEFAULT_PAGE_SIZE),
        custom.get("max_page_size", MAX_PAGE_SIZE),
    )


def list_stock(
    search=None,
    low_stock_only=False,
    out_of_stock_only=False,
    sort_by="createdAt",
    sort_order="desc",
    page=1,
    limit=None,
):
    """Filtered, sorted, paginated listing of stock levels.

    Returns a dict with ``data``, ``total``, ``page``, ``limit`` and
    ``total_pages``. The low-stock filter compares two columns of the same
    row, so it is applied after the query and before pagination.
    """
    default_limit, max_limit = _page_size_limits()
    limit = default_limit if limit is None else limit
    page = 1 if page is None else page

    errors = {}
    field = SORTABLE_FIELDS.get(sort_by or "createdAt")
    if field is None:
        errors["sort_by"] = [f"Cannot sort by {sort_by}"]
    order = (sort_order or "desc").lower()
    if order not in ("asc", "desc"):
        errors["sort_order"] = ["Sort order must be asc or desc"]
    if page < 1:
        errors["page"] = ["Page must be 1 or greater"]
    if limit < 1 or limit > max_limit:
        errors["limit"] = [f"Limit must be between 1 and {max_limit}"]
    if errors:
        raise ValidationError(errors)

    query = current_domain.repository_for(StockLevel)._dao.query
    if search:
        query = query.filter(
            Q(variant_name__icontains=search) | Q(sku__icontains=search) | Q(product_name__icontains=search)
        )
    if out_of_stock_only:
        query = query.filter(available__lte=0)

    ordering = field if order == "asc" else f"-{field}"
    levels = query.order_by([ordering, "stock_record_id"]).limit(None).all().items

    if low_stock_only:
        levels = [lv for lv in levels if 0 < lv.available <= lv.low_stock_threshold]

    total = len(levels)
    start = (page - 1) * limit
    return {
        "data": levels[start : start + limit],
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit),
    }


def low_stock_items():
    """Tracked stock that is running low but not out, lowest availability first."""
    levels = (
        current_domain.repository_for(StockLevel)
        ._dao.query.filter(track_inventory=True, available__gt=0)
        .order_by(["available", "stock_record_id"])
        .limit(None)
        .all()
        .items
    )
    return [lv for lv in levels if lv.available <= lv.low_stock_threshold]


def find_stock_level(variant_id):
    """The read-model row for a variant, or None."""
    return current_domain.repository_for(StockLevel)._dao.query.filter(variant_id=str(variant_id)).all().first


def adjustment_history(stock_record_id):
    """Ledger entries for a stock record, newest first."""
    record = get_stock_record(stock_record_id)
    # Ties keep the later entry first
    entries = list(reversed(list(record.adjustments or [])))
    return sorted(entries, key=lambda a: a.created_at, reverse=True)
