"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.

Money and quantity fields are Decimal and serialize as JSON strings
(``"287.50000000"``) so no precision is lost on the wire.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from purchasing.core.entities.purchase_order import ItemType, PurchaseOrderStatus


class SupplierRefResponse(BaseModel):
    """Supplier summary embedded in an order."""

    id: str
    company_name: str
    tax_id: str | None = None
    address: str | None = None
    phone: str | None = None
    regular_price: Decimal | None = None  # price hint only, never part of totals


class UserRefResponse(BaseModel):
    """Order owner summary."""

    id: str
    name: str
    email: str | None = None


class ProductRefResponse(BaseModel):
    """Catalog product summary embedded in a line item."""

    id: str
    sku: str | None = None
    name: str
    unit: str | None = None


class LineItemResponse(BaseModel):
    """Line item in purchase order response."""

    id: int = Field(..., description="Item ID")
    product_id: str | None = Field(default=None, description="Catalog product ID")
    item_name: str | None = Field(default=None, description="Name snapshot at write time")
    display_name: str = Field(..., description="Live product name, else the snapshot")
    item_type: ItemType
    quantity: Decimal = Field(..., description="Quantity ordered")
    unit_price: Decimal = Field(..., description="Price per unit")
    total_price: Decimal = Field(..., description="Line total (qty * unit_price)")
    product: ProductRefResponse | None = None


class PurchaseOrderResponse(BaseModel):
    """Purchase order response DTO."""

    id: int = Field(..., description="Purchase order ID")
    po_number: str = Field(..., description="Order number, e.g. PO25690219-P001")
    status: PurchaseOrderStatus
    supplier_id: str
    user_id: str
    issue_date: date
    delivery_date: date
    subtotal: Decimal
    discount_amount: Decimal
    vat_amount: Decimal
    shipping_cost: Decimal
    grand_total: Decimal
    notes: str | None = None
    items: list[LineItemResponse] = Field(default_factory=list)
    supplier: SupplierRefResponse | None = None
    user: UserRefResponse | None = None
    allowed_transitions: list[PurchaseOrderStatus] = Field(
        default_factory=list,
        description="Statuses this order may move to next",
    )
    created_at: datetime
    updated_at: datetime


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    total: int
    limit: int
    offset: int
    has_more: bool


class PurchaseOrderListResponse(PaginatedResponse):
    """One page of purchase orders."""

    orders: list[PurchaseOrderResponse] = Field(default_factory=list)


class ComponentHealthResponse(BaseModel):
    """Health of one backing component, such as the database."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PURCHASE_ORDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
