"""
Purchase order domain entities.

A purchase order is a header plus an owned set of line items. Monetary
fields are fixed-point decimals rounded to 8 places.
"""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from purchasing.core.entities.reference import Product, Supplier, User


class PurchaseOrderStatus(str, Enum):
    """Lifecycle states of a purchase order."""

    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    SENT = "SENT"
    CANCELLED = "CANCELLED"


class ItemType(str, Enum):
    """Kinds of line item."""

    STANDARD = "STANDARD"  # catalog product, product_id required
    MANUAL = "MANUAL"  # product_id or free-text item_name
    OTHER = "OTHER"  # fees and extras, product_id or item_name


class LineItem(BaseModel):
    """A single line on a purchase order."""

    id: int | None = None
    po_id: int | None = None
    product_id: str | None = None
    item_name: str | None = None  # snapshot of the product name at write time
    item_type: ItemType = ItemType.STANDARD
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal = Decimal("0")

    # Hydrated for display, not persisted on the item row
    product: Product | None = None

    @property
    def display_name(self) -> str:
        """Name to show for the line, preferring the live product name."""
        if self.product is not None:
            return self.product.name
        return self.item_name or ""


class PurchaseOrder(BaseModel):
    """Purchase order aggregate root."""

    id: int | None = None
    po_number: str
    status: PurchaseOrderStatus = PurchaseOrderStatus.DRAFT
    supplier_id: str
    user_id: str
    issue_date: date
    delivery_date: date
    subtotal: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    vat_amount: Decimal = Decimal("0")
    shipping_cost: Decimal = Decimal("0")
    grand_total: Decimal = Decimal("0")
    notes: str | None = None
    items: list[LineItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    supplier: Supplier | None = None
    user: User | None = None

    @property
    def item_count(self) -> int:
        return len(self.items)


class PurchaseOrderPage(BaseModel):
    """One page of a filtered purchase order listing."""

    orders: list[PurchaseOrder] = Field(default_factory=list)
    total: int = 0
    limit: int = 50
    offset: int = 0

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.orders) < self.total
