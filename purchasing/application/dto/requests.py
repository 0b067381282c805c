"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    Discriminator,
    Field,
    Tag,
    field_validator,
    model_validator,
)

from purchasing.core.entities.purchase_order import (
    ItemType,
    LineItem,
    PurchaseOrderStatus,
)


def _coerce_date(value: Any) -> Any:
    """Accept full ISO datetimes where a calendar date is expected."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class _ItemRequestBase(BaseModel):
    quantity: Decimal = Field(..., gt=0, description="Quantity ordered", examples=["2"])
    unit_price: Decimal = Field(..., ge=0, description="Price per unit", examples=["100.00"])

    def to_line_item(self) -> LineItem:
        return LineItem(
            product_id=self.product_id or None,
            item_name=(self.item_name or "").strip() or None,
            item_type=ItemType(self.item_type),
            quantity=self.quantity,
            unit_price=self.unit_price,
        )


class StandardItemRequest(_ItemRequestBase):
    """Catalog product line."""

    item_type: Literal["STANDARD"] = "STANDARD"
    product_id: str = Field(..., min_length=1, description="Catalog product ID")
    item_name: str | None = Field(
        default=None,
        description="Override for the product name snapshot",
    )


class _FreeformItemRequest(_ItemRequestBase):
    product_id: str | None = Field(default=None, description="Catalog product ID")
    item_name: str | None = Field(default=None, description="Free-text item name")

    @model_validator(mode="after")
    def _require_identity(self) -> "_FreeformItemRequest":
        if not self.product_id and not (self.item_name and self.item_name.strip()):
            raise ValueError(f"{self.item_type} items need a product_id or an item_name")
        return self


class ManualItemRequest(_FreeformItemRequest):
    """Hand-entered line, optionally linked to a product."""

    item_type: Literal["MANUAL"] = "MANUAL"


class OtherItemRequest(_FreeformItemRequest):
    """Fees and extras."""

    item_type: Literal["OTHER"] = "OTHER"


def _item_type_tag(value: Any) -> str:
    """Discriminator that treats a missing item_type as STANDARD."""
    if isinstance(value, dict):
        raw = value.get("item_type") or ItemType.STANDARD.value
    else:
        raw = getattr(value, "item_type", ItemType.STANDARD.value)
    return raw.value if isinstance(raw, ItemType) else str(raw)


ItemRequest = Annotated[
    Union[
        Annotated[StandardItemRequest, Tag("STANDARD")],
        Annotated[ManualItemRequest, Tag("MANUAL")],
        Annotated[OtherItemRequest, Tag("OTHER")],
    ],
    Discriminator(_item_type_tag),
]


class CreatePurchaseOrderRequest(BaseModel):
    """Request to create a purchase order in DRAFT."""

    supplier_id: str = Field(..., min_length=1, description="Supplier the order is issued to")
    user_id: str | None = Field(
        default=None,
        description="Order owner; resolved by the configured fallback when omitted",
    )
    issue_date: date = Field(..., description="Issue date", examples=["2026-02-19"])
    delivery_date: date = Field(..., description="Requested delivery date")
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0, description="Order discount")
    shipping_cost: Decimal = Field(default=Decimal("0"), ge=0, description="Shipping cost")
    notes: str | None = Field(default=None, description="Free-text notes")
    items: list[ItemRequest] = Field(..., min_length=1, description="At least one line item")

    coerce_dates = field_validator("issue_date", "delivery_date", mode="before")(_coerce_date)

    def line_items(self) -> list[LineItem]:
        return [item.to_line_item() for item in self.items]


class UpdatePurchaseOrderRequest(BaseModel):
    """
    Full replacement of an order's header fields and item set.

    Omitted or null discount_amount and user_id keep the stored values;
    an explicit 0 discount sets it to zero. po_number and status never change.
    """

    supplier_id: str = Field(..., min_length=1)
    user_id: str | None = None
    issue_date: date
    delivery_date: date
    discount_amount: Decimal | None = Field(default=None, ge=0)
    shipping_cost: Decimal = Field(default=Decimal("0"), ge=0)
    notes: str | None = None
    items: list[ItemRequest] = Field(..., min_length=1)

    coerce_dates = field_validator("issue_date", "delivery_date", mode="before")(_coerce_date)

    def line_items(self) -> list[LineItem]:
        return [item.to_line_item() for item in self.items]


class PatchPurchaseOrderRequest(BaseModel):
    """
    Status and metadata patch.

    Omitted fields are left alone. ``notes: null`` clears the notes.
    """

    status: PurchaseOrderStatus | None = Field(default=None, description="Target status")
    delivery_date: date | None = None
    notes: str | None = None

    coerce_dates = field_validator("delivery_date", mode="before")(_coerce_date)

    @property
    def clears_notes(self) -> bool:
        return "notes" in self.model_fields_set and self.notes is None


class ListPurchaseOrdersRequest(BaseModel):
    """Filters for listing purchase orders."""

    status: PurchaseOrderStatus | None = None
    supplier_id: str | None = None
    search: str | None = Field(default=None, description="Matches po_number or supplier name")
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)
