"""
Reference entities read by the order engine.

Suppliers, products and users are owned by other parts of the system;
orders only look them up and display them.
"""

from decimal import Decimal

from pydantic import BaseModel


class Supplier(BaseModel):
    """A company purchase orders are issued to."""

    id: str
    company_name: str
    tax_id: str | None = None
    address: str | None = None
    phone: str | None = None
    # Price suggestion for the UI, never used in order totals
    regular_price: Decimal | None = None


class Product(BaseModel):
    """A catalog product that STANDARD items point at."""

    id: str
    sku: str | None = None
    name: str
    unit: str | None = None
    default_price: Decimal | None = None


class User(BaseModel):
    """The staff member who owns a purchase order."""

    id: str
    name: str
    email: str | None = None
    role: str | None = None
