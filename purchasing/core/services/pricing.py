"""
Monetary computation for purchase orders.

Pure and deterministic. Every line total is rounded to 8 decimal places
before it is summed, so the subtotal is reproducible from the stored
line totals alone.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext

from purchasing.core.entities.purchase_order import LineItem
from purchasing.core.exceptions import ValidationError

MONEY_QUANTUM = Decimal("0.00000001")
DEFAULT_VAT_RATE = Decimal("0.07")
ZERO = Decimal("0")

# 8 fractional digits leave 56 for the integer part
MONEY_CONTEXT = Context(prec=64, rounding=ROUND_HALF_UP)


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a number to Decimal without binary float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Decimal) -> Decimal:
    """Round to the fixed 8-decimal money precision."""
    return value.quantize(MONEY_QUANTUM, context=MONEY_CONTEXT)


@dataclass(frozen=True)
class OrderTotals:
    """Result of pricing a set of line items."""

    lines: list[LineItem]
    subtotal: Decimal
    discount_amount: Decimal
    vat_amount: Decimal
    shipping_cost: Decimal
    grand_total: Decimal


def compute_totals(
    lines: Sequence[LineItem],
    discount_amount: Decimal | int | float | str = ZERO,
    shipping_cost: Decimal | int | float | str = ZERO,
    vat_rate: Decimal | int | float | str = DEFAULT_VAT_RATE,
) -> OrderTotals:
    """
    Price line items and derive order totals.

    VAT is charged on the discounted subtotal:

        total_price = round(quantity * unit_price)
        subtotal    = round(sum(total_price))
        vat_amount  = round((subtotal - discount_amount) * vat_rate)
        grand_total = round(subtotal - discount_amount + vat_amount + shipping_cost)

    Args:
        lines: Items to price; their total_price is ignored and recomputed
        discount_amount: Order-level discount, applied before VAT
        shipping_cost: Added after VAT
        vat_rate: Fraction, e.g. 0.07

    Returns:
        OrderTotals with copies of the lines carrying their total_price

    Raises:
        ValidationError: empty item list or out-of-range amounts
    """
    if not lines:
        raise ValidationError("items", "At least one item is required")

    try:
        with localcontext(MONEY_CONTEXT):
            return _price(lines, discount_amount, shipping_cost, vat_rate)
    except InvalidOperation as e:
        raise ValidationError(
            "items", "amount exceeds the supported money precision"
        ) from e


def _price(
    lines: Sequence[LineItem],
    discount_amount: Decimal | int | float | str,
    shipping_cost: Decimal | int | float | str,
    vat_rate: Decimal | int | float | str,
) -> OrderTotals:
    discount = round_money(to_decimal(discount_amount))
    shipping = round_money(to_decimal(shipping_cost))
    rate = to_decimal(vat_rate)

    if discount < 0:
        raise ValidationError("discount_amount", "must be non-negative", discount)
    if shipping < 0:
        raise ValidationError("shipping_cost", "must be non-negative", shipping)
    if rate < 0:
        raise ValidationError("vat_rate", "must be non-negative", rate)

    priced: list[LineItem] = []
    for index, line in enumerate(lines):
        quantity = to_decimal(line.quantity)
        unit_price = to_decimal(line.unit_price)
        if quantity <= 0:
            raise ValidationError(f"items[{index}].quantity", "must be positive", quantity)
        if unit_price < 0:
            raise ValidationError(
                f"items[{index}].unit_price", "must be non-negative", unit_price
            )
        priced.append(
            line.model_copy(
                update={
                    "quantity": quantity,
                    "unit_price": unit_price,
                    "total_price": round_money(quantity * unit_price),
                }
            )
        )

    subtotal = round_money(sum((line.total_price for line in priced), ZERO))
    vat_amount = round_money((subtotal - discount) * rate)
    grand_total = round_money(subtotal - discount + vat_amount + shipping)

    return OrderTotals(
        lines=priced,
        subtotal=subtotal,
        discount_amount=discount,
        vat_amount=vat_amount,
        shipping_cost=shipping,
        grand_total=grand_total,
    )
