"""
Order assembly.

Turns raw order input into a priced, reference-checked set of line items.
Runs against an ``IReferenceLookup`` bound to the caller's transaction, so
every check sees the same snapshot the subsequent write commits against.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from purchasing.config import get_logger
from purchasing.core.entities.purchase_order import ItemType, LineItem
from purchasing.core.entities.reference import Supplier, User
from purchasing.core.exceptions import (
    ProductsNotFoundError,
    SupplierNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from purchasing.core.interfaces.order_store import IReferenceLookup
from purchasing.core.services.pricing import (
    DEFAULT_VAT_RATE,
    ZERO,
    OrderTotals,
    compute_totals,
)

logger = get_logger(__name__)


class UserFallback(str, Enum):
    """What to do when an order arrives without a user_id."""

    REQUIRED = "required"
    CONFIGURED = "configured"
    FIRST_USER = "first_user"


@dataclass
class AssembledOrder:
    """Everything a create or replace needs to write."""

    supplier: Supplier
    user: User
    totals: OrderTotals


class OrderAssembler:
    """
    Validates references and prices an order.

    Holds no state between calls. Construct once per request (or share)
    and pass the transaction-bound lookup into each method.
    """

    def __init__(
        self,
        vat_rate: Decimal = DEFAULT_VAT_RATE,
        user_fallback: UserFallback = UserFallback.REQUIRED,
        default_user_id: str | None = None,
    ):
        self.vat_rate = vat_rate
        self.user_fallback = UserFallback(user_fallback)
        self.default_user_id = default_user_id

    async def resolve_user(self, refs: IReferenceLookup, user_id: str | None) -> User:
        """
        Load the order owner, applying the fallback policy when user_id is absent.

        Raises:
            ValidationError: user_id missing and the policy does not supply one
            UserNotFoundError: the resolved user does not exist
        """
        if user_id:
            user = await refs.get_user(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            return user

        if self.user_fallback == UserFallback.CONFIGURED:
            if not self.default_user_id:
                raise ValidationError("user_id", "required and no default user is configured")
            user = await refs.get_user(self.default_user_id)
            if user is None:
                raise UserNotFoundError(self.default_user_id)
            return user

        if self.user_fallback == UserFallback.FIRST_USER:
            user = await refs.get_first_user()
            if user is None:
                raise UserNotFoundError(None)
            logger.warning("user_fallback_first_user", user_id=user.id)
            return user

        raise ValidationError("user_id", "is required")

    async def verify_supplier(self, refs: IReferenceLookup, supplier_id: str) -> Supplier:
        supplier = await refs.get_supplier(supplier_id)
        if supplier is None:
            raise SupplierNotFoundError(supplier_id)
        return supplier

    async def resolve_products(
        self,
        refs: IReferenceLookup,
        lines: Sequence[LineItem],
    ) -> list[LineItem]:
        """
        Check every referenced product in one query and snapshot names.

        Items referencing a product get its current name as item_name when
        they carry none of their own, and the product attached for display.

        Raises:
            ValidationError: an item lacks the identity its type requires
            ProductsNotFoundError: lists every missing product id
        """
        for index, line in enumerate(lines):
            if line.item_type == ItemType.STANDARD and not line.product_id:
                raise ValidationError(
                    f"items[{index}].product_id", "is required for STANDARD items"
                )
            if not line.product_id and not line.item_name:
                raise ValidationError(
                    f"items[{index}]",
                    f"{line.item_type.value} items need a product_id or an item_name",
                )

        wanted = list(dict.fromkeys(line.product_id for line in lines if line.product_id))
        products = await refs.get_products(wanted) if wanted else {}

        missing = [product_id for product_id in wanted if product_id not in products]
        if missing:
            raise ProductsNotFoundError(missing)

        resolved: list[LineItem] = []
        for line in lines:
            if not line.product_id:
                resolved.append(line)
                continue
            product = products[line.product_id]
            resolved.append(
                line.model_copy(
                    update={
                        "item_name": line.item_name or product.name,
                        "product": product,
                    }
                )
            )
        return resolved

    async def assemble(
        self,
        refs: IReferenceLookup,
        supplier_id: str,
        user_id: str | None,
        lines: Sequence[LineItem],
        discount_amount: Decimal = ZERO,
        shipping_cost: Decimal = ZERO,
    ) -> AssembledOrder:
        """
        Run every check and price the order.

        Nothing is written here; any exception leaves the transaction clean.

        Args:
            refs: Lookup bound to the current transaction
            supplier_id: Supplier the order is issued to
            user_id: Order owner, or None to apply the fallback policy
            lines: Unpriced items
            discount_amount: Order-level discount
            shipping_cost: Shipping added after VAT

        Returns:
            AssembledOrder with the loaded supplier, user and priced lines
        """
        if not lines:
            raise ValidationError("items", "At least one item is required")

        user = await self.resolve_user(refs, user_id)
        supplier = await self.verify_supplier(refs, supplier_id)
        resolved = await self.resolve_products(refs, lines)

        totals = compute_totals(
            resolved,
            discount_amount=discount_amount,
            shipping_cost=shipping_cost,
            vat_rate=self.vat_rate,
        )
        return AssembledOrder(supplier=supplier, user=user, totals=totals)
