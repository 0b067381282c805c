"""
Order number allocation.

Order numbers look like ``PO25690219-P007``: a fixed prefix, the issue
date in the Buddhist era (Gregorian year + 543), a marker, and a per-day
sequence zero-padded to three digits. Past 999 the sequence widens to
four digits and beyond; lookups order by length first so widened numbers
still sort last.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from purchasing.config import get_logger
from purchasing.core.exceptions import ValidationError
from purchasing.core.interfaces.order_store import IPurchaseOrderRepository

logger = get_logger(__name__)

BUDDHIST_ERA_OFFSET = 543


def buddhist_date_part(day: date) -> str:
    """Format a date as YYYYMMDD with a Buddhist-era year."""
    return f"{day.year + BUDDHIST_ERA_OFFSET:04d}{day.month:02d}{day.day:02d}"


def business_today(timezone: str) -> date:
    """Current calendar date in the organization's timezone."""
    return datetime.now(ZoneInfo(timezone)).date()


class OrderNumberAllocator:
    """Derives the next order number from the highest one issued today."""

    def __init__(
        self,
        prefix: str = "PO",
        marker: str = "-P",
        width: int = 3,
    ):
        if not marker:
            raise ValueError("marker must not be empty")
        self.prefix = prefix
        self.marker = marker
        self.width = width

    def prefix_for(self, day: date) -> str:
        """Prefix shared by every order number issued on ``day``."""
        return f"{self.prefix}{buddhist_date_part(day)}{self.marker}"

    def next_number(self, day: date, last_number: str | None) -> str:
        """
        Compute the order number following ``last_number``.

        Args:
            day: Business date the order is issued on
            last_number: Highest existing number with the same prefix, or None

        Returns:
            Next order number, ``...001`` when nothing was issued yet

        Raises:
            ValidationError: last_number does not belong to the prefix or has
                a non-numeric sequence
        """
        prefix = self.prefix_for(day)
        if last_number is None:
            return f"{prefix}{1:0{self.width}d}"

        if not last_number.startswith(prefix):
            raise ValidationError(
                "po_number",
                f"does not belong to prefix {prefix}",
                last_number,
            )

        _, _, suffix = last_number.rpartition(self.marker)
        if not suffix.isdigit():
            raise ValidationError("po_number", "sequence suffix is not numeric", last_number)

        sequence = int(suffix) + 1
        return f"{prefix}{sequence:0{self.width}d}"

    async def allocate(self, orders: IPurchaseOrderRepository, day: date) -> str:
        """
        Read the highest number for ``day`` and return its successor.

        Must run inside the same transaction as the insert that uses the
        number; the insert is still guarded by the UNIQUE constraint.
        """
        prefix = self.prefix_for(day)
        last_number = await orders.get_last_number(prefix)
        po_number = self.next_number(day, last_number)
        logger.debug(
            "order_number_allocated",
            prefix=prefix,
            last_number=last_number,
            po_number=po_number,
        )
        return po_number
