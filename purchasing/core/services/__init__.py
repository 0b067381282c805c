"""
Core business logic services.

Layer-pure services that depend only on:
- purchasing/core/entities/*
- purchasing/core/interfaces/*
- purchasing/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from purchasing.core.services.order_assembly import (
    AssembledOrder,
    OrderAssembler,
    UserFallback,
)
from purchasing.core.services.pricing import (
    MONEY_QUANTUM,
    OrderTotals,
    compute_totals,
    round_money,
)
from purchasing.core.services.sequence import (
    OrderNumberAllocator,
    buddhist_date_part,
    business_today,
)
from purchasing.core.services.status_guard import (
    ALLOWED_TRANSITIONS,
    DeletePolicy,
    allowed_targets,
    can_transition,
    ensure_deletable,
    ensure_transition,
)

__all__ = [
    # Pricing
    "MONEY_QUANTUM",
    "OrderTotals",
    "compute_totals",
    "round_money",
    # Sequence
    "OrderNumberAllocator",
    "buddhist_date_part",
    "business_today",
    # Status
    "ALLOWED_TRANSITIONS",
    "DeletePolicy",
    "allowed_targets",
    "can_transition",
    "ensure_deletable",
    "ensure_transition",
    # Assembly
    "OrderAssembler",
    "AssembledOrder",
    "UserFallback",
]
