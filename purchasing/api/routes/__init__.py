"""API route modules."""

from purchasing.api.routes.health import router as health_router
from purchasing.api.routes.purchase_orders import router as purchase_orders_router

__all__ = [
    "health_router",
    "purchase_orders_router",
]
