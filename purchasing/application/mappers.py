"""Entity to response DTO conversion shared by the purchase order use cases."""

from purchasing.application.dto.responses import (
    LineItemResponse,
    ProductRefResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
    SupplierRefResponse,
    UserRefResponse,
)
from purchasing.core.entities.purchase_order import (
    LineItem,
    PurchaseOrder,
    PurchaseOrderPage,
)
from purchasing.core.services.status_guard import allowed_targets


def to_line_item_response(item: LineItem) -> LineItemResponse:
    product = item.product
    return LineItemResponse(
        id=item.id,  # type: ignore[arg-type]
        product_id=item.product_id,
        item_name=item.item_name,
        display_name=item.display_name,
        item_type=item.item_type,
        quantity=item.quantity,
        unit_price=item.unit_price,
        total_price=item.total_price,
        product=ProductRefResponse(
            id=product.id,
            sku=product.sku,
            name=product.name,
            unit=product.unit,
        )
        if product
        else None,
    )


def to_order_response(order: PurchaseOrder) -> PurchaseOrderResponse:
    """Convert a hydrated order to its API shape."""
    supplier = order.supplier
    user = order.user
    return PurchaseOrderResponse(
        id=order.id,  # type: ignore[arg-type]
        po_number=order.po_number,
        status=order.status,
        supplier_id=order.supplier_id,
        user_id=order.user_id,
        issue_date=order.issue_date,
        delivery_date=order.delivery_date,
        subtotal=order.subtotal,
        discount_amount=order.discount_amount,
        vat_amount=order.vat_amount,
        shipping_cost=order.shipping_cost,
        grand_total=order.grand_total,
        notes=order.notes,
        items=[to_line_item_response(item) for item in order.items],
        supplier=SupplierRefResponse(
            id=supplier.id,
            company_name=supplier.company_name,
            tax_id=supplier.tax_id,
            address=supplier.address,
            phone=supplier.phone,
            regular_price=supplier.regular_price,
        )
        if supplier
        else None,
        user=UserRefResponse(id=user.id, name=user.name, email=user.email) if user else None,
        allowed_transitions=allowed_targets(order.status),
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def to_order_list_response(page: PurchaseOrderPage) -> PurchaseOrderListResponse:
    return PurchaseOrderListResponse(
        orders=[to_order_response(order) for order in page.orders],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
        has_more=page.has_more,
    )
