"""FastAPI endpoints for the Order service."""

import json
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query, Response
from protean.utils.globals import current_domain

from orders.api.schemas import (
    CreateOrderRequest,
    HealthResponse,
    OrderItemResponse,
    OrderPageResponse,
    OrderResponse,
    ShippingAddressResponse,
    StatusChangeResponse,
    UpdateOrderRequest,
)
from orders.order.creation import CreateOrder
from orders.order.modification import UpdateOrder
from orders.order.queries import get_order, list_orders
from orders.order.removal import DeleteOrder
from shared.security import TokenUser, get_current_user

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _order(order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        id=str(order.id),
        order_number=order.order_number,
        customer_id=str(order.customer_id),
        status=order.status,
        order_date=order.order_date,
        sub_total=order.sub_total,
        tax_amount=order.tax_amount,
        shipping_cost=order.shipping_cost,
        total_amount=order.total_amount,
        shipping_address=(
            ShippingAddressResponse(
                address=address.address,
                city=address.city,
                zip_code=address.zip_code,
                country=address.country,
            )
            if address
            else None
        ),
        notes=order.notes,
        items=[
            OrderItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                product_name=item.product_name,
                product_sku=item.product_sku,
                quantity=item.quantity,
                unit_price=item.unit_price,
                discount=item.discount or 0.0,
                total_price=item.total_price,
                notes=item.notes,
            )
            for item in order.items
        ],
        status_history=[
            StatusChangeResponse(
                previous_status=change.previous_status,
                new_status=change.new_status,
                changed_at=change.changed_at,
                changed_by=change.changed_by,
                reason=change.reason,
                comments=change.comments,
            )
            for change in sorted(order.status_history or [], key=lambda c: c.changed_at)
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(service="OrderService", timestamp=datetime.now(UTC))


@router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, user: TokenUser = Depends(get_current_user)) -> OrderResponse:
    command = CreateOrder(
        customer_id=body.customer_id,
        items=json.dumps([item.model_dump(exclude_none=True) for item in body.items]),
        notes=body.notes,
        shipping_address=body.shipping_address,
        shipping_city=body.shipping_city,
        shipping_zip_code=body.shipping_zip_code,
        shipping_country=body.shipping_country,
        created_by=user.id,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _order(get_order(order_id))


@router.get("", response_model=OrderPageResponse)
async def get_orders(
    page: int = Query(1),
    page_size: int = Query(10, alias="pageSize"),
    customer_id: str | None = Query(None, alias="customerId"),
    status: str | None = Query(None),
    from_date: datetime | None = Query(None, alias="fromDate"),
    to_date: datetime | None = Query(None, alias="toDate"),
    order_number: str | None = Query(None, alias="orderNumber"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_direction: str = Query("asc", alias="sortDirection"),
    user: TokenUser = Depends(get_current_user),
) -> OrderPageResponse:
    result = list_orders(
        page=page,
        page_size=page_size,
        customer_id=customer_id,
        status=status,
        from_date=from_date,
        to_date=to_date,
        order_number=order_number,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    return OrderPageResponse(
        items=[_order(o) for o in result.items],
        total_count=result.total_count,
        current_page=result.current_page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        has_previous=result.has_previous,
        has_next=result.has_next,
    )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order_by_id(order_id: str, user: TokenUser = Depends(get_current_user)) -> OrderResponse:
    return _order(get_order(order_id))


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: str,
    body: UpdateOrderRequest,
    user: TokenUser = Depends(get_current_user),
) -> OrderResponse:
    command = UpdateOrder(
        order_id=order_id,
        status=body.status,
        notes=body.notes,
        items=json.dumps([item.model_dump(exclude_none=True) for item in body.items]) if body.items else None,
        changed_by=user.id,
        reason=body.reason,
        comments=body.comments,
    )
    current_domain.process(command, asynchronous=False)
    return _order(get_order(order_id))


@router.delete("/{order_id}", status_code=204)
async def delete_order(order_id: str, user: TokenUser = Depends(get_current_user)) -> Response:
    current_domain.process(DeleteOrder(order_id=order_id, deleted_by=user.id), asynchronous=False)
    return Response(status_code=204)
