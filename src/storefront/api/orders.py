"""FastAPI endpoints for order placement, lifecycle and queries."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.principal import Principal, get_principal, require_admin
from storefront.api.schemas import (
    OrderIdResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatsResponse,
    PaginationSchema,
    PlaceOrderRequest,
    UpdateOrderStatusRequest,
)
from storefront.order.lifecycle import CancelOrder, UpdateOrderStatus
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.queries import OrderQuery
from storefront.utils.concurrency import process_with_retry

order_router = APIRouter(prefix="/api/orders", tags=["orders"])


def _order_list(page) -> OrderListResponse:
    return OrderListResponse(
        orders=[OrderResponse.from_order(order) for order in page.items],
        pagination=PaginationSchema.from_page(page),
    )


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest, principal: Principal = Depends(get_principal)) -> OrderIdResponse:
    command = PlaceOrder(
        user_id=principal.user_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
    )
    result = process_with_retry(command)
    return OrderIdResponse(order_id=result)


@order_router.get("/my", response_model=OrderListResponse)
async def my_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    principal: Principal = Depends(get_principal),
) -> OrderListResponse:
    result = current_domain.repository_for(Order).for_user(principal.user_id, page=page, limit=limit)
    return _order_list(result)


@order_router.get("/stats", response_model=OrderStatsResponse)
async def order_statistics(principal: Principal = Depends(require_admin)) -> OrderStatsResponse:
    return OrderStatsResponse(**current_domain.repository_for(Order).statistics())


@order_router.get("", response_model=OrderListResponse)
async def list_orders(
    order_status: str | None = None,
    payment_status: str | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    principal: Principal = Depends(require_admin),
) -> OrderListResponse:
    query = OrderQuery(
        order_status=order_status,
        payment_status=payment_status,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = current_domain.repository_for(Order).search(query)
    return _order_list(result)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(get_principal)) -> OrderResponse:
    order = current_domain.repository_for(Order).fetch_visible(
        order_id, principal.user_id, is_admin=principal.is_admin
    )
    return OrderResponse.from_order(order)


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(require_admin),
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        updated_by=principal.user_id,
        order_status=body.order_status,
        payment_status=body.payment_status,
    )
    process_with_retry(command)
    return OrderResponse.from_order(current_domain.repository_for(Order).fetch(order_id))


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, principal: Principal = Depends(get_principal)) -> OrderResponse:
    command = CancelOrder(order_id=order_id, user_id=principal.user_id, is_admin=principal.is_admin)
    process_with_retry(command)
    return OrderResponse.from_order(current_domain.repository_for(Order).fetch(order_id))
