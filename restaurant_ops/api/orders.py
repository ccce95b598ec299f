"""Order API endpoints."""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from restaurant_ops.core.dependencies import get_store
from restaurant_ops.services.restaurant.composer import OrderComposer
from restaurant_ops.services.restaurant.metrics import orders_by_status
from restaurant_ops.services.restaurant.models import Order, OrderItem, OrderStatus
from restaurant_ops.services.restaurant.pricing import MenuIndex, compute_order_total
from restaurant_ops.services.restaurant.store import RestaurantStore
from restaurant_ops.services.restaurant.utils import currency

router = APIRouter()
logger = logging.getLogger(__name__)


class CreateOrderRequest(BaseModel):
    """New order request."""
    table_id: Optional[str] = None
    items: List[OrderItem] = []


class UpdateOrderStatusRequest(BaseModel):
    """Order status change request."""
    status: OrderStatus


class OrderResponse(BaseModel):
    """Order response model."""
    id: str
    table_id: str
    items: List[OrderItem]
    status: OrderStatus
    created_at: datetime
    total: float
    total_display: str


def to_order_response(order: Order, menu_index: MenuIndex) -> OrderResponse:
    """Attach the current total to an order."""
    total = compute_order_total(order, menu_index)
    return OrderResponse(
        **order.model_dump(),
        total=total,
        total_display=currency(total),
    )


@router.get("/api/orders", response_model=List[OrderResponse])
async def list_orders(
    status: Optional[OrderStatus] = None,
    store: RestaurantStore = Depends(get_store),
):
    """Get orders newest first, optionally filtered by status."""
    menu_index = store.menu_index()
    return [
        to_order_response(order, menu_index)
        for order in store.orders
        if status is None or order.status == status
    ]


@router.get("/api/orders/board", response_model=Dict[OrderStatus, List[OrderResponse]])
async def get_order_board(store: RestaurantStore = Depends(get_store)):
    """Get orders grouped into one column per status."""
    menu_index = store.menu_index()
    return {
        status: [to_order_response(order, menu_index) for order in orders]
        for status, orders in orders_by_status(store.orders).items()
    }


@router.post("/api/orders", response_model=OrderResponse)
async def create_order(
    request: Request,
    order_req: CreateOrderRequest,
    store: RestaurantStore = Depends(get_store),
):
    """Create an order for a table."""
    logger.info(
        f"[ORDERS] Create requested - table: {order_req.table_id}, "
        f"lines: {len(order_req.items)}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )
    if order_req.table_id and store.get_table(order_req.table_id) is None:
        raise HTTPException(status_code=404, detail=f"Table '{order_req.table_id}' not found")

    composer = OrderComposer(store)
    composer.select_table(order_req.table_id)
    for line in order_req.items:
        composer.add_line(line)

    order = composer.submit()
    if order is None:
        raise HTTPException(
            status_code=400, detail="An order needs a table and at least one item"
        )
    return to_order_response(order, store.menu_index())


@router.patch("/api/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    status_req: UpdateOrderStatusRequest,
    store: RestaurantStore = Depends(get_store),
):
    """Move an order forward in its lifecycle."""
    order = store.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order '{order_id}' not found")
    if not order.status.can_advance_to(status_req.status):
        raise HTTPException(
            status_code=409,
            detail=f"Cannot move order from {order.status.value} to {status_req.status.value}",
        )

    updated = store.update_order_status(order_id, status_req.status)
    return to_order_response(updated, store.menu_index())
