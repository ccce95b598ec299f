"""Table API endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from restaurant_ops.api.orders import OrderResponse, to_order_response
from restaurant_ops.core.dependencies import get_store
from restaurant_ops.services.restaurant.models import Table, TableStatus
from restaurant_ops.services.restaurant.store import RestaurantStore

router = APIRouter()
logger = logging.getLogger(__name__)


def _require_table(store: RestaurantStore, table_id: str) -> Table:
    table = store.get_table(table_id)
    if table is None:
        raise HTTPException(status_code=404, detail=f"Table '{table_id}' not found")
    return table


@router.get("/api/tables", response_model=List[Table])
async def list_tables(
    status: Optional[TableStatus] = None,
    store: RestaurantStore = Depends(get_store),
):
    """Get tables, optionally filtered by status."""
    return store.list_tables(status)


@router.get("/api/tables/{table_id}/orders", response_model=List[OrderResponse])
async def get_table_orders(
    table_id: str,
    store: RestaurantStore = Depends(get_store),
):
    """Get every order placed at a table, newest first."""
    _require_table(store, table_id)
    menu_index = store.menu_index()
    return [to_order_response(order, menu_index) for order in store.orders_for_table(table_id)]


@router.post("/api/tables/{table_id}/clean", response_model=Table)
async def mark_table_clean(
    table_id: str,
    store: RestaurantStore = Depends(get_store),
):
    """Mark a table as cleaned and available."""
    _require_table(store, table_id)
    store.mark_table_clean(table_id)
    logger.info(f"[TABLES] Table {table_id} marked clean")
    return store.get_table(table_id)
