"""Menu API endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field, field_validator

from restaurant_ops.core.dependencies import get_store
from restaurant_ops.services.restaurant.models import MenuItem, MenuItemDraft, Modifier
from restaurant_ops.services.restaurant.store import RestaurantStore

router = APIRouter()
logger = logging.getLogger(__name__)


class MenuItemRequest(BaseModel):
    """Menu item create/update request."""
    name: str
    category: str = ""
    price: float = Field(ge=0)
    modifiers: List[Modifier] = []

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class MenuResponse(BaseModel):
    """Menu response model."""
    items: List[MenuItem]
    categories: List[str] = []


@router.get("/api/menu", response_model=MenuResponse)
async def get_menu(
    request: Request,
    q: Optional[str] = None,
    store: RestaurantStore = Depends(get_store),
):
    """Get the menu, optionally filtered by name or category."""
    logger.info(
        f"[MENU] Request received - query: {q!r}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )
    items = store.search_menu(q or "")
    categories: List[str] = []
    for item in items:
        if item.category and item.category not in categories:
            categories.append(item.category)
    logger.info(f"[MENU] Menu loaded - {len(items)} items, {len(categories)} categories")
    return MenuResponse(items=items, categories=categories)


@router.post("/api/menu/items", response_model=MenuItem)
async def create_menu_item(
    item_req: MenuItemRequest,
    store: RestaurantStore = Depends(get_store),
):
    """Create a menu item."""
    return store.create_menu_item(MenuItemDraft(**item_req.model_dump()))


@router.put("/api/menu/items/{item_id}", response_model=MenuItem)
async def update_menu_item(
    item_id: str,
    item_req: MenuItemRequest,
    store: RestaurantStore = Depends(get_store),
):
    """Replace a menu item."""
    if store.get_menu_item(item_id) is None:
        raise HTTPException(status_code=404, detail=f"Menu item '{item_id}' not found")
    item = MenuItem(id=item_id, **item_req.model_dump())
    store.update_menu_item(item)
    return item


@router.delete("/api/menu/items/{item_id}")
async def delete_menu_item(
    item_id: str,
    store: RestaurantStore = Depends(get_store),
):
    """Delete a menu item. Existing orders keep their lines."""
    if store.get_menu_item(item_id) is None:
        raise HTTPException(status_code=404, detail=f"Menu item '{item_id}' not found")
    store.delete_menu_item(item_id)
    return {"success": True, "message": f"Menu item '{item_id}' deleted"}
