"""Restaurant domain models."""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class TableStatus(str, Enum):
    """Physical table states."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    NEEDS_CLEANING = "needs_cleaning"

    def __str__(self) -> str:
        """Return the string value of the status."""
        return self.value


class OrderStatus(str, Enum):
    """Order lifecycle: in_progress -> served -> paid."""

    IN_PROGRESS = "in_progress"
    SERVED = "served"
    PAID = "paid"

    def __str__(self) -> str:
        """Return the string value of the status."""
        return self.value

    @property
    def rank(self) -> int:
        """Position of the status in the lifecycle."""
        return list(OrderStatus).index(self)

    def can_advance_to(self, new_status: "OrderStatus") -> bool:
        """Check whether moving to new_status keeps the lifecycle forward-only."""
        return new_status.rank >= self.rank


# Statuses whose orders count as realized revenue
REVENUE_STATUSES = (OrderStatus.SERVED, OrderStatus.PAID)


class Modifier(BaseModel):
    """Named price adjustment available on a menu item."""

    name: str
    price_delta: float = 0.0


class MenuItemDraft(BaseModel):
    """Menu item fields before an id is assigned."""

    name: str
    category: str = ""
    price: float = Field(default=0.0, ge=0)
    modifiers: List[Modifier] = []


class MenuItem(MenuItemDraft):
    """Menu item model."""

    id: str

    def find_modifier(self, modifier_name: Optional[str]) -> Optional[Modifier]:
        """Get a modifier by exact name."""
        if not modifier_name:
            return None
        for modifier in self.modifiers:
            if modifier.name == modifier_name:
                return modifier
        return None


class Table(BaseModel):
    """Physical table model."""

    id: str
    name: str
    status: TableStatus = TableStatus.AVAILABLE


class OrderItem(BaseModel):
    """Single order line referencing a menu item by id."""

    menu_item_id: str
    modifier_name: Optional[str] = None
    qty: int = Field(default=1, gt=0)


class Order(BaseModel):
    """Order model."""

    id: str
    table_id: str
    items: List[OrderItem]
    status: OrderStatus = OrderStatus.IN_PROGRESS
    created_at: datetime


class RestaurantSnapshot(BaseModel):
    """Point-in-time copy of the three store collections."""

    menu_items: List[MenuItem] = []
    tables: List[Table] = []
    orders: List[Order] = []
