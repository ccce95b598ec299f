"""Order composition before submission to the store."""
import logging
from datetime import datetime
from typing import List, Optional

from restaurant_ops.services.restaurant.models import Order, OrderItem, OrderStatus
from restaurant_ops.services.restaurant.pricing import compute_order_total
from restaurant_ops.services.restaurant.store import RestaurantStore

logger = logging.getLogger(__name__)


class OrderComposer:
    """
    Builds up a new order for one table.

    The store trusts its input, so this is where an order without a table or
    without lines gets refused.
    """

    def __init__(self, store: RestaurantStore):
        self.store = store
        self.table_id: Optional[str] = None
        self.lines: List[OrderItem] = []

    def select_table(self, table_id: Optional[str]) -> None:
        self.table_id = table_id or None

    def add_item(self, menu_item_id: str) -> None:
        """Add one unit of a menu item, merging into an existing plain line."""
        for idx, line in enumerate(self.lines):
            if line.menu_item_id == menu_item_id and not line.modifier_name:
                self.lines[idx] = line.model_copy(update={"qty": line.qty + 1})
                return
        self.lines.append(OrderItem(menu_item_id=menu_item_id, qty=1))

    def add_line(self, line: OrderItem) -> None:
        """Add a fully specified line as-is."""
        self.lines.append(line)

    def increment(self, idx: int) -> None:
        line = self.lines[idx]
        self.lines[idx] = line.model_copy(update={"qty": line.qty + 1})

    def decrement(self, idx: int) -> None:
        """Remove one unit; a line at qty 1 is dropped."""
        line = self.lines[idx]
        if line.qty > 1:
            self.lines[idx] = line.model_copy(update={"qty": line.qty - 1})
        else:
            del self.lines[idx]

    def set_modifier(self, idx: int, modifier_name: Optional[str]) -> None:
        self.lines[idx] = self.lines[idx].model_copy(
            update={"modifier_name": modifier_name or None}
        )

    @property
    def can_submit(self) -> bool:
        return bool(self.table_id) and len(self.lines) > 0

    def preview_total(self) -> float:
        """Total the draft would have at current menu prices."""
        draft = Order(
            id="draft",
            table_id=self.table_id or "",
            items=self.lines,
            status=OrderStatus.IN_PROGRESS,
            created_at=datetime.now(),
        )
        return compute_order_total(draft, self.store.menu_index())

    def submit(self, now: Optional[datetime] = None) -> Optional[Order]:
        """
        Create the order in the store and clear the lines.

        Returns:
            The created order, or None if no table is selected or there are no lines
        """
        if not self.can_submit:
            logger.info(
                f"[COMPOSER] Submit refused - table: {self.table_id}, lines: {len(self.lines)}"
            )
            return None
        order = self.store.create_order(self.table_id, self.lines, now=now)
        self.lines = []
        return order
