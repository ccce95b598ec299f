"""In-memory restaurant state store."""
import logging
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from restaurant_ops.services.restaurant.models import (
    MenuItem,
    MenuItemDraft,
    Order,
    OrderItem,
    OrderStatus,
    RestaurantSnapshot,
    Table,
    TableStatus,
)
from restaurant_ops.services.restaurant.pricing import MenuIndex, build_menu_index
from restaurant_ops.services.restaurant.utils import uid

logger = logging.getLogger(__name__)

StoreListener = Callable[[RestaurantSnapshot], None]


class OrderEvent(str, Enum):
    """Order lifecycle events that touch table status."""

    CREATED = "created"
    STATUS_CHANGED = "status_changed"

    def __str__(self) -> str:
        """Return the string value of the event."""
        return self.value


class RestaurantStore:
    """
    Sole owner of the menu, table and order collections.

    Every mutation swaps in a rebuilt collection instead of editing models in
    place, so snapshots handed out earlier never change underneath a reader.
    Listeners are called with a fresh snapshot after each mutation.
    """

    def __init__(
        self,
        menu_items: Optional[List[MenuItem]] = None,
        tables: Optional[List[Table]] = None,
        orders: Optional[List[Order]] = None,
    ):
        self._menu_items: List[MenuItem] = list(menu_items or [])
        self._tables: List[Table] = list(tables or [])
        self._orders: List[Order] = list(orders or [])
        self._listeners: List[StoreListener] = []

    @classmethod
    def from_snapshot(cls, snapshot: RestaurantSnapshot) -> "RestaurantStore":
        """Build a store from a persisted snapshot."""
        return cls(
            menu_items=snapshot.menu_items,
            tables=snapshot.tables,
            orders=snapshot.orders,
        )

    # ----- reads -----

    def snapshot(self) -> RestaurantSnapshot:
        """Get an immutable copy of the current collections."""
        return RestaurantSnapshot(
            menu_items=list(self._menu_items),
            tables=list(self._tables),
            orders=list(self._orders),
        )

    @property
    def menu_items(self) -> List[MenuItem]:
        return list(self._menu_items)

    @property
    def tables(self) -> List[Table]:
        return list(self._tables)

    @property
    def orders(self) -> List[Order]:
        return list(self._orders)

    def menu_index(self) -> MenuIndex:
        """Map menu item ids to menu items."""
        return build_menu_index(self._menu_items)

    def get_menu_item(self, item_id: str) -> Optional[MenuItem]:
        return next((item for item in self._menu_items if item.id == item_id), None)

    def get_table(self, table_id: str) -> Optional[Table]:
        return next((table for table in self._tables if table.id == table_id), None)

    def get_order(self, order_id: str) -> Optional[Order]:
        return next((order for order in self._orders if order.id == order_id), None)

    def search_menu(self, query: str = "") -> List[MenuItem]:
        """Menu items whose name or category contains query, case-insensitive."""
        needle = query.lower().strip()
        return [
            item
            for item in self._menu_items
            if needle in f"{item.name} {item.category}".lower()
        ]

    def list_tables(self, status: Optional[TableStatus] = None) -> List[Table]:
        """Get tables, optionally only those with the given status."""
        if status is None:
            return list(self._tables)
        return [table for table in self._tables if table.status == status]

    def orders_for_table(self, table_id: str) -> List[Order]:
        return [order for order in self._orders if order.table_id == table_id]

    def first_order_with_status(self, status: OrderStatus) -> Optional[Order]:
        """First order in collection order (newest first) with the status."""
        return next((order for order in self._orders if order.status == status), None)

    # ----- change notification -----

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every mutation.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ----- menu mutations -----

    def create_menu_item(self, draft: MenuItemDraft) -> MenuItem:
        """Append a new menu item with a fresh id."""
        item = MenuItem(id=uid(), **draft.model_dump())
        self._menu_items = [*self._menu_items, item]
        logger.info(f"[STORE] Menu item created - id: {item.id}, name: {item.name}")
        self._notify()
        return item

    def update_menu_item(self, item: MenuItem) -> None:
        """Replace the menu item with the same id. Unknown ids are ignored."""
        if self.get_menu_item(item.id) is None:
            logger.debug(f"[STORE] Update skipped, unknown menu item: {item.id}")
            return
        self._menu_items = [item if m.id == item.id else m for m in self._menu_items]
        logger.info(f"[STORE] Menu item updated - id: {item.id}")
        self._notify()

    def delete_menu_item(self, item_id: str) -> None:
        """Remove a menu item. Orders that reference it are left untouched."""
        self._menu_items = [m for m in self._menu_items if m.id != item_id]
        logger.info(f"[STORE] Menu item deleted - id: {item_id}")
        self._notify()

    # ----- order and table mutations -----

    def create_order(
        self, table_id: str, items: List[OrderItem], now: Optional[datetime] = None
    ) -> Order:
        """
        Create an in-progress order at the front of the order list.

        The caller is expected to pass a table id and at least one line.
        The table becomes occupied whatever its previous status.
        """
        order = Order(
            id=uid(),
            table_id=table_id,
            items=list(items),
            status=OrderStatus.IN_PROGRESS,
            created_at=now or datetime.now(),
        )
        self._orders = [order, *self._orders]
        logger.info(
            f"[STORE] Order created - id: {order.id}, table: {table_id}, lines: {len(items)}"
        )
        self._apply_order_event(OrderEvent.CREATED, order)
        self._notify()
        return order

    def update_order_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """
        Set an order's status.

        No lifecycle check happens here. Moving to paid sends the order's table
        to needs_cleaning whatever its previous status.

        Returns:
            The updated order, or None if the id is unknown
        """
        current = self.get_order(order_id)
        if current is None:
            logger.debug(f"[STORE] Status update skipped, unknown order: {order_id}")
            return None

        updated = current.model_copy(update={"status": status})
        self._orders = [updated if o.id == order_id else o for o in self._orders]
        logger.info(
            f"[STORE] Order status changed - id: {order_id}, "
            f"{current.status.value} -> {status.value}"
        )
        self._apply_order_event(OrderEvent.STATUS_CHANGED, updated)
        self._notify()
        return updated

    def mark_table_clean(self, table_id: str) -> None:
        """Set a table to available, regardless of its status or open orders."""
        self._set_table_status(table_id, TableStatus.AVAILABLE)
        self._notify()

    def _apply_order_event(self, event: OrderEvent, order: Order) -> None:
        """Single point where order events drive table status."""
        if event == OrderEvent.CREATED:
            self._set_table_status(order.table_id, TableStatus.OCCUPIED)
        elif order.status == OrderStatus.PAID:
            self._set_table_status(order.table_id, TableStatus.NEEDS_CLEANING)

    def _set_table_status(self, table_id: str, status: TableStatus) -> None:
        self._tables = [
            table.model_copy(update={"status": status}) if table.id == table_id else table
            for table in self._tables
        ]
        logger.info(f"[STORE] Table status set - id: {table_id}, status: {status.value}")
