"""Seed data for a fresh restaurant state."""
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

import yaml

from restaurant_ops.services.restaurant.models import (
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    RestaurantSnapshot,
    Table,
    TableStatus,
)
from restaurant_ops.services.restaurant.store import RestaurantStore
from restaurant_ops.services.restaurant.utils import uid

logger = logging.getLogger(__name__)


class SeedDataProvider:
    """Seed data provider using a YAML menu file."""

    def __init__(
        self,
        menu_file: Optional[str] = None,
        table_count: int = 10,
        occupied_tables: int = 2,
    ):
        """Initialize with optional menu file path."""
        if menu_file is None:
            menu_file = Path(__file__).parent / "data" / "seed_menu.yaml"
        self.menu_file = Path(menu_file)
        self.table_count = table_count
        self.occupied_tables = occupied_tables

    def menu_items(self) -> List[MenuItem]:
        """Load seed menu items from YAML."""
        if not self.menu_file.exists():
            logger.warning(f"[SEED] Menu file not found: {self.menu_file}, starting with empty menu")
            return []
        with open(self.menu_file, "r") as f:
            data = yaml.safe_load(f) or {}
        return [MenuItem(**item) for item in data.get("items", [])]

    def tables(self) -> List[Table]:
        """Tables t1..tN, the first few already occupied."""
        return [
            Table(
                id=f"t{i + 1}",
                name=f"Table {i + 1}",
                status=TableStatus.OCCUPIED if i < self.occupied_tables else TableStatus.AVAILABLE,
            )
            for i in range(self.table_count)
        ]

    def orders(self, now: Optional[datetime] = None) -> List[Order]:
        """Four demo orders spread over today, yesterday and a week ago."""
        if now is None:
            now = datetime.now()

        def days_ago(n: int) -> datetime:
            return now - timedelta(days=n)

        return [
            Order(
                id=uid(),
                table_id="t1",
                items=[
                    OrderItem(menu_item_id="mi_pizza", qty=2),
                    OrderItem(menu_item_id="mi_coffee", modifier_name="Oat Milk", qty=2),
                ],
                status=OrderStatus.IN_PROGRESS,
                created_at=now,
            ),
            Order(
                id=uid(),
                table_id="t2",
                items=[
                    OrderItem(menu_item_id="mi_burger", modifier_name="Bacon", qty=1),
                    OrderItem(menu_item_id="mi_salad", modifier_name="Grilled Chicken", qty=1),
                ],
                status=OrderStatus.SERVED,
                created_at=now,
            ),
            Order(
                id=uid(),
                table_id="t3",
                items=[
                    OrderItem(menu_item_id="mi_burger", qty=1),
                    OrderItem(menu_item_id="mi_coffee", modifier_name="Vanilla Syrup", qty=1),
                ],
                status=OrderStatus.PAID,
                created_at=days_ago(1),
            ),
            Order(
                id=uid(),
                table_id="t4",
                items=[OrderItem(menu_item_id="mi_salad", qty=2)],
                status=OrderStatus.PAID,
                created_at=days_ago(7),
            ),
        ]

    def snapshot(self, now: Optional[datetime] = None) -> RestaurantSnapshot:
        """Full seed state."""
        return RestaurantSnapshot(
            menu_items=self.menu_items(),
            tables=self.tables(),
            orders=self.orders(now),
        )

    def build_store(self, now: Optional[datetime] = None) -> RestaurantStore:
        """Create a store populated with seed data."""
        return RestaurantStore.from_snapshot(self.snapshot(now))
