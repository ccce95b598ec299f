"""Dashboard metrics derived from the order history."""
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from restaurant_ops.services.restaurant.models import (
    REVENUE_STATUSES,
    Order,
    OrderStatus,
    RestaurantSnapshot,
)
from restaurant_ops.services.restaurant.pricing import (
    MenuIndex,
    build_menu_index,
    compute_order_total,
)
from restaurant_ops.services.restaurant.utils import is_same_day, within_last_n_days

DEFAULT_TOP_SELLERS_LIMIT = 7
DEFAULT_TREND_DAYS = 14


class SalesPeriod(str, Enum):
    """Trailing windows reported on the dashboard."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    def __str__(self) -> str:
        """Return the string value of the period."""
        return self.value


_PERIOD_DAYS = {
    SalesPeriod.WEEK: 7,
    SalesPeriod.MONTH: 30,
}


class TopSeller(BaseModel):
    """Cumulative ordered quantity for one menu item."""

    menu_item_id: str
    name: str
    qty: int


class TrendPoint(BaseModel):
    """Realized sales for one calendar day."""

    day: str  # M/D label
    calendar_date: date
    total: float


class ActiveOrderSummary(BaseModel):
    """In-progress order with its current total."""

    order: Order
    total: float


class SalesSummary(BaseModel):
    """Sales for the three dashboard periods."""

    today: float
    last_7_days: float
    last_30_days: float


class DashboardSummary(BaseModel):
    """Everything the dashboard view renders."""

    sales: SalesSummary
    active_orders: List[ActiveOrderSummary]
    top_sellers: List[TopSeller]
    trend: List[TrendPoint]


def _in_period(order: Order, period: SalesPeriod, now: datetime) -> bool:
    if period == SalesPeriod.DAY:
        return is_same_day(order.created_at, now)
    return within_last_n_days(order.created_at, _PERIOD_DAYS[period], now)


def period_sales(
    orders: Sequence[Order],
    menu_index: MenuIndex,
    period: SalesPeriod,
    now: Optional[datetime] = None,
) -> float:
    """Sum totals of served and paid orders created within the period."""
    if now is None:
        now = datetime.now()
    return sum(
        compute_order_total(order, menu_index)
        for order in orders
        if order.status in REVENUE_STATUSES and _in_period(order, period, now)
    )


def active_orders(orders: Sequence[Order]) -> List[Order]:
    """Get in-progress orders in collection order."""
    return [order for order in orders if order.status == OrderStatus.IN_PROGRESS]


def orders_by_status(orders: Sequence[Order]) -> Dict[OrderStatus, List[Order]]:
    """Group orders into one column per status, keeping collection order."""
    board: Dict[OrderStatus, List[Order]] = {status: [] for status in OrderStatus}
    for order in orders:
        board[order.status].append(order)
    return board


def top_sellers(
    orders: Sequence[Order],
    menu_index: MenuIndex,
    limit: int = DEFAULT_TOP_SELLERS_LIMIT,
) -> List[TopSeller]:
    """
    Rank menu items by total ordered quantity across every order.

    Order status is ignored: this is popularity, not revenue. Items deleted
    from the menu keep their raw id as name. Ties keep first-seen order.
    """
    quantities: Dict[str, int] = {}
    for order in orders:
        for line in order.items:
            quantities[line.menu_item_id] = quantities.get(line.menu_item_id, 0) + line.qty

    rows = [
        TopSeller(
            menu_item_id=item_id,
            name=menu_index[item_id].name if item_id in menu_index else item_id,
            qty=qty,
        )
        for item_id, qty in quantities.items()
    ]
    rows.sort(key=lambda row: row.qty, reverse=True)
    return rows[:limit]


def sales_trend(
    orders: Sequence[Order],
    menu_index: MenuIndex,
    days: int = DEFAULT_TREND_DAYS,
    now: Optional[datetime] = None,
) -> List[TrendPoint]:
    """Daily realized sales for the last `days` days, oldest first."""
    if now is None:
        now = datetime.now()
    points = []
    for idx in range(days):
        day = now - timedelta(days=days - 1 - idx)
        total = sum(
            compute_order_total(order, menu_index)
            for order in orders
            if order.status in REVENUE_STATUSES and is_same_day(order.created_at, day)
        )
        points.append(
            TrendPoint(day=f"{day.month}/{day.day}", calendar_date=day.date(), total=round(total, 2))
        )
    return points


def dashboard_summary(
    snapshot: RestaurantSnapshot,
    now: Optional[datetime] = None,
    top_limit: int = DEFAULT_TOP_SELLERS_LIMIT,
    trend_days: int = DEFAULT_TREND_DAYS,
) -> DashboardSummary:
    """Compute every dashboard aggregate from one snapshot."""
    if now is None:
        now = datetime.now()
    menu_index = build_menu_index(snapshot.menu_items)
    orders = snapshot.orders

    return DashboardSummary(
        sales=SalesSummary(
            today=period_sales(orders, menu_index, SalesPeriod.DAY, now),
            last_7_days=period_sales(orders, menu_index, SalesPeriod.WEEK, now),
            last_30_days=period_sales(orders, menu_index, SalesPeriod.MONTH, now),
        ),
        active_orders=[
            ActiveOrderSummary(order=order, total=compute_order_total(order, menu_index))
            for order in active_orders(orders)
        ],
        top_sellers=top_sellers(orders, menu_index, limit=top_limit),
        trend=sales_trend(orders, menu_index, days=trend_days, now=now),
    )
