"""Order pricing."""
from typing import Dict, Iterable

from restaurant_ops.services.restaurant.models import MenuItem, Order

MenuIndex = Dict[str, MenuItem]


def build_menu_index(menu_items: Iterable[MenuItem]) -> MenuIndex:
    """Map menu item ids to menu items."""
    return {item.id: item for item in menu_items}


def compute_order_total(order: Order, menu_index: MenuIndex) -> float:
    """
    Compute an order total from current menu prices.

    Each line costs (base price + modifier delta) * qty. Lines pointing at a
    deleted menu item contribute nothing, and an unknown modifier name counts
    as no modifier.
    """
    total = 0.0
    for line in order.items:
        menu_item = menu_index.get(line.menu_item_id)
        if menu_item is None:
            continue
        modifier = menu_item.find_modifier(line.modifier_name)
        unit_price = menu_item.price + (modifier.price_delta if modifier else 0.0)
        total += unit_price * line.qty
    return total
