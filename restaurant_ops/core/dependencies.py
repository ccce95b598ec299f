"""FastAPI dependencies."""
from fastapi import Request

from restaurant_ops.services.restaurant.store import RestaurantStore


def get_store(request: Request) -> RestaurantStore:
    """Get the application's restaurant store."""
    return request.app.state.store
