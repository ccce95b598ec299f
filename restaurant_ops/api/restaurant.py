"""Restaurant identity and health endpoints."""
import logging
from fastapi import APIRouter, Request

from restaurant_ops.core.config import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    logger.debug(
        f"[HEALTH] Health check requested - Client: {request.client.host if request.client else 'unknown'}"
    )
    return {"status": "healthy", "restaurant": settings.restaurant_name}


@router.get("/api/restaurant/{restaurant_id}")
async def get_restaurant(restaurant_id: int):
    """Get the restaurant identity record."""
    return {"id": settings.restaurant_id, "name": settings.restaurant_name}
