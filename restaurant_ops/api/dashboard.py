"""Dashboard API endpoints."""
import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from restaurant_ops.core.config import settings
from restaurant_ops.core.dependencies import get_store
from restaurant_ops.services.restaurant.metrics import (
    ActiveOrderSummary,
    SalesSummary,
    TopSeller,
    TrendPoint,
    dashboard_summary,
)
from restaurant_ops.services.restaurant.store import RestaurantStore
from restaurant_ops.services.restaurant.utils import currency

router = APIRouter()
logger = logging.getLogger(__name__)


class DashboardResponse(BaseModel):
    """Dashboard response model."""
    sales: SalesSummary
    sales_display: Dict[str, str]
    active_orders: List[ActiveOrderSummary]
    top_sellers: List[TopSeller]
    trend: List[TrendPoint]


@router.get("/api/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    request: Request,
    store: RestaurantStore = Depends(get_store),
):
    """Get sales, active orders, top sellers and the daily trend."""
    logger.info(
        f"[DASHBOARD] Request received - "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        summary = dashboard_summary(
            store.snapshot(),
            top_limit=settings.top_sellers_limit,
            trend_days=settings.trend_days,
        )
        logger.info(
            f"[DASHBOARD] Summary computed - today: {summary.sales.today:.2f}, "
            f"{len(summary.active_orders)} active orders"
        )
        return DashboardResponse(
            sales=summary.sales,
            sales_display={
                "today": currency(summary.sales.today),
                "last_7_days": currency(summary.sales.last_7_days),
                "last_30_days": currency(summary.sales.last_30_days),
            },
            active_orders=summary.active_orders,
            top_sellers=summary.top_sellers,
            trend=summary.trend,
        )

    except Exception as e:
        logger.error(
            f"[DASHBOARD] Error computing dashboard - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error computing dashboard: {str(e)}")
