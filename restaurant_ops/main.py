"""Main FastAPI application."""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from restaurant_ops.api import dashboard, menu, orders, restaurant, tables
from restaurant_ops.core.config import settings
from restaurant_ops.core.logging import setup_logging
from restaurant_ops.db.database import AsyncSessionLocal, init_db
from restaurant_ops.services.persistence.state import StatePersistenceService
from restaurant_ops.services.restaurant.seed import SeedDataProvider
from restaurant_ops.services.restaurant.store import RestaurantStore
from restaurant_ops.services.restaurant.ticker import DemoTicker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    try:
        await init_db()
    except Exception as e:
        # Load then reports no prior state and the app runs on seed data
        logger.error(f"Error initializing database: {e}", exc_info=True)

    persistence = StatePersistenceService(AsyncSessionLocal, settings.state_key)
    snapshot = await persistence.load()
    if snapshot is None:
        store = SeedDataProvider(
            table_count=settings.table_count,
            occupied_tables=settings.seed_occupied_tables,
        ).build_store()
        await persistence.save(store.snapshot())
    else:
        store = RestaurantStore.from_snapshot(snapshot)
    unsubscribe = store.subscribe(persistence.schedule_save)
    app.state.store = store

    ticker = DemoTicker(store, interval=settings.demo_ticker_interval_seconds)
    if settings.demo_ticker_enabled:
        ticker.start()

    yield

    # Shutdown
    await ticker.stop()
    unsubscribe()
    await persistence.flush()


app = FastAPI(
    title="Restaurant Ops",
    description="Restaurant operations dashboard: menu, tables, orders and sales",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers (must be before static file mounting to take precedence)
app.include_router(restaurant.router, tags=["restaurant"])
app.include_router(menu.router, tags=["menu"])
app.include_router(tables.router, tags=["tables"])
app.include_router(orders.router, tags=["orders"])
app.include_router(dashboard.router, tags=["dashboard"])

# Mount static files (for frontend)
static_dir = os.path.join(os.path.dirname(__file__), "static")
if os.path.exists(static_dir):
    # Mount assets directory at /assets path
    assets_dir = os.path.join(static_dir, "assets")
    if os.path.exists(assets_dir):
        app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")


@app.get("/")
async def root():
    """Serve frontend index.html."""
    index_path = os.path.join(static_dir, "index.html")
    if os.path.exists(index_path):
        return FileResponse(index_path)
    return {
        "message": "Restaurant Ops API",
        "version": "0.1.0",
        "frontend": "Frontend not built. Run 'npm run build' in the frontend directory.",
    }
