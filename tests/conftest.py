"""Shared test fixtures and configuration."""
import pytest
import os
from datetime import datetime
from typing import List, Optional

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEMO_TICKER_ENABLED", "false")
os.environ.setdefault("RESTAURANT_NAME", "Campomar")

from restaurant_ops.main import app
from restaurant_ops.db.models import Base
from restaurant_ops.core.dependencies import get_store
from restaurant_ops.services.restaurant.models import Order, OrderItem, OrderStatus
from restaurant_ops.services.restaurant.seed import SeedDataProvider
from restaurant_ops.services.restaurant.store import RestaurantStore


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Midday, so "1 day ago" and "7 days ago" never straddle a day boundary
FIXED_NOW = datetime(2024, 5, 15, 12, 0, 0)


def make_order(
    lines: List[OrderItem],
    status: OrderStatus = OrderStatus.SERVED,
    created_at: Optional[datetime] = None,
    table_id: str = "t1",
    order_id: str = "o1",
) -> Order:
    """Build an order directly, bypassing the store."""
    return Order(
        id=order_id,
        table_id=table_id,
        items=lines,
        status=status,
        created_at=created_at or FIXED_NOW,
    )


@pytest.fixture
def order_factory():
    """Factory for orders built outside the store."""
    return make_order


@pytest.fixture
def fixed_now():
    """Fixed reference time for metric tests."""
    return FIXED_NOW


@pytest.fixture
def seed_provider():
    """Seed data provider with the bundled menu."""
    return SeedDataProvider()


@pytest.fixture
def seeded_store(seed_provider, fixed_now):
    """Store populated with seed data created at the fixed time."""
    return seed_provider.build_store(now=fixed_now)


@pytest.fixture
def menu_index(seeded_store):
    """Menu index of the seed menu."""
    return seeded_store.menu_index()


@pytest.fixture
def live_store(seed_provider):
    """Store populated with seed data created right now."""
    return seed_provider.build_store()


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_db_engine):
    """Session factory bound to the test database."""
    return async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def test_client(live_store):
    """Create FastAPI test client with the store overridden."""
    app.dependency_overrides[get_store] = lambda: live_store

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()
