"""Alembic environment for the restaurant state table."""
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from restaurant_ops.core.config import settings
from restaurant_ops.db.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def sync_database_url() -> str:
    """Migrations run on the sync drivers, so strip the async ones."""
    url = settings.database_url
    return (
        url.replace("postgresql+asyncpg://", "postgresql://", 1)
        .replace("sqlite+aiosqlite://", "sqlite://", 1)
    )


def run_migrations_offline() -> None:
    """Emit SQL without a database connection."""
    context.configure(
        url=sync_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations against the configured database."""
    connectable = engine_from_config(
        {"sqlalchemy.url": sync_database_url()},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
