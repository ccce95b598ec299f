"""Restaurant state persistence service."""
import asyncio
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from restaurant_ops.db.models import AppState
from restaurant_ops.services.restaurant.models import RestaurantSnapshot

logger = logging.getLogger(__name__)


class StatePersistenceService:
    """
    Loads and saves the whole restaurant state as one JSON blob.

    Storage problems never reach the caller: a failed load means "no prior
    state" and a failed save is logged and dropped.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], key: str):
        self.session_factory = session_factory
        self.key = key
        self._lock = asyncio.Lock()
        self._latest: Optional[RestaurantSnapshot] = None
        self._writer: Optional[asyncio.Task] = None

    async def load(self) -> Optional[RestaurantSnapshot]:
        """Get the saved snapshot, or None if missing or unreadable."""
        try:
            async with self.session_factory() as session:
                row = await session.get(AppState, self.key)
                if row is None:
                    logger.info(f"[STATE] No saved state for key: {self.key}")
                    return None
                snapshot = RestaurantSnapshot.model_validate_json(row.payload)
        except Exception as e:
            logger.warning(
                f"[STATE] Could not load state - key: {self.key}, "
                f"Error: {type(e).__name__}: {str(e)}"
            )
            return None

        logger.info(
            f"[STATE] Loaded state - {len(snapshot.menu_items)} menu items, "
            f"{len(snapshot.tables)} tables, {len(snapshot.orders)} orders"
        )
        return snapshot

    async def save(self, snapshot: RestaurantSnapshot) -> bool:
        """
        Replace the saved snapshot.

        Writes are serialized, so the last call to finish is the last call made.

        Returns:
            True if the write committed, False if it failed
        """
        async with self._lock:
            try:
                async with self.session_factory() as session:
                    await session.merge(
                        AppState(
                            key=self.key,
                            payload=snapshot.model_dump_json(),
                            updated_at=datetime.utcnow(),
                        )
                    )
                    await session.commit()
            except Exception as e:
                logger.error(
                    f"[STATE] Error saving state - key: {self.key}, "
                    f"Error: {type(e).__name__}: {str(e)}",
                    exc_info=True,
                )
                return False
        logger.debug(f"[STATE] Saved state - key: {self.key}")
        return True

    def schedule_save(self, snapshot: RestaurantSnapshot) -> None:
        """
        Save in the background without waiting for the result.

        Only the newest snapshot is kept while a write is in flight; older
        pending snapshots are superseded rather than written out of order.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("[STATE] No running event loop, save skipped")
            return
        self._latest = snapshot
        if self._writer is None or self._writer.done():
            self._writer = loop.create_task(self._write_latest())

    async def _write_latest(self) -> None:
        while self._latest is not None:
            snapshot, self._latest = self._latest, None
            await self.save(snapshot)

    async def flush(self) -> None:
        """Wait until the newest scheduled snapshot has been written."""
        while self._writer is not None and not self._writer.done():
            await self._writer
