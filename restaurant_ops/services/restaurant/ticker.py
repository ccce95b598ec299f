"""Demo ticker that keeps the dashboard moving."""
import asyncio
import logging
from typing import Optional

from restaurant_ops.services.restaurant.models import Order, OrderStatus
from restaurant_ops.services.restaurant.store import RestaurantStore

logger = logging.getLogger(__name__)


class DemoTicker:
    """Periodically advances the first served order to paid."""

    def __init__(self, store: RestaurantStore, interval: float = 12.0):
        self.store = store
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> Optional[Order]:
        """
        Mark the first served order as paid.

        Returns:
            The order that was advanced, or None if nothing was served
        """
        served = self.store.first_order_with_status(OrderStatus.SERVED)
        if served is None:
            return None
        logger.info(f"[TICKER] Advancing order {served.id} to paid")
        return self.store.update_order_status(served.id, OrderStatus.PAID)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.tick()
            except Exception as e:
                logger.error(f"[TICKER] Error during tick: {str(e)}", exc_info=True)

    def start(self) -> None:
        """Start ticking on the running event loop."""
        if self.running:
            return
        logger.info(f"[TICKER] Started - interval: {self.interval}s")
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the ticker and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("[TICKER] Stopped")
