import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from ..schemas.order import OrderRead

logger = logging.getLogger(__name__)

FetchOrders = Callable[[], Awaitable[List[OrderRead]]]
OnChange = Callable[[List[OrderRead]], Awaitable[None]]


class OrderStatusPoller:
    """
    Периодический опрос заказов (push-канала нет).
    poll_once() отдаёт новые заказы и заказы, у которых сменился статус или статус оплаты.
    """

    def __init__(self, fetch: FetchOrders, interval: float = 30.0, on_change: Optional[OnChange] = None):
        self.fetch = fetch
        self.interval = interval
        self.on_change = on_change
        self._seen: Dict[str, Tuple[str, str]] = {}

    async def poll_once(self) -> List[OrderRead]:
        orders = await self.fetch()
        changed = []
        for order in orders:
            state = (order.status.value, order.payment_status.value)
            if self._seen.get(order.id) != state:
                changed.append(order)
            self._seen[order.id] = state
        return changed

    async def run(self, stop: asyncio.Event) -> None:
        while not stop.is_set():
            try:
                changed = await self.poll_once()
            except Exception:
                # следующий тик повторит запрос
                logger.exception("Failed to poll orders")
            else:
                if changed and self.on_change:
                    try:
                        await self.on_change(changed)
                    except Exception:
                        logger.exception("Order change handler failed")
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass
