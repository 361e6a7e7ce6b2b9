# storefront/services/order_poller.py
import threading
from typing import Callable

import redis

from storefront.services.admin_service import AdminService
from storefront.services.api_client import REMOTE_ERRORS
from storefront.utils.settings import ORDER_POLL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderPoller:
    """
    Periodic full refetch of the order list while an admin is logged in,
    keeps the count of new (Placed) orders for the badge.
    Has to be stopped on shutdown, otherwise the thread outlives the app.
    """

    def __init__(
        self,
        admin: AdminService,
        is_active: Callable[[], bool],
        interval: float | None = None,
    ):
        self.admin = admin
        self.is_active = is_active
        self.interval = ORDER_POLL_SECONDS if interval is None else interval
        self.pending_orders = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.interval <= 0:
            logger.info("Order polling disabled")
            return
        if self.running:
            return

        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="order-poller", daemon=True)
        self._thread.start()
        logger.info(f"Order poller started, every {self.interval}s")

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
            logger.info("Order poller stopped")

    def _run(self) -> None:
        # first check right away, then every interval
        while not self._stop.is_set():
            try:
                self.poll_once()
            except Exception:
                logger.exception("Order poll crashed, retrying next tick")
            self._stop.wait(self.interval)

    def poll_once(self) -> int:
        try:
            if not self.is_active():
                self.pending_orders = 0
                return 0
            self.pending_orders = self.admin.pending_count()
        except (PermissionError, ValueError, redis.RedisError, *REMOTE_ERRORS) as e:
            logger.warning(f"Order poll failed: {e}")
        return self.pending_orders
