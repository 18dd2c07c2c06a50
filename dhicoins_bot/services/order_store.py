"""
In-memory store of orders waiting for the approver.
"""

import threading
import time
from typing import Dict, Optional

from dhicoins_bot.models.order import PendingOrder
from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


class DuplicateOrderError(Exception):
    """Raised when an order ID is already pending."""

    pass


class OrderStore:
    """
    Owns every ``PendingOrder`` from submission until it is decided.

    ``take`` removes and returns an order in one step, so of two decisions
    racing on the same order exactly one receives it.
    """

    def __init__(self):
        self._orders: Dict[str, PendingOrder] = {}
        self._lock = threading.Lock()
        logger.info("OrderStore initialized")

    def generate_order_id(self, user_id: int) -> str:
        """
        Build ``ORDER_<epoch-ms>_<user_id>``, unique among pending orders.

        If the millisecond is already taken for this user the timestamp is
        bumped until the ID is free.
        """
        millis = int(time.time() * 1000)
        with self._lock:
            order_id = f"ORDER_{millis}_{user_id}"
            while order_id in self._orders:
                millis += 1
                order_id = f"ORDER_{millis}_{user_id}"
        return order_id

    def add(self, order: PendingOrder) -> None:
        """
        Insert a newly submitted order.

        Raises:
            DuplicateOrderError: If the order ID is already pending
        """
        with self._lock:
            if order.order_id in self._orders:
                raise DuplicateOrderError(f"Order {order.order_id} already pending")
            self._orders[order.order_id] = order

        logger.info(
            "Order stored",
            extra={
                "order_id": order.order_id,
                "user_id": order.user_id,
                "usdt_amount": order.usdt_amount,
            },
        )

    def get(self, order_id: str) -> Optional[PendingOrder]:
        """Look up a pending order without removing it."""
        with self._lock:
            return self._orders.get(order_id)

    def take(self, order_id: str) -> Optional[PendingOrder]:
        """
        Remove and return a pending order.

        Returns:
            The order, or None if it is unknown or already decided
        """
        with self._lock:
            order = self._orders.pop(order_id, None)

        if order is None:
            logger.info("Order not found or already processed", extra={"order_id": order_id})
        else:
            logger.info("Order taken for decision", extra={"order_id": order_id})

        return order

    def count(self) -> int:
        """Number of pending orders."""
        with self._lock:
            return len(self._orders)
