"""
POS Retail Engine — Sales History
====================================
Append-only, ordered record of committed SalesOrders.
Production would back this with the host's storage; this is the
in-memory implementation the checkout appends to.
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Iterable, List, Optional, Tuple

from core.primitives.sale import SalesOrder


class SalesHistory:
    """
    Orders in commit order, indexed by order_id.
    No deletion is permitted.
    """

    def __init__(self, orders: Iterable[SalesOrder] = ()) -> None:
        self._orders: List[SalesOrder] = []
        self._by_id: Dict[str, SalesOrder] = {}
        self._lock = Lock()
        for order in orders:
            self.record(order)

    def record(self, order: SalesOrder) -> None:
        """Append an order. Duplicate order_id raises ValueError."""
        with self._lock:
            if order.order_id in self._by_id:
                raise ValueError(
                    f"Order {order.order_id} already recorded — history is append-only."
                )
            self._orders.append(order)
            self._by_id[order.order_id] = order

    def get(self, order_id: str) -> Optional[SalesOrder]:
        with self._lock:
            return self._by_id.get(order_id)

    def orders(self) -> Tuple[SalesOrder, ...]:
        with self._lock:
            return tuple(self._orders)

    def recent(self, limit: int) -> Tuple[SalesOrder, ...]:
        """The last `limit` orders, oldest first."""
        if limit <= 0:
            return ()
        with self._lock:
            return tuple(self._orders[-limit:])

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._orders)
