"""
POS Inventory Engine — Policies
=================================
Stock sufficiency checks run before any batch is touched.
"""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

from core.errors import StockShortage
from core.primitives.sale import CartItem
from engines.inventory.batch_store import BatchStore


def aggregate_demand(cart_items: Iterable[CartItem]) -> Dict[str, int]:
    """Total requested quantity per product, in first-seen order."""
    demand: Dict[str, int] = {}
    for item in cart_items:
        demand[item.product_id] = demand.get(item.product_id, 0) + item.quantity
    return demand


def stock_sufficiency_policy(
    demand: Dict[str, int],
    store: BatchStore,
) -> Tuple[StockShortage, ...]:
    """
    Every product whose combined demand exceeds its total stock.

    An empty result means the whole cart can be covered.
    """
    shortages = []
    for product_id, requested in demand.items():
        available = store.total_stock(product_id)
        if available < requested:
            shortages.append(StockShortage(
                product_id=product_id,
                requested=requested,
                available=available,
            ))
    return tuple(shortages)
