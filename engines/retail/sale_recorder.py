"""
POS Retail Engine — Sale Recorder
====================================
Turns a cart plus its per-line allocations into one immutable
SalesOrder.

- total_amount = Σ requested unit_price × quantity
  (catalog-level price, independent of which batch was consumed)
- total_cost   = Σ allocation.total_cost

No side effects: the batches were already deducted by the allocator
inside the checkout's staged store.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Sequence

from core.config.ledger import DEFAULT_LEDGER_CONFIG, LedgerConfig
from core.primitives.sale import CartItem, SaleLine, SalesOrder
from engines.inventory.allocator import Allocation


class SaleRecorder:
    """Builds SalesOrder records. Stateless apart from configuration."""

    def __init__(self, config: LedgerConfig = DEFAULT_LEDGER_CONFIG):
        self._config = config

    def build_line(
        self,
        item: CartItem,
        allocation: Allocation,
        product_name: str,
    ) -> SaleLine:
        if allocation.product_id != item.product_id:
            raise ValueError(
                f"Allocation for {allocation.product_id} does not belong to "
                f"cart line {item.product_id}."
            )
        if not allocation.fully_fulfilled or allocation.quantity_deducted != item.quantity:
            raise ValueError(
                f"Allocation for {item.product_id} covers "
                f"{allocation.quantity_deducted} of {item.quantity}; only "
                f"fully allocated lines can be recorded."
            )
        return SaleLine(
            product_id=item.product_id,
            product_name=product_name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            line_cost=allocation.total_cost,
            slices=allocation.slices,
        )

    def record(
        self,
        *,
        order_id: str,
        timestamp: datetime,
        cart_items: Sequence[CartItem],
        allocations: Sequence[Allocation],
        product_names: Mapping[str, str],
        customer_name: Optional[str] = None,
    ) -> SalesOrder:
        """
        Assemble the SalesOrder. Lines keep cart order.

        Raises:
            ValueError: allocations do not line up with the cart.
        """
        if len(cart_items) != len(allocations):
            raise ValueError(
                f"{len(cart_items)} cart lines but {len(allocations)} allocations."
            )

        lines = tuple(
            self.build_line(item, allocation, product_names.get(item.product_id, item.product_id))
            for item, allocation in zip(cart_items, allocations)
        )

        return SalesOrder(
            order_id=order_id,
            timestamp=timestamp,
            customer_name=customer_name or self._config.default_customer_name,
            lines=lines,
            total_amount=sum(line.line_amount for line in lines),
            total_cost=sum(line.line_cost for line in lines),
            currency=self._config.currency,
        )
