"""
POS Inventory Engine — FEFO Allocator
========================================
First-Expired-First-Out stock allocation with exact cost.

RULES (NON-NEGOTIABLE):
- All arithmetic is integer (minor currency units — no floats)
- Batches are walked in (expiry_date, batch_id) order
- Each batch gives min(batch.quantity, remaining)
- Cost = Σ slice quantity × slice unit_cost (never an average)
- Full-or-nothing: if the batches cannot cover the request, nothing
  is deducted and InsufficientStockError is raised
- preview() never mutates; allocate() mutates only the store it was
  given (the checkout hands it a staged clone)

A "slice" is the part of one batch consumed by one allocation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from core.commands.rejection import ReasonCode
from core.errors import InsufficientStockError, InvalidRequestError, StockShortage
from core.primitives.inventory import Batch
from core.primitives.sale import BatchSlice
from engines.inventory.batch_store import BatchStore

logger = logging.getLogger("pos.inventory")


# ══════════════════════════════════════════════════════════════
# RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Allocation:
    """Result of allocating one product line."""
    product_id: str
    quantity_requested: int
    quantity_deducted: int
    total_cost: int
    slices: Tuple[BatchSlice, ...]
    remaining_batches: Tuple[Batch, ...]

    @property
    def quantity_unfulfilled(self) -> int:
        return self.quantity_requested - self.quantity_deducted

    @property
    def fully_fulfilled(self) -> bool:
        return self.quantity_unfulfilled == 0

    @property
    def cost_per_unit(self) -> int:
        """Average cost per unit consumed (integer division, display only)."""
        if self.quantity_deducted == 0:
            return 0
        return self.total_cost // self.quantity_deducted

    def shortage(self) -> StockShortage:
        return StockShortage(
            product_id=self.product_id,
            requested=self.quantity_requested,
            available=self.quantity_deducted,
        )


# ══════════════════════════════════════════════════════════════
# PURE FEFO WALK
# ══════════════════════════════════════════════════════════════

def plan_fefo(
    ordered_batches: Sequence[Batch],
    quantity: int,
) -> Tuple[Tuple[BatchSlice, ...], Tuple[Batch, ...]]:
    """
    Walk expiry-ordered batches and take `quantity` from the front.

    Returns (slices taken, batches left afterwards). Exhausted batches
    are dropped from the remainder. Pure: inputs are not modified.
    """
    remaining = quantity
    slices: List[BatchSlice] = []
    left: List[Batch] = []

    for batch in ordered_batches:
        if remaining <= 0 or batch.quantity <= 0:
            if batch.quantity > 0:
                left.append(batch)
            continue

        take = min(batch.quantity, remaining)
        remaining -= take
        slices.append(BatchSlice(
            batch_id=batch.batch_id,
            batch_code=batch.batch_code,
            quantity=take,
            unit_cost=batch.unit_cost,
        ))
        if batch.quantity - take > 0:
            left.append(batch.with_quantity(batch.quantity - take))

    return tuple(slices), tuple(left)


# ══════════════════════════════════════════════════════════════
# ALLOCATOR
# ══════════════════════════════════════════════════════════════

class FefoAllocator:
    """
    FEFO allocator bound to one BatchStore.

    The allocator enforces the store's contract: it only ever asks
    apply_deduction() for quantities that the expiry-ordered listing
    showed to be there.
    """

    def __init__(self, store: BatchStore):
        self._store = store

    @property
    def store(self) -> BatchStore:
        return self._store

    @staticmethod
    def _check_quantity(product_id: str, quantity: int) -> None:
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise InvalidRequestError(
                code=ReasonCode.INVALID_QUANTITY,
                detail=f"quantity must be a positive integer, got {quantity!r}.",
                product_id=product_id,
            )

    def preview(self, product_id: str, quantity: int) -> Allocation:
        """
        Compute the allocation without touching the store.

        Shortfalls are reported through quantity_unfulfilled rather
        than raised, so a caller can show what *would* happen.
        """
        self._check_quantity(product_id, quantity)
        ordered = self._store.list_ordered_by_expiry(product_id)
        slices, left = plan_fefo(ordered, quantity)
        deducted = sum(s.quantity for s in slices)
        return Allocation(
            product_id=product_id,
            quantity_requested=quantity,
            quantity_deducted=deducted,
            total_cost=sum(s.total_cost for s in slices),
            slices=slices,
            remaining_batches=left,
        )

    def allocate(self, product_id: str, quantity: int) -> Allocation:
        """
        Deduct `quantity` from the product's batches in FEFO order.

        Raises:
            InvalidRequestError:    quantity is not a positive integer.
            InsufficientStockError: batches cannot cover the request;
                                    the store is left untouched.
        """
        plan = self.preview(product_id, quantity)
        if not plan.fully_fulfilled:
            logger.info(
                f"Allocation refused for {product_id}: requested {quantity}, "
                f"available {plan.quantity_deducted}"
            )
            raise InsufficientStockError([plan.shortage()])

        for piece in plan.slices:
            self._store.apply_deduction(product_id, piece.batch_id, piece.quantity)
            logger.debug(
                f"FEFO slice: {product_id} ← {piece.batch_id} "
                f"qty {piece.quantity} @ {piece.unit_cost}"
            )

        return Allocation(
            product_id=product_id,
            quantity_requested=quantity,
            quantity_deducted=plan.quantity_deducted,
            total_cost=plan.total_cost,
            slices=plan.slices,
            remaining_batches=tuple(self._store.list_ordered_by_expiry(product_id)),
        )
