"""
POS Inventory Engine — Batch Store
=====================================
Owns the per-product collection of stock batches.

RULES (NON-NEGOTIABLE):
- Expiry ordering is deterministic: (expiry_date, batch_id) ascending
- A batch whose quantity reaches exactly 0 is removed
- Deducting more than a batch holds is a contract violation; the
  Allocator guarantees it never asks for that
- Reads hand out immutable snapshots, never internal state
- Staging: clone() for a scratch copy, replace_with() to commit it

The store is explicitly owned (passed to whoever needs it), never a
module-level global.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from core.primitives.inventory import Batch, Product

logger = logging.getLogger("pos.inventory")


# ══════════════════════════════════════════════════════════════
# INTERNAL ENTRIES
# ══════════════════════════════════════════════════════════════

@dataclass
class _BatchEntry:
    """Internal mutable batch entry (not exposed externally)."""
    batch_id: str
    batch_code: str
    quantity: int
    expiry_date: date
    unit_cost: int

    def snapshot(self) -> Batch:
        return Batch(
            batch_id=self.batch_id,
            batch_code=self.batch_code,
            quantity=self.quantity,
            expiry_date=self.expiry_date,
            unit_cost=self.unit_cost,
        )


@dataclass
class _ProductEntry:
    """Catalog data plus the batches currently on hand."""
    catalog: Product
    batches: Dict[str, _BatchEntry]


# ══════════════════════════════════════════════════════════════
# BATCH STORE
# ══════════════════════════════════════════════════════════════

class BatchStore:
    """
    In-memory store of products and their batches.

    Product insertion order is preserved for snapshots; batch order
    inside a product is irrelevant because every consumer goes
    through list_ordered_by_expiry().
    """

    def __init__(self) -> None:
        self._products: Dict[str, _ProductEntry] = {}
        self._batch_sequence: int = 0

    @classmethod
    def from_products(cls, products: Iterable[Product]) -> BatchStore:
        store = cls()
        for product in products:
            store.add_product(product)
        return store

    # ── Catalog ───────────────────────────────────────────────

    def add_product(self, product: Product) -> None:
        """Register a product with its initial batches."""
        if product.product_id in self._products:
            raise ValueError(f"Product '{product.product_id}' already registered.")
        entry = _ProductEntry(catalog=product.with_batches(()), batches={})
        self._products[product.product_id] = entry
        for batch in product.batches:
            if batch.quantity > 0:
                entry.batches[batch.batch_id] = _BatchEntry(
                    batch_id=batch.batch_id,
                    batch_code=batch.batch_code,
                    quantity=batch.quantity,
                    expiry_date=batch.expiry_date,
                    unit_cost=batch.unit_cost,
                )

    def has_product(self, product_id: str) -> bool:
        return product_id in self._products

    def product_ids(self) -> List[str]:
        return list(self._products)

    def _entry(self, product_id: str) -> _ProductEntry:
        try:
            return self._products[product_id]
        except KeyError:
            raise KeyError(f"Unknown product '{product_id}'.") from None

    # ── Receiving ─────────────────────────────────────────────

    def _next_batch_id(self, product_id: str) -> str:
        self._batch_sequence += 1
        return f"BATCH-{product_id}-{self._batch_sequence:04d}"

    def receive_batch(
        self,
        product_id: str,
        batch_code: str,
        quantity: int,
        expiry_date: date,
        unit_cost: int,
        batch_id: Optional[str] = None,
    ) -> str:
        """
        Add a received lot to a product. Returns the batch_id used.
        If batch_id is None, one is generated deterministically.
        """
        entry = self._entry(product_id)
        if quantity <= 0:
            raise ValueError(f"Received quantity must be positive, got {quantity}.")
        if batch_id is None:
            batch_id = self._next_batch_id(product_id)
        if batch_id in entry.batches:
            raise ValueError(
                f"Batch '{batch_id}' already exists on product '{product_id}'."
            )
        # Validate through the immutable type before storing.
        batch = Batch(batch_id, batch_code, quantity, expiry_date, unit_cost)
        entry.batches[batch_id] = _BatchEntry(
            batch_id=batch.batch_id,
            batch_code=batch.batch_code,
            quantity=batch.quantity,
            expiry_date=batch.expiry_date,
            unit_cost=batch.unit_cost,
        )
        logger.info(
            f"Batch received: {batch_id} ({batch_code}) → {product_id}, "
            f"qty {quantity}, expires {expiry_date.isoformat()}"
        )
        return batch_id

    # ── Allocation-relevant queries ───────────────────────────

    def list_ordered_by_expiry(self, product_id: str) -> List[Batch]:
        """Batches ascending by expiry date, ties broken by batch id."""
        entry = self._entry(product_id)
        snapshots = [b.snapshot() for b in entry.batches.values()]
        return sorted(snapshots, key=Batch.expiry_sort_key)

    def total_stock(self, product_id: str) -> int:
        return sum(b.quantity for b in self._entry(product_id).batches.values())

    def stock_levels(self) -> Dict[str, int]:
        return {pid: self.total_stock(pid) for pid in self._products}

    def apply_deduction(self, product_id: str, batch_id: str, amount: int) -> int:
        """
        Reduce a batch by `amount`; remove it when it reaches 0.
        Returns the quantity left in the batch.
        """
        entry = self._entry(product_id)
        batch = entry.batches.get(batch_id)
        if batch is None:
            raise KeyError(f"Unknown batch '{batch_id}' on product '{product_id}'.")
        if amount <= 0:
            raise ValueError(f"Deduction must be positive, got {amount}.")
        if amount > batch.quantity:
            raise ValueError(
                f"Deduction of {amount} exceeds batch '{batch_id}' "
                f"quantity {batch.quantity}."
            )

        batch.quantity -= amount
        if batch.quantity == 0:
            del entry.batches[batch_id]
            logger.debug(f"Batch exhausted and removed: {batch_id} ({product_id})")
        return batch.quantity

    # ── Snapshots ─────────────────────────────────────────────

    def get_product(self, product_id: str) -> Product:
        """Immutable product snapshot with batches in expiry order."""
        entry = self._entry(product_id)
        return entry.catalog.with_batches(tuple(self.list_ordered_by_expiry(product_id)))

    def products(self) -> Tuple[Product, ...]:
        return tuple(self.get_product(pid) for pid in self._products)

    def total_inventory_value(self) -> int:
        """Cost value of all stock on hand (minor units)."""
        return sum(
            b.quantity * b.unit_cost
            for entry in self._products.values()
            for b in entry.batches.values()
        )

    # ── Staging ───────────────────────────────────────────────

    def clone(self) -> BatchStore:
        """Independent deep copy for staged allocation."""
        staged = BatchStore()
        staged._products = copy.deepcopy(self._products)
        staged._batch_sequence = self._batch_sequence
        return staged

    def replace_with(self, staged: BatchStore) -> None:
        """Adopt the state of a staged copy in one step."""
        if staged is self:
            return
        self._products = staged._products
        self._batch_sequence = staged._batch_sequence
        staged._products = copy.deepcopy(self._products)
