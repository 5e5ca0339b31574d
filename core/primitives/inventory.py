"""
POS Inventory Primitive — Products and Stock Batches
======================================================
Engine: Core Primitives
Authority: POS Ledger — Deterministic, Single-Writer

The inventory primitive describes WHAT is on the shelf:
products and the perishable batches that make up their stock.

RULES (NON-NEGOTIABLE):
- Quantities are non-negative integers (product unit of measure)
- Costs and prices are integer minor units (cents) — no floats
- A batch belongs to exactly one product
- A product's stock is the sum of its batch quantities
- Margin is derived, never stored

This file contains NO allocation logic and NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Tuple


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class ProductType(Enum):
    """Catalog classification."""
    RAW_MATERIAL = "RAW_MATERIAL"
    FINISHED_GOOD = "FINISHED_GOOD"
    PACKAGING = "PACKAGING"


class UnitOfMeasure(Enum):
    """Unit in which a product is stocked and sold."""
    KG = "kg"
    GRAM = "g"
    LITER = "l"
    UNIT = "unit"
    SACK = "sack"


# ══════════════════════════════════════════════════════════════
# BATCH
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Batch:
    """
    A discrete lot of stock with its own cost and expiry.

    Fields:
        batch_id:    Unique identifier (tie-breaker for equal expiries).
        batch_code:  Supplier / label code printed on the lot.
        quantity:    Units remaining (>= 0).
        expiry_date: Date the lot expires.
        unit_cost:   Cost per unit in minor currency units (>= 0).
    """
    batch_id: str
    batch_code: str
    quantity: int
    expiry_date: date
    unit_cost: int

    def __post_init__(self):
        if not self.batch_id or not isinstance(self.batch_id, str):
            raise ValueError("batch_id must be a non-empty string.")
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise TypeError(
                f"Batch quantity must be int, got {type(self.quantity).__name__}."
            )
        if self.quantity < 0:
            raise ValueError(
                f"Batch quantity cannot be negative, got {self.quantity}."
            )
        if not isinstance(self.unit_cost, int) or isinstance(self.unit_cost, bool):
            raise TypeError(
                f"unit_cost must be int (minor units), "
                f"got {type(self.unit_cost).__name__}."
            )
        if self.unit_cost < 0:
            raise ValueError(f"unit_cost cannot be negative, got {self.unit_cost}.")
        if not isinstance(self.expiry_date, date):
            raise TypeError("expiry_date must be a date.")

    @property
    def is_exhausted(self) -> bool:
        return self.quantity == 0

    @property
    def current_value(self) -> int:
        """Cost value of the remaining quantity (minor units)."""
        return self.quantity * self.unit_cost

    def expiry_sort_key(self) -> Tuple[date, str]:
        return (self.expiry_date, self.batch_id)

    def with_quantity(self, quantity: int) -> Batch:
        return replace(self, quantity=quantity)


# ══════════════════════════════════════════════════════════════
# PRODUCT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Product:
    """
    Immutable product snapshot including its current batches.

    `batches` carries no ordering guarantee; use the Batch Store's
    expiry ordering when order matters.
    """
    product_id: str
    sku: str
    name: str
    unit: UnitOfMeasure
    selling_price: int
    min_stock_level: int = 0
    product_type: ProductType = ProductType.RAW_MATERIAL
    batches: Tuple[Batch, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.product_id or not isinstance(self.product_id, str):
            raise ValueError("product_id must be a non-empty string.")
        if not self.name:
            raise ValueError("name must be non-empty.")
        if not isinstance(self.unit, UnitOfMeasure):
            raise ValueError("unit must be a UnitOfMeasure enum.")
        if not isinstance(self.selling_price, int) or self.selling_price < 0:
            raise ValueError("selling_price must be a non-negative integer.")
        if (
            isinstance(self.min_stock_level, bool)
            or not isinstance(self.min_stock_level, int)
            or self.min_stock_level < 0
        ):
            raise ValueError("min_stock_level must be a non-negative integer.")
        if not isinstance(self.batches, tuple):
            raise TypeError("batches must be a tuple of Batch.")
        seen = set()
        for batch in self.batches:
            if batch.batch_id in seen:
                raise ValueError(
                    f"Duplicate batch_id '{batch.batch_id}' on product "
                    f"'{self.product_id}'."
                )
            seen.add(batch.batch_id)

    @property
    def total_stock(self) -> int:
        return sum(b.quantity for b in self.batches)

    @property
    def stock_value(self) -> int:
        return sum(b.current_value for b in self.batches)

    @property
    def is_below_min_stock(self) -> bool:
        return self.total_stock < self.min_stock_level

    def with_batches(self, batches: Tuple[Batch, ...]) -> Product:
        return replace(self, batches=tuple(batches))
