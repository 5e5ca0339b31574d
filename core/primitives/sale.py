"""
POS Sale Primitive — Cart Requests and Sales Orders
=====================================================
Engine: Core Primitives
Authority: POS Ledger — Deterministic, Single-Writer

RULES (NON-NEGOTIABLE):
- A SalesOrder is immutable once created
- Line order follows cart order
- total_amount = Σ unit_price × quantity
- total_cost   = Σ cost of the batch slices actually consumed
- All money in integer minor units

CartItem carries no validation of its own: malformed cart lines are
reported by the checkout as InvalidRequestError.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple


# ══════════════════════════════════════════════════════════════
# CART ITEM (request)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CartItem:
    """One requested line: product, quantity and agreed unit price."""
    product_id: str
    quantity: int
    unit_price: int

    @property
    def line_amount(self) -> int:
        return self.quantity * self.unit_price


# ══════════════════════════════════════════════════════════════
# BATCH SLICE (what was actually consumed)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BatchSlice:
    """Record of stock taken from one specific batch."""
    batch_id: str
    batch_code: str
    quantity: int
    unit_cost: int

    @property
    def total_cost(self) -> int:
        return self.quantity * self.unit_cost


# ══════════════════════════════════════════════════════════════
# SALE LINE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SaleLine:
    """A cart line with its resolved cost basis."""
    product_id: str
    product_name: str
    quantity: int
    unit_price: int
    line_cost: int
    slices: Tuple[BatchSlice, ...] = ()

    @property
    def line_amount(self) -> int:
        return self.quantity * self.unit_price

    @property
    def gross_profit(self) -> int:
        return self.line_amount - self.line_cost

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "line_amount": self.line_amount,
            "line_cost": self.line_cost,
            "slices": [
                {
                    "batch_id": s.batch_id,
                    "batch_code": s.batch_code,
                    "quantity": s.quantity,
                    "unit_cost": s.unit_cost,
                }
                for s in self.slices
            ],
        }


# ══════════════════════════════════════════════════════════════
# SALES ORDER
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SalesOrder:
    """
    Immutable record of one completed checkout.

    Totals are cross-checked against the lines at creation time so a
    SalesOrder can never disagree with itself.
    """
    order_id: str
    timestamp: datetime
    customer_name: str
    lines: Tuple[SaleLine, ...]
    total_amount: int
    total_cost: int
    currency: str = "USD"

    def __post_init__(self):
        if not self.order_id:
            raise ValueError("order_id must be non-empty.")
        if not isinstance(self.lines, tuple):
            raise TypeError("lines must be a tuple of SaleLine.")
        expected_amount = sum(line.line_amount for line in self.lines)
        if self.total_amount != expected_amount:
            raise ValueError(
                f"total_amount ({self.total_amount}) does not match "
                f"line amounts ({expected_amount})."
            )
        expected_cost = sum(line.line_cost for line in self.lines)
        if self.total_cost != expected_cost:
            raise ValueError(
                f"total_cost ({self.total_cost}) does not match "
                f"line costs ({expected_cost})."
            )

    @property
    def gross_profit(self) -> int:
        return self.total_amount - self.total_cost

    def quantity_for(self, product_id: str) -> int:
        return sum(l.quantity for l in self.lines if l.product_id == product_id)

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "timestamp": self.timestamp.isoformat(),
            "customer_name": self.customer_name,
            "lines": [line.to_dict() for line in self.lines],
            "total_amount": self.total_amount,
            "total_cost": self.total_cost,
            "currency": self.currency,
        }
