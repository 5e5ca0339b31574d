"""
POS Core — Transaction Errors
================================
Every checkout either commits or raises one of these.
None of them is retried automatically: the caller fixes the cart and
submits again.

PosLedgerError
├── InvalidRequestError     bad cart line, rejected before allocation
├── InsufficientStockError  one or more products short, nothing mutated
└── LedgerImbalanceError    internal invariant net, should never fire
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from core.commands.rejection import ReasonCode, RejectionReason


class PosLedgerError(Exception):
    """Base error for allocation and posting."""

    def to_rejection_reason(self) -> RejectionReason:
        raise NotImplementedError


# ══════════════════════════════════════════════════════════════
# INVALID REQUEST
# ══════════════════════════════════════════════════════════════

class InvalidRequestError(PosLedgerError):
    """A cart line is malformed: bad quantity, bad price, unknown product."""

    def __init__(
        self,
        code: str,
        detail: str,
        product_id: Optional[str] = None,
        line_index: Optional[int] = None,
    ):
        self.code = code
        self.detail = detail
        self.product_id = product_id
        self.line_index = line_index
        where = f" (line {line_index})" if line_index is not None else ""
        super().__init__(f"Invalid checkout request{where}: {detail}")

    def to_rejection_reason(self) -> RejectionReason:
        return RejectionReason(
            code=self.code,
            message=str(self),
            policy_name="cart_request_policy",
            details={
                "product_id": self.product_id,
                "line_index": self.line_index,
            },
        )


# ══════════════════════════════════════════════════════════════
# INSUFFICIENT STOCK
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StockShortage:
    """How far one product falls short of the requested quantity."""
    product_id: str
    requested: int
    available: int

    @property
    def missing(self) -> int:
        return self.requested - self.available

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "requested": self.requested,
            "available": self.available,
            "missing": self.missing,
        }


class InsufficientStockError(PosLedgerError):
    """
    One or more products cannot be fully covered by their batches.

    The whole transaction is rejected; no batch is touched.
    """

    def __init__(self, shortages: Iterable[StockShortage]):
        self.shortages: Tuple[StockShortage, ...] = tuple(shortages)
        if not self.shortages:
            raise ValueError("InsufficientStockError requires at least one shortage.")
        parts = ", ".join(
            f"{s.product_id} (requested {s.requested}, available {s.available})"
            for s in self.shortages
        )
        super().__init__(f"Insufficient stock: {parts}")

    # Single-product convenience accessors.
    @property
    def product_id(self) -> str:
        return self.shortages[0].product_id

    @property
    def requested(self) -> int:
        return self.shortages[0].requested

    @property
    def available(self) -> int:
        return self.shortages[0].available

    def to_rejection_reason(self) -> RejectionReason:
        return RejectionReason(
            code=ReasonCode.INSUFFICIENT_STOCK,
            message=str(self),
            policy_name="fefo_stock_sufficiency",
            details={"shortages": [s.to_dict() for s in self.shortages]},
        )


# ══════════════════════════════════════════════════════════════
# LEDGER IMBALANCE
# ══════════════════════════════════════════════════════════════

class LedgerImbalanceError(PosLedgerError):
    """A posted pair does not balance. Indicates a bug, not a user error."""

    def __init__(self, reference_id: str, debit_total: int, credit_total: int, detail: str = ""):
        self.reference_id = reference_id
        self.debit_total = debit_total
        self.credit_total = credit_total
        suffix = f" — {detail}" if detail else ""
        super().__init__(
            f"LEDGER INVARIANT VIOLATION for {reference_id}: "
            f"debits ({debit_total}) != credits ({credit_total}){suffix}"
        )

    def to_rejection_reason(self) -> RejectionReason:
        return RejectionReason(
            code=ReasonCode.LEDGER_IMBALANCE,
            message=str(self),
            policy_name="balanced_pair_check",
            details={
                "reference_id": self.reference_id,
                "debit_total": self.debit_total,
                "credit_total": self.credit_total,
            },
        )


__all__ = [
    "PosLedgerError",
    "InvalidRequestError",
    "StockShortage",
    "InsufficientStockError",
    "LedgerImbalanceError",
]
