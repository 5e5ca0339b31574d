"""
POS Ledger Primitive — Double-Entry Journal Records
=====================================================
Engine: Core Primitives
Authority: POS Ledger — Deterministic, Single-Writer

The ledger primitive provides the journal record emitted for every
committed sale. Each JournalEntry is one debit/credit movement of a
single amount between two accounts, so it balances by construction.
A sale posts exactly two of them as a JournalPair.

RULES (NON-NEGOTIABLE):
- Journal entries are immutable once created
- Amounts are non-negative integer minor units — NO floats
- Zero-amount entries are valid and balance at zero
- Both entries of a pair share reference_id and timestamp

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Iterator, Tuple


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class DebitCredit(Enum):
    """Ledger side."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class EntryKind(Enum):
    """Which economic event of a sale an entry records."""
    REVENUE = "REVENUE"   # Cash/Bank ← Sales Revenue
    COGS = "COGS"         # COGS ← Inventory Asset


# ══════════════════════════════════════════════════════════════
# JOURNAL ENTRY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class JournalEntry:
    """
    One balanced debit/credit movement.

    Fields:
        entry_id:       Unique identifier.
        timestamp:      Shared with the originating SalesOrder.
        description:    Human-readable memo.
        debit_account:  Account debited by `amount`.
        credit_account: Account credited by `amount`.
        amount:         Non-negative integer minor units.
        reference_id:   SalesOrder id this entry belongs to.
        kind:           REVENUE or COGS.
    """
    entry_id: str
    timestamp: datetime
    description: str
    debit_account: str
    credit_account: str
    amount: int
    reference_id: str
    kind: EntryKind

    def __post_init__(self):
        if not self.entry_id:
            raise ValueError("entry_id must be non-empty.")
        if not self.debit_account or not self.credit_account:
            raise ValueError("debit_account and credit_account must be non-empty.")
        if self.debit_account == self.credit_account:
            raise ValueError(
                f"Entry debits and credits the same account "
                f"'{self.debit_account}'."
            )
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise TypeError(
                f"Journal amount must be int (minor units), "
                f"got {type(self.amount).__name__}."
            )
        if self.amount < 0:
            raise ValueError(
                f"Journal amount cannot be negative, got {self.amount}."
            )
        if not self.reference_id:
            raise ValueError("reference_id must be non-empty.")
        if not isinstance(self.kind, EntryKind):
            raise ValueError("kind must be an EntryKind enum.")

    def lines(self) -> Tuple[Tuple[str, DebitCredit, int], ...]:
        """Expand into (account, side, amount) ledger lines."""
        return (
            (self.debit_account, DebitCredit.DEBIT, self.amount),
            (self.credit_account, DebitCredit.CREDIT, self.amount),
        )

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "timestamp": self.timestamp.isoformat(),
            "description": self.description,
            "debit_account": self.debit_account,
            "credit_account": self.credit_account,
            "amount": self.amount,
            "reference_id": self.reference_id,
            "kind": self.kind.value,
        }


# ══════════════════════════════════════════════════════════════
# JOURNAL PAIR
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class JournalPair:
    """
    The revenue + COGS entries of one sale, produced together or not
    at all.
    """
    revenue: JournalEntry
    cogs: JournalEntry

    def __post_init__(self):
        if self.revenue.kind != EntryKind.REVENUE:
            raise ValueError("revenue entry must be of kind REVENUE.")
        if self.cogs.kind != EntryKind.COGS:
            raise ValueError("cogs entry must be of kind COGS.")
        if self.revenue.reference_id != self.cogs.reference_id:
            raise ValueError(
                f"Pair reference mismatch: {self.revenue.reference_id} "
                f"!= {self.cogs.reference_id}."
            )
        if self.revenue.timestamp != self.cogs.timestamp:
            raise ValueError("Pair entries must share one timestamp.")

    @property
    def reference_id(self) -> str:
        return self.revenue.reference_id

    def __iter__(self) -> Iterator[JournalEntry]:
        return iter((self.revenue, self.cogs))

    def __len__(self) -> int:
        return 2

    def side_totals(self) -> Dict[DebitCredit, int]:
        totals = {DebitCredit.DEBIT: 0, DebitCredit.CREDIT: 0}
        for entry in self:
            for _account, side, amount in entry.lines():
                totals[side] += amount
        return totals
