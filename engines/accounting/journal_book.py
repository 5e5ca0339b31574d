"""
POS Accounting Engine — Journal Book
=======================================
Append-only in-memory book of posted journal pairs, with the account
balances and trial balance derived from it.

This is a READ MODEL for the host and the advisory layer. Only the
checkout appends to it, after committing.
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Dict, List, Tuple

from core.config.ledger import DEFAULT_LEDGER_CONFIG, LedgerConfig
from core.primitives.ledger import DebitCredit, JournalEntry, JournalPair


@dataclass(frozen=True)
class AccountBalance:
    """Debit and credit totals for one account."""
    account: str
    total_debits: int
    total_credits: int

    @property
    def net_debit(self) -> int:
        return self.total_debits - self.total_credits


class JournalBook:
    """
    Posted entries in posting order.

    Pairs are appended whole; a reference id can be posted once.
    """

    def __init__(self, config: LedgerConfig = DEFAULT_LEDGER_CONFIG):
        self._config = config
        self._entries: List[JournalEntry] = []
        self._by_reference: Dict[str, Tuple[JournalEntry, ...]] = {}
        # account → {DEBIT: total, CREDIT: total}
        self._balances: Dict[str, Dict[DebitCredit, int]] = {}
        self._lock = Lock()

    def post(self, pair: JournalPair) -> None:
        with self._lock:
            if pair.reference_id in self._by_reference:
                raise ValueError(
                    f"Reference {pair.reference_id} already posted — "
                    f"journal is append-only."
                )
            entries = tuple(pair)
            self._by_reference[pair.reference_id] = entries
            for entry in entries:
                self._entries.append(entry)
                for account, side, amount in entry.lines():
                    bucket = self._balances.setdefault(
                        account, {DebitCredit.DEBIT: 0, DebitCredit.CREDIT: 0},
                    )
                    bucket[side] += amount

    # ── Queries ───────────────────────────────────────────────

    def entries(self) -> Tuple[JournalEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def entries_for(self, reference_id: str) -> Tuple[JournalEntry, ...]:
        with self._lock:
            return self._by_reference.get(reference_id, ())

    def get_balance(self, account: str) -> AccountBalance:
        with self._lock:
            bucket = self._balances.get(account, {})
            return AccountBalance(
                account=account,
                total_debits=bucket.get(DebitCredit.DEBIT, 0),
                total_credits=bucket.get(DebitCredit.CREDIT, 0),
            )

    def account_balances(self) -> List[AccountBalance]:
        with self._lock:
            accounts = sorted(self._balances)
        return [self.get_balance(a) for a in accounts]

    def trial_balance(self) -> Tuple[int, int]:
        """(total debits, total credits). Always equal."""
        with self._lock:
            total_d = sum(b[DebitCredit.DEBIT] for b in self._balances.values())
            total_c = sum(b[DebitCredit.CREDIT] for b in self._balances.values())
        return total_d, total_c

    def is_trial_balanced(self) -> bool:
        d, c = self.trial_balance()
        return d == c

    def total_revenue(self) -> int:
        return self.get_balance(self._config.revenue_account).total_credits

    def total_cogs(self) -> int:
        return self.get_balance(self._config.cogs_account).total_debits

    @property
    def entry_count(self) -> int:
        with self._lock:
            return len(self._entries)
