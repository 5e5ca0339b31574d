"""
POS Accounting Engine — Journal Book Tests
"""

from datetime import datetime, timezone

import pytest

from core.primitives import BatchSlice, SaleLine, SalesOrder
from engines.accounting.journal_book import JournalBook
from engines.accounting.ledger_poster import LedgerPoster

NOW = datetime(2023, 10, 25, 12, 0, 0, tzinfo=timezone.utc)


def _pair(order_id, qty, price, cost):
    line = SaleLine(
        "P1", "Tomatoes", qty, price, cost,
        slices=(BatchSlice("B1", "T-NOV", qty, cost // qty),),
    )
    order = SalesOrder(order_id, NOW, "Walk-in Customer", (line,), qty * price, cost)
    return LedgerPoster().post(order)


class TestJournalBook:
    def test_post_appends_both_entries(self):
        book = JournalBook()
        book.post(_pair("TXN-1", 25, 250, 3050))
        assert book.entry_count == 2
        assert [e.entry_id for e in book.entries_for("TXN-1")] == ["JE-TXN-1-1", "JE-TXN-1-2"]
        assert book.entries_for("TXN-404") == ()

    def test_duplicate_reference_rejected(self):
        book = JournalBook()
        pair = _pair("TXN-1", 25, 250, 3050)
        book.post(pair)
        with pytest.raises(ValueError, match="append-only"):
            book.post(pair)
        assert book.entry_count == 2

    def test_account_balances(self):
        book = JournalBook()
        book.post(_pair("TXN-1", 25, 250, 3050))
        book.post(_pair("TXN-2", 10, 250, 1200))

        cash = book.get_balance("Cash/Bank")
        assert cash.total_debits == 6250 + 2500
        assert cash.net_debit == 8750
        inventory = book.get_balance("Inventory Asset")
        assert inventory.total_credits == 4250
        assert inventory.net_debit == -4250
        assert [b.account for b in book.account_balances()] == [
            "COGS", "Cash/Bank", "Inventory Asset", "Sales Revenue",
        ]

    def test_trial_balance_always_even(self):
        book = JournalBook()
        for n in range(5):
            book.post(_pair(f"TXN-{n}", n + 1, 199, (n + 1) * 77))
        debits, credits = book.trial_balance()
        assert debits == credits
        assert book.is_trial_balanced()

    def test_revenue_and_cogs_totals(self):
        book = JournalBook()
        book.post(_pair("TXN-1", 25, 250, 3050))
        book.post(_pair("TXN-2", 10, 250, 1200))
        assert book.total_revenue() == 8750
        assert book.total_cogs() == 4250

    def test_empty_book(self):
        book = JournalBook()
        assert book.total_revenue() == 0
        assert book.trial_balance() == (0, 0)
        assert book.get_balance("Cash/Bank").net_debit == 0
