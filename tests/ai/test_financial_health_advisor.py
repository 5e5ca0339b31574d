"""
POS AI — Financial Health Advisor Tests
"""

from datetime import date, datetime, timezone

from ai.advisors import (
    AdvisoryUnavailable,
    FinancialHealthAdvisor,
    FinancialNarrative,
    MarginFigures,
    UnavailableReason,
    summarize_entries,
)
from core.primitives import Batch, CartItem, Product, UnitOfMeasure
from core.time import FixedClock
from engines.checkout.orchestrator import TransactionOrchestrator
from engines.inventory.batch_store import BatchStore

NOW = datetime(2023, 10, 25, 12, 0, 0, tzinfo=timezone.utc)


def _book(*carts):
    store = BatchStore.from_products([
        Product(
            "P1", "TOM-001", "Tomatoes", UnitOfMeasure.KG, 250,
            batches=(
                Batch("B1", "T-NOV", 20, date(2023, 11, 1), 120),
                Batch("B2", "T-DEC", 100, date(2023, 12, 15), 130),
            ),
        ),
    ])
    orch = TransactionOrchestrator(store, clock=FixedClock(NOW))
    for cart in carts:
        orch.complete_sale(cart)
    return orch.journal_book


class TestSummarizeEntries:
    def test_revenue_and_cogs_from_entries(self):
        book = _book([CartItem("P1", 25, 250)], [CartItem("P1", 10, 200)])
        figures = summarize_entries(book.entries())
        assert figures.total_revenue == 6250 + 2000
        assert figures.total_cogs == 3050 + 1300
        assert figures.gross_profit == 8250 - 4350

    def test_margin_pct(self):
        assert MarginFigures(10000, 7000).margin_pct == 30.0
        assert MarginFigures(0, 0).margin_pct == 0.0


class TestFinancialHealthAdvisor:
    def test_narrative_returned(self):
        prompts = []

        def client(prompt):
            prompts.append(prompt)
            return "  Margins are strong this month.  "

        book = _book([CartItem("P1", 25, 250)])
        result = FinancialHealthAdvisor(client).analyze(book.entries(), period="October 2023")

        assert isinstance(result, FinancialNarrative)
        assert result.available
        assert result.text == "Margins are strong this month."
        assert result.figures.margin_pct == 51.2
        assert not result.margin_healthy
        assert "Total Revenue: 62.50 USD" in prompts[0]
        assert "Cost of Goods Sold (COGS): 30.50 USD" in prompts[0]
        assert "Period: October 2023" in prompts[0]
        assert "20-40%" in prompts[0]
        assert "max 100 words" in prompts[0]

    def test_margin_inside_band_is_healthy(self):
        advisor = FinancialHealthAdvisor()
        assert advisor.is_margin_healthy(MarginFigures(10000, 7000))
        assert not advisor.is_margin_healthy(MarginFigures(10000, 9000))

    def test_no_client(self):
        book = _book([CartItem("P1", 1, 250)])
        result = FinancialHealthAdvisor().analyze(book.entries())
        assert isinstance(result, AdvisoryUnavailable)
        assert result.reason is UnavailableReason.NO_CLIENT

    def test_no_sales(self):
        result = FinancialHealthAdvisor(lambda p: "text").analyze([])
        assert result.reason is UnavailableReason.NO_DATA

    def test_client_error(self):
        def failing(prompt):
            raise RuntimeError("quota exceeded")

        book = _book([CartItem("P1", 1, 250)])
        result = FinancialHealthAdvisor(failing).analyze(book.entries())
        assert result.reason is UnavailableReason.CLIENT_ERROR

    def test_blank_narrative_is_malformed(self):
        book = _book([CartItem("P1", 1, 250)])
        result = FinancialHealthAdvisor(lambda p: "   ").analyze(book.entries())
        assert result.reason is UnavailableReason.MALFORMED_RESPONSE
