"""
POS Reporting Engine — Analysis Read Model
=============================================
Read-only query surface handed to dashboards and to the advisory
layer. Everything returned is plain immutable data; nothing here can
reach back into the store or the books.

Provides:
- list_batches / stock_levels / low_stock_products
- next_expiry / expiring_batches
- sales_history / product_sales_series
- financial_summary (revenue, COGS, gross profit, margin)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from core.config.ledger import DEFAULT_LEDGER_CONFIG, LedgerConfig
from core.primitives.inventory import Batch, Product
from core.primitives.sale import SalesOrder
from core.time.temporal import days_until_expiry, expires_within
from engines.accounting.journal_book import JournalBook
from engines.inventory.batch_store import BatchStore
from engines.retail.sales_history import SalesHistory


# ══════════════════════════════════════════════════════════════
# VIEW TYPES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ExpiringBatch:
    product_id: str
    product_name: str
    batch: Batch
    days_left: int

    @property
    def is_expired(self) -> bool:
        return self.days_left < 0


@dataclass(frozen=True)
class FinancialSummary:
    """Aggregates in minor units; margin in percent (0 when no revenue)."""
    total_revenue: int
    total_cogs: int
    order_count: int

    @property
    def gross_profit(self) -> int:
        return self.total_revenue - self.total_cogs

    @property
    def margin_pct(self) -> float:
        if self.total_revenue <= 0:
            return 0.0
        return round(self.gross_profit * 100 / self.total_revenue, 1)

    def to_dict(self) -> dict:
        return {
            "total_revenue": self.total_revenue,
            "total_cogs": self.total_cogs,
            "gross_profit": self.gross_profit,
            "margin_pct": self.margin_pct,
            "order_count": self.order_count,
        }


# ══════════════════════════════════════════════════════════════
# READ MODEL
# ══════════════════════════════════════════════════════════════

class AnalysisReadModel:
    """Read-only façade over the store, sales history and journal book."""

    def __init__(
        self,
        store: BatchStore,
        sales_history: SalesHistory,
        journal_book: JournalBook,
        config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
    ):
        self._store = store
        self._history = sales_history
        self._book = journal_book
        self._config = config

    # ── Inventory ─────────────────────────────────────────────

    def list_batches(self, product_id: str) -> Tuple[Batch, ...]:
        return tuple(self._store.list_ordered_by_expiry(product_id))

    def products(self) -> Tuple[Product, ...]:
        return self._store.products()

    def stock_levels(self) -> Dict[str, int]:
        return self._store.stock_levels()

    def low_stock_products(self) -> Tuple[Product, ...]:
        """Products whose stock is below their min_stock_level."""
        return tuple(p for p in self._store.products() if p.is_below_min_stock)

    def next_expiry(self, product_id: str) -> Optional[Batch]:
        batches = self._store.list_ordered_by_expiry(product_id)
        return batches[0] if batches else None

    @staticmethod
    def days_until_expiry(batch: Batch, today: date) -> int:
        return days_until_expiry(batch.expiry_date, today)

    def expiring_batches(
        self,
        today: date,
        within_days: Optional[int] = None,
    ) -> Tuple[ExpiringBatch, ...]:
        """
        Batches expiring within `within_days` (config default), soonest
        first. Already-expired batches are included with negative days.
        """
        horizon = self._config.expiry_warning_days if within_days is None else within_days
        found: List[ExpiringBatch] = []
        for product in self._store.products():
            for batch in product.batches:
                if expires_within(batch.expiry_date, today, horizon):
                    found.append(ExpiringBatch(
                        product_id=product.product_id,
                        product_name=product.name,
                        batch=batch,
                        days_left=days_until_expiry(batch.expiry_date, today),
                    ))
        found.sort(key=lambda e: (e.batch.expiry_date, e.product_id, e.batch.batch_id))
        return tuple(found)

    # ── Sales ─────────────────────────────────────────────────

    def sales_history(self) -> Tuple[SalesOrder, ...]:
        return self._history.orders()

    def product_sales_series(
        self,
        product_id: str,
        window: Optional[int] = None,
    ) -> List[dict]:
        """
        Quantity of `product_id` per order over the last `window` orders
        (config default), skipping orders that did not include it.
        """
        limit = self._config.forecast_history_window if window is None else window
        series = []
        for order in self._history.recent(limit):
            qty = order.quantity_for(product_id)
            if qty > 0:
                series.append({"date": order.timestamp.isoformat(), "qty": qty})
        return series

    # ── Finance ───────────────────────────────────────────────

    def financial_summary(self) -> FinancialSummary:
        return FinancialSummary(
            total_revenue=self._book.total_revenue(),
            total_cogs=self._book.total_cogs(),
            order_count=self._history.count,
        )
