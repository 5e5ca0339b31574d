"""
POS Accounting Engine — Ledger Poster
========================================
Double-entry posting for a completed sale.

For one SalesOrder, exactly two entries are emitted, sharing
reference_id = order.order_id and timestamp = order.timestamp:

    Revenue:  DR Cash/Bank      CR Sales Revenue    order.total_amount
    COGS:     DR COGS           CR Inventory Asset  order.total_cost

Zero amounts are still posted. The pair is verified before it is
returned; a failure raises LedgerImbalanceError and nothing is emitted.
"""

from __future__ import annotations

import logging

from core.config.ledger import DEFAULT_LEDGER_CONFIG, LedgerConfig
from core.errors import LedgerImbalanceError
from core.primitives.ledger import DebitCredit, EntryKind, JournalEntry, JournalPair
from core.primitives.sale import SalesOrder
from core.time.ids import IdProvider, SequentialIdProvider

logger = logging.getLogger("pos.accounting")


def verify_pair(pair: JournalPair, order: SalesOrder) -> None:
    """
    Check the pair against the order it was derived from.

    Raises:
        LedgerImbalanceError: debits != credits, or an entry amount
                              disagrees with the order totals.
    """
    totals = pair.side_totals()
    debit_total = totals[DebitCredit.DEBIT]
    credit_total = totals[DebitCredit.CREDIT]
    if debit_total != credit_total:
        raise LedgerImbalanceError(pair.reference_id, debit_total, credit_total)

    if pair.revenue.amount != order.total_amount:
        raise LedgerImbalanceError(
            pair.reference_id, debit_total, credit_total,
            detail=(
                f"revenue entry {pair.revenue.amount} != order total_amount "
                f"{order.total_amount}"
            ),
        )
    if pair.cogs.amount != order.total_cost:
        raise LedgerImbalanceError(
            pair.reference_id, debit_total, credit_total,
            detail=(
                f"COGS entry {pair.cogs.amount} != order total_cost "
                f"{order.total_cost}"
            ),
        )
    if pair.reference_id != order.order_id:
        raise LedgerImbalanceError(
            pair.reference_id, debit_total, credit_total,
            detail=f"pair references {pair.reference_id}, order is {order.order_id}",
        )


class LedgerPoster:
    """Derives the balanced journal pair for a SalesOrder."""

    def __init__(
        self,
        config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
        id_provider: IdProvider | None = None,
    ):
        self._config = config
        self._ids = id_provider or SequentialIdProvider(
            order_prefix=config.order_id_prefix,
            entry_prefix=config.entry_id_prefix,
        )

    def post(self, order: SalesOrder) -> JournalPair:
        cfg = self._config
        revenue = JournalEntry(
            entry_id=self._ids.new_entry_id(order.order_id, 1),
            timestamp=order.timestamp,
            description=f"Sales Revenue - Order #{order.order_id}",
            debit_account=cfg.cash_account,
            credit_account=cfg.revenue_account,
            amount=order.total_amount,
            reference_id=order.order_id,
            kind=EntryKind.REVENUE,
        )
        cogs = JournalEntry(
            entry_id=self._ids.new_entry_id(order.order_id, 2),
            timestamp=order.timestamp,
            description=f"COGS - Order #{order.order_id}",
            debit_account=cfg.cogs_account,
            credit_account=cfg.inventory_account,
            amount=order.total_cost,
            reference_id=order.order_id,
            kind=EntryKind.COGS,
        )
        pair = JournalPair(revenue=revenue, cogs=cogs)
        verify_pair(pair, order)

        logger.debug(
            f"Journal pair derived for {order.order_id}: "
            f"revenue {revenue.amount}, COGS {cogs.amount}"
        )
        return pair
