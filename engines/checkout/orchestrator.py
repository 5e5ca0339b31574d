"""
POS Checkout Engine — Transaction Orchestrator
=================================================
One checkout = one atomic unit of state change.

    cart ─▶ validate lines ─▶ (lock) sufficiency check
         ─▶ FEFO allocate on a staged clone ─▶ record SalesOrder
         ─▶ post journal pair ─▶ swap staged store in ─▶ (unlock)
         ─▶ notify subscribers

Terminal outcomes:
- COMMITTED: new product snapshot + one SalesOrder + one JournalPair.
- REJECTED:  InvalidRequestError or InsufficientStockError; the store,
             the sales history and the journal book are untouched.

There is no partial commit. The read-allocate-write step runs inside a
single lock, so two concurrent checkouts can never both consume the
same batch quantities.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from core.commands.rejection import ReasonCode
from core.config.ledger import DEFAULT_LEDGER_CONFIG, LedgerConfig
from core.errors import (
    InsufficientStockError,
    InvalidRequestError,
    PosLedgerError,
    StockShortage,
)
from core.events import DispatchReport, EventBus, PosEvent
from core.primitives.inventory import Product
from core.primitives.ledger import JournalPair
from core.primitives.sale import CartItem, SalesOrder
from core.time.clock import Clock, SystemClock
from core.time.ids import IdProvider, SequentialIdProvider
from engines.accounting.journal_book import JournalBook
from engines.accounting.ledger_poster import LedgerPoster
from engines.checkout.events import (
    CHECKOUT_SALE_COMMITTED_V1,
    CHECKOUT_SALE_REJECTED_V1,
    build_sale_committed_payload,
    build_sale_rejected_payload,
)
from engines.checkout.policies import evaluate_cart_line
from engines.inventory.allocator import Allocation, FefoAllocator
from engines.inventory.batch_store import BatchStore
from engines.inventory.policies import aggregate_demand, stock_sufficiency_policy
from engines.retail.sale_recorder import SaleRecorder
from engines.retail.sales_history import SalesHistory

logger = logging.getLogger("pos.checkout")


# ══════════════════════════════════════════════════════════════
# RESULTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CheckoutResult:
    """Everything a committed checkout changed, handed back at once."""
    products: Tuple[Product, ...]
    order: SalesOrder
    entries: JournalPair


@dataclass(frozen=True)
class SalePreview:
    """What complete_sale() would do right now, computed without mutation."""
    allocations: Tuple[Allocation, ...]
    total_amount: int
    total_cost: int
    shortages: Tuple[StockShortage, ...]

    @property
    def feasible(self) -> bool:
        return not self.shortages

    @property
    def gross_profit(self) -> int:
        return self.total_amount - self.total_cost


# ══════════════════════════════════════════════════════════════
# ORCHESTRATOR
# ══════════════════════════════════════════════════════════════

class TransactionOrchestrator:
    """
    Coordinates allocator, sale recorder and ledger poster into one
    checkout against an explicitly owned BatchStore.
    """

    def __init__(
        self,
        store: BatchStore,
        *,
        config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
        clock: Optional[Clock] = None,
        id_provider: Optional[IdProvider] = None,
        sales_history: Optional[SalesHistory] = None,
        journal_book: Optional[JournalBook] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self._store = store
        self._config = config
        self._clock = clock or SystemClock()
        self._ids = id_provider or SequentialIdProvider(
            order_prefix=config.order_id_prefix,
            entry_prefix=config.entry_id_prefix,
        )
        self._history = sales_history if sales_history is not None else SalesHistory()
        self._book = journal_book if journal_book is not None else JournalBook(config)
        self._bus = event_bus if event_bus is not None else EventBus()
        self._recorder = SaleRecorder(config)
        self._poster = LedgerPoster(config, id_provider=self._ids)
        self._lock = threading.Lock()

    # ── Accessors ─────────────────────────────────────────────

    @property
    def store(self) -> BatchStore:
        return self._store

    @property
    def sales_history(self) -> SalesHistory:
        return self._history

    @property
    def journal_book(self) -> JournalBook:
        return self._book

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    # ── Validation ────────────────────────────────────────────

    def _validate_cart(self, cart: Sequence[CartItem]) -> None:
        if not cart:
            raise InvalidRequestError(
                code=ReasonCode.EMPTY_CART,
                detail="cart has no lines.",
            )
        for index, item in enumerate(cart):
            reasons = evaluate_cart_line(item, self._store)
            if reasons:
                first = reasons[0]
                raise InvalidRequestError(
                    code=first.code,
                    detail=first.message,
                    product_id=item.product_id,
                    line_index=index,
                )

    # ── Preview (read-only) ───────────────────────────────────

    def preview_sale(self, cart_items: Iterable[CartItem]) -> SalePreview:
        """
        Dry-run a checkout. Never mutates; calling it twice in a row
        returns equal previews.

        Lines for a product that appears more than once are previewed
        against the stock left by the earlier lines.
        """
        cart = tuple(cart_items)
        self._validate_cart(cart)

        with self._lock:
            shortages = stock_sufficiency_policy(aggregate_demand(cart), self._store)
            allocator = FefoAllocator(self._store.clone())
            allocations: List[Allocation] = []
            for item in cart:
                plan = allocator.preview(item.product_id, item.quantity)
                if plan.fully_fulfilled:
                    allocator.allocate(item.product_id, item.quantity)
                allocations.append(plan)

        return SalePreview(
            allocations=tuple(allocations),
            total_amount=sum(item.line_amount for item in cart),
            total_cost=sum(a.total_cost for a in allocations),
            shortages=shortages,
        )

    # ── Checkout ──────────────────────────────────────────────

    def complete_sale(
        self,
        cart_items: Iterable[CartItem],
        customer_name: Optional[str] = None,
    ) -> CheckoutResult:
        """
        Allocate, record and post one checkout atomically.

        Raises:
            InvalidRequestError:    empty cart, non-positive quantity,
                                    negative price or unknown product.
            InsufficientStockError: at least one product is short; lists
                                    every short product.
            LedgerImbalanceError:   internal invariant failure.
            ValueError:             the order id is already recorded or
                                    posted; nothing is committed.
        """
        cart = tuple(cart_items)
        try:
            self._validate_cart(cart)
            result = self._commit(cart, customer_name)
        except (InvalidRequestError, InsufficientStockError) as exc:
            self._notify_rejected(cart, exc)
            raise

        logger.info(
            f"Sale COMMITTED: {result.order.order_id} — "
            f"{len(result.order.lines)} lines, amount {result.order.total_amount}, "
            f"cost {result.order.total_cost}"
        )
        self._notify_committed(result)
        return result

    def _commit(
        self,
        cart: Tuple[CartItem, ...],
        customer_name: Optional[str],
    ) -> CheckoutResult:
        with self._lock:
            demand = aggregate_demand(cart)
            shortages = stock_sufficiency_policy(demand, self._store)
            if shortages:
                raise InsufficientStockError(shortages)

            staged = self._store.clone()
            allocator = FefoAllocator(staged)
            allocations = [
                allocator.allocate(item.product_id, item.quantity)
                for item in cart
            ]

            now = self._clock.now_utc()
            order = self._recorder.record(
                order_id=self._ids.new_order_id(now),
                timestamp=now,
                cart_items=cart,
                allocations=allocations,
                product_names={
                    pid: staged.get_product(pid).name for pid in demand
                },
                customer_name=customer_name,
            )
            pair = self._poster.post(order)
            self._ensure_unrecorded(order.order_id)

            # Commit point: nothing above touched shared state.
            self._store.replace_with(staged)
            self._history.record(order)
            self._book.post(pair)

            return CheckoutResult(
                products=self._store.products(),
                order=order,
                entries=pair,
            )

    def _ensure_unrecorded(self, order_id: str) -> None:
        """Refuse an order id the history or the book already holds."""
        if self._history.get(order_id) is not None:
            raise ValueError(
                f"Order {order_id} already recorded in sales history; "
                f"nothing was committed."
            )
        if self._book.entries_for(order_id):
            raise ValueError(
                f"Reference {order_id} already posted in the journal; "
                f"nothing was committed."
            )

    # ── Notification ──────────────────────────────────────────

    def _notify_committed(self, result: CheckoutResult) -> DispatchReport:
        event = PosEvent(
            event_type=CHECKOUT_SALE_COMMITTED_V1,
            event_id=str(uuid.uuid4()),
            occurred_at=result.order.timestamp,
            payload=build_sale_committed_payload(result.order, result.entries),
        )
        return self._bus.publish(event)

    def _notify_rejected(self, cart: Sequence[CartItem], exc: PosLedgerError) -> DispatchReport:
        reason = exc.to_rejection_reason()
        logger.info(f"Sale REJECTED: {reason.code} — {reason.message}")
        event = PosEvent(
            event_type=CHECKOUT_SALE_REJECTED_V1,
            event_id=str(uuid.uuid4()),
            occurred_at=self._clock.now_utc(),
            payload=build_sale_rejected_payload(cart, reason),
        )
        return self._bus.publish(event)
