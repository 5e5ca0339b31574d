"""
POS Inventory Engine — FEFO Allocator Tests
==============================================
FEFO ordering, exact slice costing and full-or-nothing behavior.
"""

from datetime import date

import pytest

from core.commands.rejection import ReasonCode
from core.errors import InsufficientStockError, InvalidRequestError
from core.primitives import Batch, Product, UnitOfMeasure
from engines.inventory.allocator import FefoAllocator, plan_fefo
from engines.inventory.batch_store import BatchStore

NOV_1 = date(2023, 11, 1)
DEC_15 = date(2023, 12, 15)


def _store():
    return BatchStore.from_products([
        Product(
            product_id="P1", sku="TOM-001", name="Tomatoes",
            unit=UnitOfMeasure.KG, selling_price=250,
            batches=(
                Batch("B1", "T-NOV", 20, NOV_1, 120),
                Batch("B2", "T-DEC", 100, DEC_15, 130),
            ),
        ),
    ])


class TestPlanFefo:
    def test_pure_walk(self):
        batches = [Batch("B1", "X", 20, NOV_1, 120), Batch("B2", "Y", 100, DEC_15, 130)]
        slices, left = plan_fefo(batches, 25)
        assert [(s.batch_id, s.quantity) for s in slices] == [("B1", 20), ("B2", 5)]
        assert [(b.batch_id, b.quantity) for b in left] == [("B2", 95)]
        assert batches[0].quantity == 20

    def test_stops_when_satisfied(self):
        batches = [Batch("B1", "X", 20, NOV_1, 120), Batch("B2", "Y", 100, DEC_15, 130)]
        slices, left = plan_fefo(batches, 10)
        assert len(slices) == 1
        assert [b.quantity for b in left] == [10, 100]


class TestAllocate:
    def test_spans_batches_with_exact_cost(self):
        store = _store()
        result = FefoAllocator(store).allocate("P1", 25)

        assert result.fully_fulfilled
        assert result.quantity_deducted == 25
        assert [(s.batch_id, s.quantity, s.unit_cost) for s in result.slices] == [
            ("B1", 20, 120),
            ("B2", 5, 130),
        ]
        assert result.total_cost == 20 * 120 + 5 * 130  # 3050, never 25 × 120
        assert [(b.batch_id, b.quantity) for b in result.remaining_batches] == [("B2", 95)]
        assert store.total_stock("P1") == 95

    def test_earliest_batch_drained_before_later_touched(self):
        store = _store()
        allocator = FefoAllocator(store)
        first = allocator.allocate("P1", 15)
        assert [s.batch_id for s in first.slices] == ["B1"]
        second = allocator.allocate("P1", 10)
        assert [(s.batch_id, s.quantity) for s in second.slices] == [("B1", 5), ("B2", 5)]

    def test_exact_exhaustion_removes_batch(self):
        store = _store()
        FefoAllocator(store).allocate("P1", 20)
        assert [b.batch_id for b in store.list_ordered_by_expiry("P1")] == ["B2"]

    def test_insufficient_stock_touches_nothing(self):
        store = _store()
        with pytest.raises(InsufficientStockError) as exc_info:
            FefoAllocator(store).allocate("P1", 200)
        assert exc_info.value.requested == 200
        assert exc_info.value.available == 120
        assert store.total_stock("P1") == 120
        assert len(store.list_ordered_by_expiry("P1")) == 2

    @pytest.mark.parametrize("qty", [0, -3, 2.5, True])
    def test_invalid_quantity(self, qty):
        with pytest.raises(InvalidRequestError) as exc_info:
            FefoAllocator(_store()).allocate("P1", qty)
        assert exc_info.value.code == ReasonCode.INVALID_QUANTITY

    def test_cost_per_unit_display(self):
        result = FefoAllocator(_store()).allocate("P1", 25)
        assert result.cost_per_unit == 3050 // 25


class TestPreview:
    def test_preview_does_not_mutate(self):
        store = _store()
        allocator = FefoAllocator(store)
        first = allocator.preview("P1", 25)
        second = allocator.preview("P1", 25)
        assert first == second
        assert store.total_stock("P1") == 120

    def test_preview_reports_shortfall(self):
        plan = FefoAllocator(_store()).preview("P1", 200)
        assert not plan.fully_fulfilled
        assert plan.quantity_unfulfilled == 80
        assert plan.shortage().available == 120
