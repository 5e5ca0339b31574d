"""
POS Inventory Engine — Batch Store Tests
===========================================
Receiving, expiry ordering, deductions and staging.
"""

from datetime import date

import pytest

from core.primitives import Batch, Product, UnitOfMeasure
from engines.inventory.batch_store import BatchStore


def _tomatoes(*batches):
    return Product(
        product_id="P1", sku="TOM-001", name="Tomatoes",
        unit=UnitOfMeasure.KG, selling_price=250, min_stock_level=30,
        batches=tuple(batches),
    )


def _store():
    return BatchStore.from_products([
        _tomatoes(
            Batch("B-LATE", "T-DEC", 100, date(2023, 12, 15), 130),
            Batch("B-EARLY", "T-NOV", 20, date(2023, 11, 1), 120),
        ),
    ])


class TestCatalog:
    def test_from_products(self):
        store = _store()
        assert store.has_product("P1")
        assert store.product_ids() == ["P1"]
        assert store.total_stock("P1") == 120

    def test_duplicate_product_rejected(self):
        store = _store()
        with pytest.raises(ValueError, match="already registered"):
            store.add_product(_tomatoes())

    def test_zero_quantity_batches_not_stored(self):
        store = BatchStore.from_products([
            _tomatoes(Batch("B0", "EMPTY", 0, date(2023, 11, 1), 100)),
        ])
        assert store.list_ordered_by_expiry("P1") == []

    def test_unknown_product_raises_key_error(self):
        with pytest.raises(KeyError, match="Unknown product"):
            _store().total_stock("NOPE")


class TestExpiryOrdering:
    def test_earliest_expiry_first(self):
        ordered = _store().list_ordered_by_expiry("P1")
        assert [b.batch_id for b in ordered] == ["B-EARLY", "B-LATE"]

    def test_tie_broken_by_batch_id(self):
        same_day = date(2023, 11, 1)
        store = BatchStore.from_products([
            _tomatoes(
                Batch("B2", "X", 5, same_day, 100),
                Batch("B1", "Y", 5, same_day, 100),
            ),
        ])
        assert [b.batch_id for b in store.list_ordered_by_expiry("P1")] == ["B1", "B2"]

    def test_product_snapshot_in_expiry_order(self):
        product = _store().get_product("P1")
        assert [b.batch_id for b in product.batches] == ["B-EARLY", "B-LATE"]
        assert product.total_stock == 120


class TestReceiving:
    def test_receive_generates_id(self):
        store = _store()
        batch_id = store.receive_batch("P1", "T-JAN", 40, date(2024, 1, 10), 125)
        assert batch_id == "BATCH-P1-0001"
        assert store.total_stock("P1") == 160

    def test_receive_with_explicit_id(self):
        store = _store()
        assert store.receive_batch("P1", "T", 1, date(2024, 1, 1), 1, batch_id="MINE") == "MINE"

    def test_receive_duplicate_id_rejected(self):
        store = _store()
        with pytest.raises(ValueError, match="already exists"):
            store.receive_batch("P1", "T", 1, date(2024, 1, 1), 1, batch_id="B-LATE")

    def test_receive_rejects_non_positive(self):
        with pytest.raises(ValueError, match="positive"):
            _store().receive_batch("P1", "T", 0, date(2024, 1, 1), 1)

    def test_receive_validates_cost(self):
        with pytest.raises(ValueError, match="negative"):
            _store().receive_batch("P1", "T", 1, date(2024, 1, 1), -1)


class TestDeduction:
    def test_partial_deduction(self):
        store = _store()
        left = store.apply_deduction("P1", "B-LATE", 25)
        assert left == 75
        assert store.total_stock("P1") == 95

    def test_exact_exhaustion_removes_batch(self):
        store = _store()
        assert store.apply_deduction("P1", "B-EARLY", 20) == 0
        assert [b.batch_id for b in store.list_ordered_by_expiry("P1")] == ["B-LATE"]

    def test_over_deduction_rejected(self):
        store = _store()
        with pytest.raises(ValueError, match="exceeds"):
            store.apply_deduction("P1", "B-EARLY", 21)
        assert store.total_stock("P1") == 120

    def test_unknown_batch(self):
        with pytest.raises(KeyError, match="Unknown batch"):
            _store().apply_deduction("P1", "B-NONE", 1)

    def test_non_positive_deduction(self):
        with pytest.raises(ValueError, match="positive"):
            _store().apply_deduction("P1", "B-EARLY", 0)


class TestStaging:
    def test_clone_is_independent(self):
        store = _store()
        staged = store.clone()
        staged.apply_deduction("P1", "B-EARLY", 20)
        assert store.total_stock("P1") == 120
        assert staged.total_stock("P1") == 100

    def test_replace_with_adopts_staged_state(self):
        store = _store()
        staged = store.clone()
        staged.apply_deduction("P1", "B-LATE", 10)
        store.replace_with(staged)
        assert store.total_stock("P1") == 110

        # The staged copy no longer aliases the live store.
        staged.apply_deduction("P1", "B-LATE", 10)
        assert store.total_stock("P1") == 110

    def test_inventory_value_and_low_stock(self):
        store = _store()
        assert store.total_inventory_value() == 20 * 120 + 100 * 130
        store.apply_deduction("P1", "B-LATE", 95)
        assert store.get_product("P1").is_below_min_stock
