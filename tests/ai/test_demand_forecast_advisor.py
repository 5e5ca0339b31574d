"""
POS AI — Demand Forecast Advisor Tests
=========================================
The advisor never raises: every failure is an AdvisoryUnavailable.
"""

import json
from datetime import date, datetime, timezone

import pytest

from ai.advisors import (
    AdvisoryUnavailable,
    DemandForecast,
    DemandForecastAdvisor,
    RestockRecommendation,
    UnavailableReason,
)
from core.config import LedgerConfig
from core.primitives import Batch, CartItem, Product, UnitOfMeasure
from core.time import FixedClock
from engines.checkout.orchestrator import TransactionOrchestrator
from engines.inventory.batch_store import BatchStore
from engines.reporting.read_model import AnalysisReadModel

NOW = datetime(2023, 10, 25, 12, 0, 0, tzinfo=timezone.utc)


def _read_model(sales=(3, 4)):
    store = BatchStore.from_products([
        Product(
            "P1", "TOM-001", "Tomatoes", UnitOfMeasure.KG, 250,
            batches=(Batch("B1", "T-NOV", 40, date(2023, 11, 1), 120),),
        ),
    ])
    orch = TransactionOrchestrator(store, clock=FixedClock(NOW))
    for qty in sales:
        orch.complete_sale([CartItem("P1", qty, 250)])
    return AnalysisReadModel(store, orch.sales_history, orch.journal_book)


class RecordingClient:
    def __init__(self, response):
        self.response = response
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        return self.response


GOOD = {"predictedDemand": 45, "restockRecommendation": "Urgent", "reasoning": "Weekend spike."}


class TestForecastSuccess:
    def test_mapping_response(self):
        client = RecordingClient(GOOD)
        result = DemandForecastAdvisor(client).forecast(_read_model(), "P1")

        assert isinstance(result, DemandForecast)
        assert result.available
        assert result.predicted_demand == 45.0
        assert result.recommendation is RestockRecommendation.URGENT
        assert result.reasoning == "Weekend spike."
        assert result.current_stock == 33
        assert result.projected_shortfall == 12.0

    def test_json_text_response(self):
        client = RecordingClient(json.dumps({**GOOD, "restockRecommendation": "none"}))
        result = DemandForecastAdvisor(client).forecast(_read_model(), "P1")
        assert result.recommendation is RestockRecommendation.NONE

    def test_prompt_contains_history_stock_and_horizon(self):
        client = RecordingClient(GOOD)
        DemandForecastAdvisor(client, LedgerConfig(forecast_horizon_days=10)).forecast(
            _read_model(), "P1",
        )
        prompt = client.prompts[0]
        assert "Product: Tomatoes" in prompt
        assert "Current Stock: 33" in prompt
        assert '"qty": 3' in prompt and '"qty": 4' in prompt
        assert "next 10 days" in prompt

    def test_history_window_applied(self):
        client = RecordingClient(GOOD)
        DemandForecastAdvisor(client, LedgerConfig(forecast_history_window=1)).forecast(
            _read_model(sales=(1, 2, 3)), "P1",
        )
        assert '"qty": 3' in client.prompts[0]
        assert '"qty": 1' not in client.prompts[0]


class TestForecastUnavailable:
    def test_no_client(self):
        result = DemandForecastAdvisor().forecast(_read_model(), "P1")
        assert isinstance(result, AdvisoryUnavailable)
        assert not result.available
        assert result.reason is UnavailableReason.NO_CLIENT

    def test_unknown_product(self):
        result = DemandForecastAdvisor(RecordingClient(GOOD)).forecast(_read_model(), "P9")
        assert result.reason is UnavailableReason.NO_DATA

    def test_client_error(self):
        def failing(prompt):
            raise ConnectionError("timeout")

        result = DemandForecastAdvisor(failing).forecast(_read_model(), "P1")
        assert result.reason is UnavailableReason.CLIENT_ERROR
        assert "timeout" in result.message

    @pytest.mark.parametrize("response", [
        "",
        "not json",
        "[1, 2]",
        {**GOOD, "predictedDemand": "lots"},
        {**GOOD, "predictedDemand": -1},
        {**GOOD, "predictedDemand": float("nan")},
        {**GOOD, "predictedDemand": True},
        {**GOOD, "predictedDemand": 10 ** 400},
        json.dumps(GOOD).replace("45", "1" + "0" * 400),
        {**GOOD, "restockRecommendation": "Maybe"},
        {**GOOD, "restockRecommendation": None},
        {**GOOD, "reasoning": 42},
        None,
    ])
    def test_malformed_responses(self, response):
        result = DemandForecastAdvisor(RecordingClient(response)).forecast(_read_model(), "P1")
        assert isinstance(result, AdvisoryUnavailable)
        assert result.reason is UnavailableReason.MALFORMED_RESPONSE

    def test_forecast_never_mutates_inventory(self):
        model = _read_model()
        before = model.stock_levels()
        DemandForecastAdvisor(RecordingClient(GOOD)).forecast(model, "P1")
        assert model.stock_levels() == before
