"""
POS AI Advisors — Demand Forecast Advisor
============================================
Asks the AI service to predict short-horizon demand for one product
and whether it needs restocking, given recent sales and current stock.

The response is validated field by field:
    predictedDemand        finite number >= 0
    restockRecommendation  "Urgent" | "Normal" | "None"
    reasoning              text
Anything else degrades to AdvisoryUnavailable(MALFORMED_RESPONSE).
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from ai.advisors.base import Advisor, AdvisoryClient, AdvisoryUnavailable, UnavailableReason
from core.config.ledger import DEFAULT_LEDGER_CONFIG, LedgerConfig
from engines.reporting.read_model import AnalysisReadModel


class RestockRecommendation(Enum):
    URGENT = "Urgent"
    NORMAL = "Normal"
    NONE = "None"

    @classmethod
    def parse(cls, value: Any) -> RestockRecommendation:
        if not isinstance(value, str):
            raise ValueError(f"restockRecommendation must be text, got {value!r}.")
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(
            f"restockRecommendation '{value}' not one of "
            f"{[m.value for m in cls]}."
        )


@dataclass(frozen=True)
class DemandForecast:
    product_id: str
    product_name: str
    predicted_demand: float
    recommendation: RestockRecommendation
    reasoning: str
    current_stock: int
    horizon_days: int

    available = True

    @property
    def projected_shortfall(self) -> float:
        """Units the forecast says current stock will not cover (>= 0)."""
        return max(0.0, self.predicted_demand - self.current_stock)


ForecastClient = AdvisoryClient
ForecastResult = Union[DemandForecast, AdvisoryUnavailable]


# ══════════════════════════════════════════════════════════════
# PROMPT + PARSING
# ══════════════════════════════════════════════════════════════

def build_forecast_prompt(
    product_name: str,
    current_stock: int,
    recent_sales: List[dict],
    horizon_days: int,
) -> str:
    return (
        "You are an AI Supply Chain Analyst for a perishable goods retailer.\n"
        f"Product: {product_name}\n"
        f"Current Stock: {current_stock}\n"
        f"Recent Sales Data (JSON): {json.dumps(recent_sales)}\n"
        "\n"
        f"Task: Predict the demand for the next {horizon_days} days and "
        "recommend if we need to restock immediately considering the "
        "perishable nature of the stock.\n"
        "\n"
        "Return JSON format:\n"
        "{\n"
        '  "predictedDemand": number,\n'
        '  "restockRecommendation": "Urgent" | "Normal" | "None",\n'
        '  "reasoning": "short explanation"\n'
        "}\n"
    )


def parse_forecast_payload(raw: Any) -> Mapping[str, Any]:
    """Accept a JSON string or an already decoded mapping."""
    if isinstance(raw, (str, bytes)):
        if not raw.strip():
            raise ValueError("empty response.")
        raw = json.loads(raw)
    if not isinstance(raw, Mapping):
        raise ValueError(f"expected a JSON object, got {type(raw).__name__}.")
    return raw


def _parse_demand(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"predictedDemand must be a number, got {value!r}.")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ValueError("predictedDemand is too large to be a demand figure.") from exc
    if not math.isfinite(number) or number < 0:
        raise ValueError(f"predictedDemand must be finite and >= 0, got {value!r}.")
    return number


# ══════════════════════════════════════════════════════════════
# ADVISOR
# ══════════════════════════════════════════════════════════════

class DemandForecastAdvisor(Advisor):
    """Per-product demand forecast and restock recommendation."""

    def __init__(
        self,
        client: Optional[AdvisoryClient] = None,
        config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
    ):
        super().__init__(client)
        self._config = config

    @property
    def advisor_name(self) -> str:
        return "demand_forecast"

    def forecast(self, read_model: AnalysisReadModel, product_id: str) -> ForecastResult:
        if product_id not in read_model.stock_levels():
            return self.unavailable(UnavailableReason.NO_DATA, f"unknown product '{product_id}'")

        product = next(p for p in read_model.products() if p.product_id == product_id)
        current_stock = product.total_stock
        horizon = self._config.forecast_horizon_days
        recent_sales = read_model.product_sales_series(
            product_id, window=self._config.forecast_history_window,
        )
        prompt = build_forecast_prompt(product.name, current_stock, recent_sales, horizon)

        def parse(raw: Any) -> DemandForecast:
            payload = parse_forecast_payload(raw)
            reasoning = payload.get("reasoning", "")
            if not isinstance(reasoning, str):
                raise ValueError(f"reasoning must be text, got {reasoning!r}.")
            return DemandForecast(
                product_id=product_id,
                product_name=product.name,
                predicted_demand=_parse_demand(payload.get("predictedDemand")),
                recommendation=RestockRecommendation.parse(
                    payload.get("restockRecommendation"),
                ),
                reasoning=reasoning.strip(),
                current_stock=current_stock,
                horizon_days=horizon,
            )

        return self._ask(prompt, parse)
