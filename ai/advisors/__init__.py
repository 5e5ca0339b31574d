"""
POS AI Advisors — Public API
================================
"""

from ai.advisors.base import (
    Advisor,
    AdvisoryClient,
    AdvisoryUnavailable,
    UnavailableReason,
)
from ai.advisors.demand_forecast import (
    DemandForecast,
    DemandForecastAdvisor,
    ForecastClient,
    RestockRecommendation,
)
from ai.advisors.financial_health import (
    FinancialHealthAdvisor,
    FinancialNarrative,
    MarginFigures,
    NarrativeClient,
    summarize_entries,
)

__all__ = [
    "Advisor",
    "AdvisoryClient",
    "AdvisoryUnavailable",
    "UnavailableReason",
    "DemandForecast",
    "DemandForecastAdvisor",
    "ForecastClient",
    "RestockRecommendation",
    "FinancialHealthAdvisor",
    "FinancialNarrative",
    "MarginFigures",
    "NarrativeClient",
    "summarize_entries",
]
