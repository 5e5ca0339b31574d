"""
POS AI Module — Advisory Only
================================
Advisors explain and forecast; they never commit state and are never
consulted by the checkout.
"""

from ai.advisors import (
    AdvisoryUnavailable,
    DemandForecast,
    DemandForecastAdvisor,
    FinancialHealthAdvisor,
    FinancialNarrative,
    UnavailableReason,
)

__all__ = [
    "AdvisoryUnavailable",
    "DemandForecast",
    "DemandForecastAdvisor",
    "FinancialHealthAdvisor",
    "FinancialNarrative",
    "UnavailableReason",
]
