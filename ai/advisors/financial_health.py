"""
POS AI Advisors — Financial Health Advisor
=============================================
Summarises revenue, COGS and gross margin from posted journal entries
and asks the AI service for a short executive narrative.

The figures and the healthy-margin verdict are computed locally;
only the prose comes from the service.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from ai.advisors.base import Advisor, AdvisoryClient, AdvisoryUnavailable, UnavailableReason
from core.config.ledger import DEFAULT_LEDGER_CONFIG, LedgerConfig
from core.primitives.ledger import JournalEntry


@dataclass(frozen=True)
class MarginFigures:
    total_revenue: int
    total_cogs: int

    @property
    def gross_profit(self) -> int:
        return self.total_revenue - self.total_cogs

    @property
    def margin_pct(self) -> float:
        if self.total_revenue <= 0:
            return 0.0
        return round(self.gross_profit * 100 / self.total_revenue, 1)


@dataclass(frozen=True)
class FinancialNarrative:
    period: str
    figures: MarginFigures
    margin_healthy: bool
    text: str

    available = True


NarrativeClient = AdvisoryClient
NarrativeResult = Union[FinancialNarrative, AdvisoryUnavailable]


def summarize_entries(
    entries: Iterable[JournalEntry],
    config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
) -> MarginFigures:
    revenue = 0
    cogs = 0
    for entry in entries:
        if entry.credit_account == config.revenue_account:
            revenue += entry.amount
        if entry.debit_account == config.cogs_account:
            cogs += entry.amount
    return MarginFigures(total_revenue=revenue, total_cogs=cogs)


def _format_minor(amount: int) -> str:
    sign = "-" if amount < 0 else ""
    whole, cents = divmod(abs(amount), 100)
    return f"{sign}{whole}.{cents:02d}"


def build_narrative_prompt(
    period: str,
    figures: MarginFigures,
    config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
) -> str:
    return (
        "Role: Senior Accounting Professor & Financial Analyst.\n"
        "Context: Analysis for a perishable goods retailer.\n"
        f"Period: {period}\n"
        "Data:\n"
        f"- Total Revenue: {_format_minor(figures.total_revenue)} {config.currency}\n"
        f"- Cost of Goods Sold (COGS): {_format_minor(figures.total_cogs)} {config.currency}\n"
        f"- Gross Profit: {_format_minor(figures.gross_profit)} {config.currency}\n"
        f"- Gross Margin: {figures.margin_pct}%\n"
        "\n"
        "Provide a concise executive summary (max 100 words) on the "
        "financial health and margin analysis. Mention if the margin is "
        "healthy for a retail food business (typically "
        f"{config.healthy_margin_min_pct:g}-{config.healthy_margin_max_pct:g}%).\n"
    )


class FinancialHealthAdvisor(Advisor):
    """Executive narrative over the journal."""

    def __init__(
        self,
        client: Optional[AdvisoryClient] = None,
        config: LedgerConfig = DEFAULT_LEDGER_CONFIG,
    ):
        super().__init__(client)
        self._config = config

    @property
    def advisor_name(self) -> str:
        return "financial_health"

    def is_margin_healthy(self, figures: MarginFigures) -> bool:
        return (
            self._config.healthy_margin_min_pct
            <= figures.margin_pct
            <= self._config.healthy_margin_max_pct
        )

    def analyze(
        self,
        entries: Iterable[JournalEntry],
        period: str = "Current Month",
    ) -> NarrativeResult:
        figures = summarize_entries(entries, self._config)
        if figures.total_revenue == 0 and figures.total_cogs == 0:
            return self.unavailable(UnavailableReason.NO_DATA, "no posted sales in period")

        healthy = self.is_margin_healthy(figures)
        prompt = build_narrative_prompt(period, figures, self._config)

        def parse(raw: Any) -> FinancialNarrative:
            if not isinstance(raw, str) or not raw.strip():
                raise ValueError("empty narrative.")
            return FinancialNarrative(
                period=period,
                figures=figures,
                margin_healthy=healthy,
                text=raw.strip(),
            )

        return self._ask(prompt, parse)
