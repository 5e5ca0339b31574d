"""
POS Core Config — Ledger Configuration
=========================================
Doctrine: No hardcoded account names in engine logic.
Account names, currency and advisory tuning come from the Django
settings module (`POS_LEDGER` dict) or fall back to the defaults below.
Engines receive a LedgerConfig explicitly; they never read settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from django.conf import ENVIRONMENT_VARIABLE, settings


# ══════════════════════════════════════════════════════════════
# LEDGER CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LedgerConfig:
    """
    Immutable configuration for allocation, posting and advisory work.

    Money settings are minor currency units; percentages are floats
    in 0..100.
    """

    cash_account: str = "Cash/Bank"
    revenue_account: str = "Sales Revenue"
    cogs_account: str = "COGS"
    inventory_account: str = "Inventory Asset"
    currency: str = "USD"
    order_id_prefix: str = "TXN"
    entry_id_prefix: str = "JE"
    default_customer_name: str = "Walk-in Customer"
    forecast_history_window: int = 50
    forecast_horizon_days: int = 7
    healthy_margin_min_pct: float = 20.0
    healthy_margin_max_pct: float = 40.0
    expiry_warning_days: int = 14

    def __post_init__(self) -> None:
        for name in (
            "cash_account", "revenue_account", "cogs_account",
            "inventory_account", "order_id_prefix", "entry_id_prefix",
            "default_customer_name",
        ):
            value = getattr(self, name)
            if not value or not isinstance(value, str):
                raise ValueError(f"{name} must be a non-empty string.")
        if len(self.currency) != 3 or not self.currency.isupper():
            raise ValueError(
                f"currency must be 3-letter ISO 4217 code, got '{self.currency}'."
            )
        if self.forecast_history_window <= 0:
            raise ValueError("forecast_history_window must be positive.")
        if self.forecast_horizon_days <= 0:
            raise ValueError("forecast_horizon_days must be positive.")
        if self.expiry_warning_days < 0:
            raise ValueError("expiry_warning_days cannot be negative.")
        if not 0 <= self.healthy_margin_min_pct <= 100:
            raise ValueError("healthy_margin_min_pct must be between 0 and 100.")
        if not 0 <= self.healthy_margin_max_pct <= 100:
            raise ValueError("healthy_margin_max_pct must be between 0 and 100.")

    @property
    def account_names(self) -> tuple:
        return (
            self.cash_account,
            self.revenue_account,
            self.cogs_account,
            self.inventory_account,
        )

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_LEDGER_CONFIG = LedgerConfig()

_KNOWN_KEYS = frozenset(f.name for f in fields(LedgerConfig))


# ══════════════════════════════════════════════════════════════
# LOADER
# ══════════════════════════════════════════════════════════════

def _settings_available() -> bool:
    return settings.configured or bool(os.environ.get(ENVIRONMENT_VARIABLE))


def load_ledger_config(source: Optional[Any] = None) -> LedgerConfig:
    """
    Build a LedgerConfig from a settings object.

    Args:
        source: Anything with a `POS_LEDGER` attribute (a settings
                module, `django.conf.settings`, a namespace in tests).
                Defaults to `django.conf.settings` when a settings
                module is configured; otherwise defaults are returned.

    Raises:
        ValueError: unknown keys or invalid values in POS_LEDGER.
    """
    if source is None:
        if not _settings_available():
            return DEFAULT_LEDGER_CONFIG
        source = settings

    overrides: Mapping[str, Any] = getattr(source, "POS_LEDGER", None) or {}
    if not isinstance(overrides, Mapping):
        raise ValueError("POS_LEDGER must be a mapping.")

    unknown = sorted(set(overrides) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown POS_LEDGER keys: {unknown}")

    return LedgerConfig(**dict(overrides))
