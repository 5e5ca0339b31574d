"""
POS Core Config — Public API
===============================
Ledger configuration (accounts, currency, advisory tuning).
Doctrine: No hardcoded account names in engine logic.
"""

from core.config.ledger import (
    DEFAULT_LEDGER_CONFIG,
    LedgerConfig,
    load_ledger_config,
)

__all__ = [
    "DEFAULT_LEDGER_CONFIG",
    "LedgerConfig",
    "load_ledger_config",
]
