"""
POS Bootstrap — Invariant Checks
==================================
Each function verifies one ledger law about the configuration.
If any check fails → SystemBootstrapError is raised.

A ledger that posts revenue into its own cash account is worse
than no ledger.
"""

import logging

from core.bootstrap.errors import SystemBootstrapError
from core.config.ledger import LedgerConfig

logger = logging.getLogger("pos.bootstrap")


# ══════════════════════════════════════════════════════════════
# CHECK 1: Posting Accounts Are Distinct
# ══════════════════════════════════════════════════════════════

def check_distinct_accounts(config: LedgerConfig) -> None:
    """The four posting accounts must all be different."""
    names = config.account_names
    if len(set(names)) != len(names):
        raise SystemBootstrapError(
            invariant="DISTINCT_ACCOUNTS",
            detail=(
                f"Posting accounts must be distinct, got {list(names)}. "
                f"A sale would debit and credit the same account."
            ),
        )
    logger.info("✓ Posting accounts distinct.")


# ══════════════════════════════════════════════════════════════
# CHECK 2: Id Prefixes Are Distinct
# ══════════════════════════════════════════════════════════════

def check_id_prefixes(config: LedgerConfig) -> None:
    if config.order_id_prefix == config.entry_id_prefix:
        raise SystemBootstrapError(
            invariant="DISTINCT_ID_PREFIXES",
            detail=(
                f"Order and entry id prefixes are both "
                f"'{config.order_id_prefix}'."
            ),
        )
    logger.info("✓ Id prefixes distinct.")


# ══════════════════════════════════════════════════════════════
# CHECK 3: Healthy Margin Band Is Ordered
# ══════════════════════════════════════════════════════════════

def check_margin_band(config: LedgerConfig) -> None:
    if config.healthy_margin_min_pct > config.healthy_margin_max_pct:
        raise SystemBootstrapError(
            invariant="MARGIN_BAND_ORDER",
            detail=(
                f"healthy_margin_min_pct ({config.healthy_margin_min_pct}) "
                f"exceeds healthy_margin_max_pct "
                f"({config.healthy_margin_max_pct})."
            ),
        )
    logger.info("✓ Healthy margin band ordered.")
