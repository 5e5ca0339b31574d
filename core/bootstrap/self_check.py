"""
POS Bootstrap — Self-Check Orchestrator
=========================================
Runs all invariant checks before the first checkout.
If any check fails → SystemBootstrapError propagates.

Check order:
1. Posting accounts distinct
2. Id prefixes distinct
3. Healthy margin band ordered

No auto-fix. No fallback. No silence.
"""

import logging
from typing import Optional

from django.conf import settings
from django.utils.log import configure_logging

from core.bootstrap.invariants import (
    check_distinct_accounts,
    check_id_prefixes,
    check_margin_band,
)
from core.config.ledger import LedgerConfig, load_ledger_config

logger = logging.getLogger("pos.bootstrap")


def configure_pos_logging(source=None) -> None:
    """
    Apply the LOGGING dict of a settings object through Django's
    logging configuration (Django defaults first, then ours).
    """
    source = source if source is not None else settings
    configure_logging(
        getattr(source, "LOGGING_CONFIG", "logging.config.dictConfig"),
        getattr(source, "LOGGING", None),
    )


def run_bootstrap_checks(config: Optional[LedgerConfig] = None) -> LedgerConfig:
    """
    Execute all configuration invariant checks.

    Returns the validated LedgerConfig (loaded from settings when not
    given) so callers can boot with one call.
    """
    logger.info("═══ POS Bootstrap Self-Check Starting ═══")

    if config is None:
        config = load_ledger_config()

    check_distinct_accounts(config)
    check_id_prefixes(config)
    check_margin_band(config)

    logger.info("═══ POS Bootstrap Self-Check PASSED ═══")
    return config
