"""
POS Bootstrap — Self-Check Tests
===================================
"""

import logging

import pytest

from core.bootstrap import SystemBootstrapError, configure_pos_logging, run_bootstrap_checks
from core.bootstrap.invariants import (
    check_distinct_accounts,
    check_id_prefixes,
    check_margin_band,
)
from core.config import DEFAULT_LEDGER_CONFIG, LedgerConfig


class TestInvariants:
    def test_defaults_pass(self):
        check_distinct_accounts(DEFAULT_LEDGER_CONFIG)
        check_id_prefixes(DEFAULT_LEDGER_CONFIG)
        check_margin_band(DEFAULT_LEDGER_CONFIG)

    def test_shared_account_fails(self):
        cfg = LedgerConfig(cogs_account="Inventory Asset")
        with pytest.raises(SystemBootstrapError, match="DISTINCT_ACCOUNTS"):
            check_distinct_accounts(cfg)

    def test_same_prefixes_fail(self):
        cfg = LedgerConfig(order_id_prefix="X", entry_id_prefix="X")
        with pytest.raises(SystemBootstrapError) as exc_info:
            check_id_prefixes(cfg)
        assert exc_info.value.invariant == "DISTINCT_ID_PREFIXES"

    def test_inverted_margin_band_fails(self):
        cfg = LedgerConfig(healthy_margin_min_pct=50.0, healthy_margin_max_pct=30.0)
        with pytest.raises(SystemBootstrapError, match="MARGIN_BAND_ORDER"):
            check_margin_band(cfg)


class TestRunBootstrapChecks:
    def test_returns_given_config(self):
        cfg = LedgerConfig(currency="EUR")
        assert run_bootstrap_checks(cfg) is cfg

    def test_loads_from_settings(self, settings):
        settings.POS_LEDGER = {"currency": "GBP"}
        assert run_bootstrap_checks().currency == "GBP"

    def test_broken_settings_refuse_to_boot(self, settings):
        settings.POS_LEDGER = {"revenue_account": "Cash/Bank"}
        with pytest.raises(SystemBootstrapError, match="POS BOOTSTRAP FAILURE"):
            run_bootstrap_checks()


class TestConfigurePosLogging:
    def test_applies_settings_logging(self, settings):
        settings.LOGGING = {
            "version": 1,
            "disable_existing_loggers": False,
            "loggers": {"pos": {"level": "WARNING"}},
        }
        configure_pos_logging()
        assert logging.getLogger("pos").level == logging.WARNING

    def test_explicit_source(self):
        from config import settings as project_settings

        configure_pos_logging(project_settings)
        assert logging.getLogger("pos").handlers
