"""
POS Ledger – Django Settings (Infrastructure Only)
===================================================
Django is the configuration and logging container for the POS ledger.
The engines never import this module; they receive a LedgerConfig
built by core.config.load_ledger_config().

Select with DJANGO_SETTINGS_MODULE=config.settings.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("POS_SECRET_KEY", "pos-ledger-dev-key")

DEBUG = os.environ.get("POS_DEBUG", "0") == "1"

# ── Installed Apps ────────────────────────────────────────────
# No models: the ledger is in-memory and the host owns persistence.
INSTALLED_APPS = []

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# ── POS Ledger ────────────────────────────────────────────────
# Keys mirror core.config.ledger.LedgerConfig fields.
POS_LEDGER = {
    "cash_account": "Cash/Bank",
    "revenue_account": "Sales Revenue",
    "cogs_account": "COGS",
    "inventory_account": "Inventory Asset",
    "currency": os.environ.get("POS_CURRENCY", "USD"),
    "default_customer_name": "Walk-in Customer",
    "forecast_history_window": 50,
    "forecast_horizon_days": 7,
    "healthy_margin_min_pct": 20.0,
    "healthy_margin_max_pct": 40.0,
    "expiry_warning_days": 14,
}

# ── Logging ───────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("POS_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "pos": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
