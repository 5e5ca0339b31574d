"""
POS Bootstrap — System Self-Defense
=====================================
Ensures the checkout never starts with a broken ledger configuration.
"""

from core.bootstrap.errors import SystemBootstrapError
from core.bootstrap.self_check import configure_pos_logging, run_bootstrap_checks

__all__ = [
    "SystemBootstrapError",
    "configure_pos_logging",
    "run_bootstrap_checks",
]
