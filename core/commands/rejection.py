"""
POS Command Layer — Rejection Model
======================================
Structured rejection reasons for refused checkouts.

This is NOT an exception. It is an explanation structure that
every checkout error can be turned into for audit and display.

Every rejection must be:
- Deterministic (same cart + same stock → same rejection)
- Auditable (code + message + policy)
- Machine-readable (code)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a refused checkout.

    Fields:
        code:        Machine-readable code (e.g. 'INSUFFICIENT_STOCK').
        message:     Human-readable explanation.
        policy_name: Name of the check that refused the request.
        details:     Supporting data (shortages, offending line, ...).
    """

    code: str
    message: str
    policy_name: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
            "details": dict(self.details),
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Cart structure ────────────────────────────────────────
    EMPTY_CART = "EMPTY_CART"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_PRICE = "INVALID_PRICE"
    UNKNOWN_PRODUCT = "UNKNOWN_PRODUCT"

    # ── Stock ─────────────────────────────────────────────────
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"

    # ── Ledger ────────────────────────────────────────────────
    LEDGER_IMBALANCE = "LEDGER_IMBALANCE"
