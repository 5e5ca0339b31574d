"""
POS Command Layer — Rejections
=================================
Every refused checkout carries a structured RejectionReason.
REJECTED requests are first-class citizens.
"""

from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    "RejectionReason",
    "ReasonCode",
]
