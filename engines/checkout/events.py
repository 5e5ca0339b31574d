"""
POS Checkout Engine — Event Types and Payload Builders
========================================================
Events are emitted AFTER the checkout has committed (or refused);
subscribers observe, they never participate in the decision.
"""

from __future__ import annotations

from typing import Sequence

from core.commands.rejection import RejectionReason
from core.primitives.ledger import JournalPair
from core.primitives.sale import CartItem, SalesOrder


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

CHECKOUT_SALE_COMMITTED_V1 = "checkout.sale.committed.v1"
CHECKOUT_SALE_REJECTED_V1 = "checkout.sale.rejected.v1"

CHECKOUT_EVENT_TYPES = (
    CHECKOUT_SALE_COMMITTED_V1,
    CHECKOUT_SALE_REJECTED_V1,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_sale_committed_payload(order: SalesOrder, pair: JournalPair) -> dict:
    return {
        "order": order.to_dict(),
        "entries": [entry.to_dict() for entry in pair],
        "product_ids": sorted({line.product_id for line in order.lines}),
    }


def build_sale_rejected_payload(
    cart_items: Sequence[CartItem],
    reason: RejectionReason,
) -> dict:
    return {
        "cart": [
            {
                "product_id": item.product_id,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
            }
            for item in cart_items
        ],
        "reason": reason.to_dict(),
    }
