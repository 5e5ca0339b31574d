"""
POS Checkout Engine — Cart Request Policies
=============================================
Structural validation of cart lines, run before any allocation.
Each policy returns None (pass) or a RejectionReason (refuse).
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from core.commands.rejection import ReasonCode, RejectionReason
from core.primitives.sale import CartItem
from engines.inventory.batch_store import BatchStore


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def positive_quantity_policy(
    item: CartItem, store: BatchStore,
) -> Optional[RejectionReason]:
    """Reject zero, negative or non-integer quantities."""
    if _is_int(item.quantity) and item.quantity > 0:
        return None
    return RejectionReason(
        code=ReasonCode.INVALID_QUANTITY,
        message=(
            f"Quantity for product {item.product_id} must be a positive "
            f"integer, got {item.quantity!r}."
        ),
        policy_name="positive_quantity_policy",
    )


def non_negative_price_policy(
    item: CartItem, store: BatchStore,
) -> Optional[RejectionReason]:
    """Reject negative or non-integer unit prices."""
    if _is_int(item.unit_price) and item.unit_price >= 0:
        return None
    return RejectionReason(
        code=ReasonCode.INVALID_PRICE,
        message=(
            f"Unit price for product {item.product_id} must be a "
            f"non-negative integer (minor units), got {item.unit_price!r}."
        ),
        policy_name="non_negative_price_policy",
    )


def known_product_policy(
    item: CartItem, store: BatchStore,
) -> Optional[RejectionReason]:
    """Reject lines for products the store does not carry."""
    if store.has_product(item.product_id):
        return None
    return RejectionReason(
        code=ReasonCode.UNKNOWN_PRODUCT,
        message=f"Unknown product '{item.product_id}'.",
        policy_name="known_product_policy",
    )


CartPolicy = Callable[[CartItem, BatchStore], Optional[RejectionReason]]

CART_LINE_POLICIES: Sequence[CartPolicy] = (
    known_product_policy,
    positive_quantity_policy,
    non_negative_price_policy,
)


def evaluate_cart_line(
    item: CartItem,
    store: BatchStore,
    policies: Sequence[CartPolicy] = CART_LINE_POLICIES,
) -> List[RejectionReason]:
    """Run every policy against one line; collect refusals in order."""
    reasons = []
    for policy in policies:
        reason = policy(item, store)
        if reason is not None:
            reasons.append(reason)
    return reasons
