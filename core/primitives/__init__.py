"""
POS Core Primitives — Public API
===================================
Immutable value types shared by every engine.
"""

from core.primitives.inventory import Batch, Product, ProductType, UnitOfMeasure
from core.primitives.ledger import DebitCredit, EntryKind, JournalEntry, JournalPair
from core.primitives.sale import BatchSlice, CartItem, SaleLine, SalesOrder

__all__ = [
    "Batch",
    "Product",
    "ProductType",
    "UnitOfMeasure",
    "DebitCredit",
    "EntryKind",
    "JournalEntry",
    "JournalPair",
    "BatchSlice",
    "CartItem",
    "SaleLine",
    "SalesOrder",
]
