"""
Database package - SQLite only.
"""

from .models import (
    UpdateRequestItem, UpdateRequest, CustomerGroupPrice, TierPrice,
    SupplierProductLink, ErrorReport, BatchResult
)
from .sqlite import SQLiteDatabase, VALUE_TABLES, PRODUCT_ENTITY_TYPE

__all__ = [
    "SQLiteDatabase",
    "VALUE_TABLES",
    "PRODUCT_ENTITY_TYPE",
    "UpdateRequestItem",
    "UpdateRequest",
    "CustomerGroupPrice",
    "TierPrice",
    "SupplierProductLink",
    "ErrorReport",
    "BatchResult",
]
