"""
Processor package for batch product updates.
"""

from .updater import (
    BatchProductUpdater,
    BatchValidationError,
    DEFAULT_MAX_BATCH_SIZE,
    MSG_INVALID_DATA,
    MSG_OVER_LIMIT,
    MSG_SKU_NOT_FOUND,
    MSG_PRICE_NOT_UPDATED,
    MSG_COST_NOT_UPDATED,
    MSG_GROUP_PRICE_NOT_UPDATED,
    MSG_SUPPLIER_COST_NOT_UPDATED,
)
from .runner import chunked, run_in_batches, BatchRunResult

__all__ = [
    "BatchProductUpdater",
    "BatchValidationError",
    "DEFAULT_MAX_BATCH_SIZE",
    "MSG_INVALID_DATA",
    "MSG_OVER_LIMIT",
    "MSG_SKU_NOT_FOUND",
    "MSG_PRICE_NOT_UPDATED",
    "MSG_COST_NOT_UPDATED",
    "MSG_GROUP_PRICE_NOT_UPDATED",
    "MSG_SUPPLIER_COST_NOT_UPDATED",
    "chunked",
    "run_in_batches",
    "BatchRunResult",
]
