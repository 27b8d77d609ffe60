"""
Runner for applying update files larger than one batch.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence

from ..db import UpdateRequestItem
from .updater import BatchProductUpdater

logger = logging.getLogger(__name__)


@dataclass
class BatchRunResult:
    """Result of applying a list of items in several batches."""
    batches: int = 0
    items: int = 0
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors


def chunked(items: Sequence[UpdateRequestItem], size: int) -> Iterator[Sequence[UpdateRequestItem]]:
    """Split items into consecutive slices of at most `size`."""
    if size < 1:
        raise ValueError("Chunk size must be at least 1")
    for start in range(0, len(items), size):
        yield items[start:start + size]


async def run_in_batches(
    updater: BatchProductUpdater,
    items: Sequence[UpdateRequestItem]
) -> BatchRunResult:
    """Apply items through the updater, one max-size batch at a time."""
    result = BatchRunResult()

    for batch in chunked(items, updater.max_batch_size):
        outcome = await updater.update_product(batch)
        result.batches += 1
        result.items += len(batch)

        if outcome is not True:
            for sku, messages in outcome.items():
                result.errors.setdefault(sku, []).extend(messages)

        logger.info(f"Progress: {result.items}/{len(items)} items ({int(result.items / len(items) * 100)}%)")

    return result
