#!/usr/bin/env python3
"""
Apply a JSON file of product updates without going through the web server.
Usage: python scripts/run_update.py <updates.json>

The file holds a list of update items (same format as the API body's
"products" list). Lists longer than MAX_BATCH_SIZE are split into batches.
"""

import asyncio
import json
import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import TypeAdapter, ValidationError

from product_api.config import settings
from product_api.db import SQLiteDatabase, UpdateRequestItem
from product_api.catalog import SupplierCostStore, AttributeNotConfiguredError
from product_api.processor import BatchProductUpdater, run_in_batches

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

_items_adapter = TypeAdapter(list[UpdateRequestItem])


async def main(path: str) -> int:
    with open(path, encoding="utf-8") as f:
        try:
            items = _items_adapter.validate_python(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Invalid update file {path}: {e}")
            return 2

    if not items:
        logger.error("Update file contains no items")
        return 2

    db = SQLiteDatabase(settings.database_path, table_prefix=settings.table_prefix)
    await db.initialize()

    try:
        updater = BatchProductUpdater(
            db,
            supplier_costs=SupplierCostStore(db, timezone=settings.timezone),
            max_batch_size=settings.max_batch_size
        )
        result = await run_in_batches(updater, items)
    except AttributeNotConfiguredError as e:
        logger.error(str(e))
        return 2
    finally:
        await db.close()

    logger.info(f"Applied {result.items} items in {result.batches} batches")

    if not result.success:
        for sku, messages in result.errors.items():
            for message in messages:
                logger.error(f"  {sku}: {message}")
        return 1
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/run_update.py <updates.json>")
        sys.exit(1)
    sys.exit(asyncio.run(main(sys.argv[1])))
