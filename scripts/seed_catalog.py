#!/usr/bin/env python3
"""
Create the catalog tables and the product attributes product updates rely on.
Usage: python scripts/seed_catalog.py [--group CODE ...] [--supplier CODE ...]
"""

import argparse
import asyncio
import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from product_api.config import settings
from product_api.db import SQLiteDatabase
from product_api.catalog import EXTERNAL_SKU_ATTRIBUTE_CODE

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

REQUIRED_ATTRIBUTES = {
    EXTERNAL_SKU_ATTRIBUTE_CODE: "varchar",
    "price": "decimal",
    "cost": "decimal",
}


async def main(groups, suppliers):
    db = SQLiteDatabase(settings.database_path, table_prefix=settings.table_prefix)
    await db.initialize()

    try:
        for code, backend_type in REQUIRED_ATTRIBUTES.items():
            attribute_id = await db.add_attribute(code, backend_type)
            logger.info(f"Attribute '{code}' ready (id {attribute_id})")

        for code in groups:
            logger.info(f"Customer group '{code}' created (id {await db.add_customer_group(code)})")

        for code in suppliers:
            logger.info(f"Supplier '{code}' created (id {await db.add_supplier(code)})")
    finally:
        await db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--group", action="append", default=[], help="customer group code to create")
    parser.add_argument("--supplier", action="append", default=[], help="supplier code to create")
    args = parser.parse_args()
    asyncio.run(main(args.group, args.supplier))
