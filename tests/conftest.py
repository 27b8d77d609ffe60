"""
Shared fixtures: a throwaway SQLite catalog with the attributes, products,
customer groups and suppliers the update tests need.
"""

from dataclasses import dataclass

import pytest_asyncio

from product_api.db import SQLiteDatabase
from product_api.catalog import EXTERNAL_SKU_ATTRIBUTE_CODE


@dataclass
class Catalog:
    db: SQLiteDatabase
    product_a1: int
    product_b2: int
    general_group: int
    retailer_group: int
    linked_supplier: int
    unlinked_supplier: int


async def add_product(db: SQLiteDatabase, external_sku: str) -> int:
    """Create a product carrying the given external SKU."""
    product_id = await db.create_product(f"INT-{external_sku}")
    attribute_id = await db.get_attribute_id(EXTERNAL_SKU_ATTRIBUTE_CODE)
    await db.set_attribute_value(product_id, attribute_id, "varchar", external_sku)
    return product_id


async def seed_catalog(db: SQLiteDatabase) -> Catalog:
    await db.add_attribute(EXTERNAL_SKU_ATTRIBUTE_CODE, "varchar")
    await db.add_attribute("price", "decimal")
    await db.add_attribute("cost", "decimal")

    product_a1 = await add_product(db, "A1")
    product_b2 = await add_product(db, "B2")

    linked_supplier = await db.add_supplier("SUP1", "Main supplier")
    unlinked_supplier = await db.add_supplier("SUP2")
    await db.link_supplier(product_a1, linked_supplier, price=3.5)

    return Catalog(
        db=db,
        product_a1=product_a1,
        product_b2=product_b2,
        general_group=await db.add_customer_group("General"),
        retailer_group=await db.add_customer_group("Retailer"),
        linked_supplier=linked_supplier,
        unlinked_supplier=unlinked_supplier,
    )


@pytest_asyncio.fixture
async def db(tmp_path):
    """Empty catalog schema. Tables are prefixed to exercise name resolution."""
    database = SQLiteDatabase(str(tmp_path / "catalog.db"), table_prefix="test_")
    await database.initialize()
    yield database
    await database.close()


@pytest_asyncio.fixture
async def catalog(db):
    return await seed_catalog(db)
