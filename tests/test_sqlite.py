"""
Tests for SQLiteDatabase helpers.
"""

from datetime import datetime

import pytest


class TestSQLiteDatabase:
    """Tests for table naming and reference data helpers."""

    def test_table_prefix(self, db):
        assert db.table("customer_group") == "test_customer_group"

    @pytest.mark.asyncio
    async def test_create_product_timestamps_are_utc_aware(self, db):
        product_id = await db.create_product("INT-TS")

        row = await db.fetch_one(
            f"SELECT created_at, updated_at FROM {db.table('catalog_product_entity')} WHERE entity_id = ?",
            (product_id,)
        )
        created_at = datetime.fromisoformat(row["created_at"])
        assert created_at.utcoffset().total_seconds() == 0
        assert row["updated_at"] == row["created_at"]

    @pytest.mark.asyncio
    async def test_add_attribute_is_idempotent(self, db):
        first = await db.add_attribute("price", "decimal")

        assert await db.add_attribute("price", "decimal") == first

    @pytest.mark.asyncio
    async def test_add_attribute_rejects_unknown_backend(self, db):
        with pytest.raises(ValueError, match="Unsupported backend type"):
            await db.add_attribute("weight", "int")
