"""
SQLite catalog storage.
Simple and direct - parameterized queries, no ORM.
"""

import aiosqlite
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence
import os

from .models import TierPrice, SupplierProductLink


PRODUCT_ENTITY_TYPE = "catalog_product"

# EAV backend type -> value table
VALUE_TABLES = {
    "decimal": "catalog_product_entity_decimal",
    "varchar": "catalog_product_entity_varchar",
}


class SQLiteDatabase:
    """SQLite database holding the catalog tables touched by product updates."""

    def __init__(self, db_path: str, table_prefix: str = ""):
        self.db_path = db_path
        self.table_prefix = table_prefix
        self._connection: Optional[aiosqlite.Connection] = None

    def table(self, name: str) -> str:
        """Resolve a logical table name to the physical (prefixed) one."""
        return f"{self.table_prefix}{name}"

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get or create database connection."""
        if self._connection is None:
            os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
            self._connection = await aiosqlite.connect(self.db_path)
            self._connection.row_factory = aiosqlite.Row
        return self._connection

    async def initialize(self) -> None:
        """Create catalog tables."""
        conn = await self._get_connection()
        t = self.table

        await conn.executescript(f"""
            CREATE TABLE IF NOT EXISTS {t('eav_attribute')} (
                attribute_id INTEGER PRIMARY KEY AUTOINCREMENT,
                entity_type_code TEXT NOT NULL,
                attribute_code TEXT NOT NULL,
                backend_type TEXT NOT NULL,
                UNIQUE(entity_type_code, attribute_code)
            );

            CREATE TABLE IF NOT EXISTS {t('catalog_product_entity')} (
                entity_id INTEGER PRIMARY KEY AUTOINCREMENT,
                sku TEXT NOT NULL UNIQUE,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS {t('catalog_product_entity_varchar')} (
                value_id INTEGER PRIMARY KEY AUTOINCREMENT,
                attribute_id INTEGER NOT NULL,
                store_id INTEGER NOT NULL DEFAULT 0,
                entity_id INTEGER NOT NULL,
                value TEXT,
                UNIQUE(attribute_id, store_id, entity_id)
            );

            CREATE TABLE IF NOT EXISTS {t('catalog_product_entity_decimal')} (
                value_id INTEGER PRIMARY KEY AUTOINCREMENT,
                attribute_id INTEGER NOT NULL,
                store_id INTEGER NOT NULL DEFAULT 0,
                entity_id INTEGER NOT NULL,
                value REAL,
                UNIQUE(attribute_id, store_id, entity_id)
            );

            CREATE TABLE IF NOT EXISTS {t('catalog_product_entity_tier_price')} (
                value_id INTEGER PRIMARY KEY AUTOINCREMENT,
                entity_id INTEGER NOT NULL,
                all_groups INTEGER NOT NULL DEFAULT 1,
                customer_group_id INTEGER NOT NULL DEFAULT 0,
                qty REAL NOT NULL DEFAULT 1,
                value REAL NOT NULL DEFAULT 0,
                website_id INTEGER NOT NULL DEFAULT 0,
                UNIQUE(entity_id, all_groups, customer_group_id, qty, website_id)
            );

            CREATE TABLE IF NOT EXISTS {t('customer_group')} (
                customer_group_id INTEGER PRIMARY KEY AUTOINCREMENT,
                customer_group_code TEXT NOT NULL UNIQUE
            );

            CREATE TABLE IF NOT EXISTS {t('bms_supplier')} (
                sup_id INTEGER PRIMARY KEY AUTOINCREMENT,
                sup_code TEXT NOT NULL UNIQUE,
                sup_name TEXT
            );

            CREATE TABLE IF NOT EXISTS {t('bms_supplier_product')} (
                sp_id INTEGER PRIMARY KEY AUTOINCREMENT,
                sp_product_id INTEGER NOT NULL,
                sp_sup_id INTEGER NOT NULL,
                sp_price REAL,
                sp_updated_at TEXT,
                UNIQUE(sp_product_id, sp_sup_id)
            );

            CREATE INDEX IF NOT EXISTS {t('idx_varchar_attribute_value')}
                ON {t('catalog_product_entity_varchar')}(attribute_id, store_id, value);
        """)
        await conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    # ===== Query Helpers =====

    async def fetch_one(self, query: str, params: Sequence[Any] = ()) -> Optional[aiosqlite.Row]:
        conn = await self._get_connection()
        cursor = await conn.execute(query, params)
        return await cursor.fetchone()

    async def fetch_value(self, query: str, params: Sequence[Any] = ()) -> Any:
        """Return the first column of the first row, or None."""
        row = await self.fetch_one(query, params)
        return row[0] if row else None

    async def fetch_all(self, query: str, params: Sequence[Any] = ()) -> List[aiosqlite.Row]:
        conn = await self._get_connection()
        cursor = await conn.execute(query, params)
        return await cursor.fetchall()

    async def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        """Run a single write statement and commit it. Returns the affected row count."""
        conn = await self._get_connection()
        cursor = await conn.execute(query, params)
        await conn.commit()
        return cursor.rowcount

    async def insert(self, query: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT, commit it and return the new row id."""
        conn = await self._get_connection()
        cursor = await conn.execute(query, params)
        await conn.commit()
        return cursor.lastrowid

    # ===== Reference Data =====

    async def add_attribute(
        self,
        attribute_code: str,
        backend_type: str,
        entity_type_code: str = PRODUCT_ENTITY_TYPE
    ) -> int:
        if backend_type not in VALUE_TABLES:
            raise ValueError(f"Unsupported backend type: {backend_type}")
        existing = await self.get_attribute_id(attribute_code, entity_type_code)
        if existing:
            return existing
        return await self.insert(
            f"INSERT INTO {self.table('eav_attribute')} (entity_type_code, attribute_code, backend_type) "
            "VALUES (?, ?, ?)",
            (entity_type_code, attribute_code, backend_type)
        )

    async def get_attribute_id(
        self,
        attribute_code: str,
        entity_type_code: str = PRODUCT_ENTITY_TYPE
    ) -> Optional[int]:
        return await self.fetch_value(
            f"SELECT attribute_id FROM {self.table('eav_attribute')} "
            "WHERE entity_type_code = ? AND attribute_code = ?",
            (entity_type_code, attribute_code)
        )

    async def create_product(self, sku: str) -> int:
        now = datetime.now(timezone.utc).isoformat()
        return await self.insert(
            f"INSERT INTO {self.table('catalog_product_entity')} (sku, created_at, updated_at) "
            "VALUES (?, ?, ?)",
            (sku, now, now)
        )

    async def set_attribute_value(
        self,
        product_id: int,
        attribute_id: int,
        backend_type: str,
        value: Any,
        store_id: int = 0
    ) -> None:
        """Upsert one attribute value row."""
        await self.execute(
            f"""
            INSERT INTO {self.table(VALUE_TABLES[backend_type])} (attribute_id, store_id, entity_id, value)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(attribute_id, store_id, entity_id) DO UPDATE SET
                value = excluded.value
            """,
            (attribute_id, store_id, product_id, value)
        )

    async def get_attribute_value(
        self,
        product_id: int,
        attribute_code: str,
        store_id: int = 0
    ) -> Any:
        row = await self.fetch_one(
            f"SELECT attribute_id, backend_type FROM {self.table('eav_attribute')} "
            "WHERE entity_type_code = ? AND attribute_code = ?",
            (PRODUCT_ENTITY_TYPE, attribute_code)
        )
        if not row:
            return None
        return await self.fetch_value(
            f"SELECT value FROM {self.table(VALUE_TABLES[row['backend_type']])} "
            "WHERE attribute_id = ? AND store_id = ? AND entity_id = ?",
            (row["attribute_id"], store_id, product_id)
        )

    async def add_customer_group(self, code: str) -> int:
        return await self.insert(
            f"INSERT INTO {self.table('customer_group')} (customer_group_code) VALUES (?)",
            (code,)
        )

    async def add_supplier(self, code: str, name: Optional[str] = None) -> int:
        return await self.insert(
            f"INSERT INTO {self.table('bms_supplier')} (sup_code, sup_name) VALUES (?, ?)",
            (code, name)
        )

    async def link_supplier(
        self,
        product_id: int,
        supplier_id: int,
        price: Optional[float] = None
    ) -> int:
        return await self.insert(
            f"INSERT INTO {self.table('bms_supplier_product')} (sp_product_id, sp_sup_id, sp_price) "
            "VALUES (?, ?, ?)",
            (product_id, supplier_id, price)
        )

    # ===== Lookups used by tooling and tests =====

    async def get_tier_prices(self, product_id: int) -> List[TierPrice]:
        rows = await self.fetch_all(
            f"SELECT * FROM {self.table('catalog_product_entity_tier_price')} "
            "WHERE entity_id = ? ORDER BY customer_group_id",
            (product_id,)
        )
        return [
            TierPrice(
                product_id=row["entity_id"],
                all_groups=row["all_groups"],
                customer_group_id=row["customer_group_id"],
                qty=row["qty"],
                value=row["value"],
                website_id=row["website_id"]
            )
            for row in rows
        ]

    async def get_supplier_link(self, product_id: int, supplier_id: int) -> Optional[SupplierProductLink]:
        row = await self.fetch_one(
            f"SELECT * FROM {self.table('bms_supplier_product')} WHERE sp_product_id = ? AND sp_sup_id = ?",
            (product_id, supplier_id)
        )
        return self._row_to_link(row) if row else None

    async def count_supplier_links(self) -> int:
        return await self.fetch_value(f"SELECT COUNT(*) FROM {self.table('bms_supplier_product')}")

    def _row_to_link(self, row: aiosqlite.Row) -> SupplierProductLink:
        """Convert a database row to a SupplierProductLink model."""
        updated_at = None
        if row["sp_updated_at"]:
            updated_at = datetime.fromisoformat(row["sp_updated_at"])

        return SupplierProductLink(
            id=row["sp_id"],
            product_id=row["sp_product_id"],
            supplier_id=row["sp_sup_id"],
            price=row["sp_price"],
            updated_at=updated_at
        )
