"""
Writes against the catalog tables. Every call commits on its own.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Optional, Union
from zoneinfo import ZoneInfo

from ..db import SQLiteDatabase, PRODUCT_ENTITY_TYPE
from .resolvers import CatalogError, DEFAULT_STORE_ID

logger = logging.getLogger(__name__)

Number = Union[Decimal, float, int]


class AttributeWriteError(CatalogError):
    """An attribute could not be written."""
    pass


class SupplierLinkNotFoundError(CatalogError):
    """The product is not associated with the supplier."""
    pass


class AttributeWriter:
    """Bulk attribute updates for products in a store scope (0 = global)."""

    def __init__(self, db: SQLiteDatabase):
        self._db = db

    async def update_attributes(
        self,
        product_ids: Iterable[int],
        values: Dict[str, Any],
        store_id: int = DEFAULT_STORE_ID
    ) -> None:
        """
        Set attribute values on a group of products.

        Args:
            product_ids: Product entity ids
            values: Mapping of attribute code to new value
            store_id: Store scope of the values

        Raises:
            AttributeWriteError: if an attribute code is unknown
        """
        product_ids = list(product_ids)

        for code, value in values.items():
            row = await self._db.fetch_one(
                f"SELECT attribute_id, backend_type FROM {self._db.table('eav_attribute')} "
                "WHERE entity_type_code = ? AND attribute_code = ?",
                (PRODUCT_ENTITY_TYPE, code)
            )
            if not row:
                raise AttributeWriteError(f"Attribute '{code}' is not defined for products")

            if row["backend_type"] == "decimal" and value is not None:
                value = float(value)

            for product_id in product_ids:
                await self._db.set_attribute_value(
                    product_id, row["attribute_id"], row["backend_type"], value, store_id
                )

    async def apply(
        self,
        product_id: int,
        field: str,
        value: Any,
        store_id: int = DEFAULT_STORE_ID
    ) -> None:
        await self.update_attributes([product_id], {field: value}, store_id)


class TierPriceStore:
    """Customer group tier prices at quantity 1 on the default website."""

    def __init__(self, db: SQLiteDatabase):
        self._db = db

    async def upsert(self, product_id: int, customer_group_id: int, price: Number) -> None:
        await self._db.execute(
            f"""
            INSERT INTO {self._db.table('catalog_product_entity_tier_price')}
                (entity_id, all_groups, customer_group_id, qty, value, website_id)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(entity_id, all_groups, customer_group_id, qty, website_id) DO UPDATE SET
                value = excluded.value
            """,
            (product_id, 0, customer_group_id, 1, float(price), 0)
        )


class SupplierCostStore:
    """Supplier cost on existing supplier-product links."""

    def __init__(
        self,
        db: SQLiteDatabase,
        timezone: str = "UTC",
        clock: Optional[Callable[[], datetime]] = None
    ):
        self._db = db
        self._tz = ZoneInfo(timezone)
        self._clock = clock or (lambda: datetime.now(self._tz))

    async def update_if_linked(self, product_id: int, supplier_id: int, price: Number) -> None:
        """
        Set the supplier price on the product's supplier link.

        Raises:
            SupplierLinkNotFoundError: if no link exists; one is never created
        """
        table = self._db.table("bms_supplier_product")
        link_id = await self._db.fetch_value(
            f"SELECT sp_id FROM {table} WHERE sp_product_id = ? AND sp_sup_id = ?",
            (product_id, supplier_id)
        )
        if not link_id:
            raise SupplierLinkNotFoundError(
                f"Supplier {supplier_id} is not associated with product {product_id}"
            )

        await self._db.execute(
            f"UPDATE {table} SET sp_price = ?, sp_updated_at = ? WHERE sp_id = ?",
            (float(price), self._clock().isoformat(), link_id)
        )
