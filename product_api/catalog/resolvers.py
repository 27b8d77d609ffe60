"""
Lookups that turn external identifiers into internal catalog ids.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..db import SQLiteDatabase

logger = logging.getLogger(__name__)


# Product attribute carrying the ERP ("Tradetrek") SKU
EXTERNAL_SKU_ATTRIBUTE_CODE = "tradetrek_sku"
DEFAULT_STORE_ID = 0


class CatalogError(Exception):
    """Base exception for catalog lookups and writes."""
    pass


class AttributeNotConfiguredError(CatalogError):
    """The attribute used to resolve external SKUs does not exist."""
    pass


@dataclass
class ResolverCache:
    """
    Lookups memoized for one batch call.

    Misses are stored as None so an unknown name is only queried once.
    """
    customer_groups: Dict[str, Optional[int]] = field(default_factory=dict)
    suppliers: Dict[str, Optional[int]] = field(default_factory=dict)


class IdentifierResolver:
    """
    Resolves an external SKU to a product entity id.

    The attribute id is looked up on first use and then kept for the
    lifetime of the resolver, which lives as long as the process.
    """

    def __init__(self, db: SQLiteDatabase, attribute_code: str = EXTERNAL_SKU_ATTRIBUTE_CODE):
        self._db = db
        self.attribute_code = attribute_code
        self._attribute_id: Optional[int] = None

    async def attribute_id(self) -> int:
        """
        Get the id of the external SKU attribute.

        Raises:
            AttributeNotConfiguredError: if the attribute is missing
        """
        if self._attribute_id is None:
            self._attribute_id = await self._db.get_attribute_id(self.attribute_code)
        if not self._attribute_id:
            self._attribute_id = None
            raise AttributeNotConfiguredError("Tradetrek attribute is missing in the system.")
        return self._attribute_id

    async def resolve(self, external_sku: str) -> Optional[int]:
        attribute_id = await self.attribute_id()
        return await self._db.fetch_value(
            f"""
            SELECT cpev.entity_id
            FROM {self._db.table('catalog_product_entity_varchar')} AS cpev
            WHERE cpev.attribute_id = ? AND cpev.value = ? AND cpev.store_id = ?
            """,
            (attribute_id, external_sku, DEFAULT_STORE_ID)
        )


class CustomerGroupResolver:
    """Customer group code -> id, memoized in a per-call cache."""

    def __init__(self, db: SQLiteDatabase, cache: ResolverCache):
        self._db = db
        self._cache = cache.customer_groups

    async def resolve(self, name: Optional[str]) -> Optional[int]:
        if not name:
            return None
        if name not in self._cache:
            self._cache[name] = await self._db.fetch_value(
                f"SELECT cg.customer_group_id FROM {self._db.table('customer_group')} AS cg "
                "WHERE cg.customer_group_code = ?",
                (name,)
            )
            logger.debug(f"Customer group '{name}' resolved to {self._cache[name]}")
        return self._cache[name]


class SupplierResolver:
    """Supplier code -> id, memoized in a per-call cache."""

    def __init__(self, db: SQLiteDatabase, cache: ResolverCache):
        self._db = db
        self._cache = cache.suppliers

    async def resolve(self, code: Optional[str]) -> Optional[int]:
        if not code:
            return None
        if code not in self._cache:
            self._cache[code] = await self._db.fetch_value(
                f"SELECT sup.sup_id FROM {self._db.table('bms_supplier')} AS sup "
                "WHERE sup.sup_code = ?",
                (code,)
            )
            logger.debug(f"Supplier '{code}' resolved to {self._cache[code]}")
        return self._cache[code]
