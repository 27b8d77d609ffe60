"""
Tests for SKU, customer group and supplier lookups.
"""

import pytest

from product_api.catalog import (
    IdentifierResolver,
    CustomerGroupResolver,
    SupplierResolver,
    ResolverCache,
    AttributeNotConfiguredError,
)
from conftest import add_product


class TestIdentifierResolver:
    """Tests for external SKU resolution."""

    @pytest.mark.asyncio
    async def test_resolves_known_sku(self, catalog):
        resolver = IdentifierResolver(catalog.db)

        assert await resolver.resolve("A1") == catalog.product_a1
        assert await resolver.resolve("B2") == catalog.product_b2

    @pytest.mark.asyncio
    async def test_unknown_sku_returns_none(self, catalog):
        resolver = IdentifierResolver(catalog.db)

        assert await resolver.resolve("ZZZ") is None

    @pytest.mark.asyncio
    async def test_exact_match_only(self, catalog):
        """No prefix, case or whitespace tolerance."""
        resolver = IdentifierResolver(catalog.db)

        assert await resolver.resolve("a1") is None
        assert await resolver.resolve("A") is None
        assert await resolver.resolve(" A1") is None

    @pytest.mark.asyncio
    async def test_store_scoped_value_is_ignored(self, catalog):
        """Only values in the default store (0) identify a product."""
        db = catalog.db
        product_id = await db.create_product("INT-STORE1")
        attribute_id = await db.get_attribute_id("tradetrek_sku")
        await db.set_attribute_value(product_id, attribute_id, "varchar", "S1", store_id=1)

        resolver = IdentifierResolver(db)

        assert await resolver.resolve("S1") is None

    @pytest.mark.asyncio
    async def test_missing_attribute_raises(self, db):
        resolver = IdentifierResolver(db)

        with pytest.raises(AttributeNotConfiguredError, match="Tradetrek attribute is missing"):
            await resolver.resolve("A1")

    @pytest.mark.asyncio
    async def test_attribute_id_is_cached(self, catalog, monkeypatch):
        resolver = IdentifierResolver(catalog.db)
        first = await resolver.attribute_id()

        async def fail(*args, **kwargs):
            raise AssertionError("attribute id looked up twice")

        monkeypatch.setattr(catalog.db, "get_attribute_id", fail)

        assert await resolver.attribute_id() == first
        assert await resolver.resolve("A1") == catalog.product_a1

    @pytest.mark.asyncio
    async def test_attribute_created_after_failure_is_found(self, db):
        """A missing attribute is not cached."""
        resolver = IdentifierResolver(db)

        with pytest.raises(AttributeNotConfiguredError):
            await resolver.attribute_id()

        await db.add_attribute("tradetrek_sku", "varchar")
        product_id = await add_product(db, "LATE")

        assert await resolver.resolve("LATE") == product_id


class _CountingDb:
    """Wraps a database and counts fetch_value calls."""

    def __init__(self, db):
        self._db = db
        self.queries = 0

    def table(self, name):
        return self._db.table(name)

    async def fetch_value(self, query, params=()):
        self.queries += 1
        return await self._db.fetch_value(query, params)


class TestCustomerGroupResolver:
    """Tests for customer group lookups."""

    @pytest.mark.asyncio
    async def test_resolves_by_exact_code(self, catalog):
        resolver = CustomerGroupResolver(catalog.db, ResolverCache())

        assert await resolver.resolve("General") == catalog.general_group
        assert await resolver.resolve("general") is None

    @pytest.mark.asyncio
    async def test_empty_name_is_not_queried(self, catalog):
        counting = _CountingDb(catalog.db)
        resolver = CustomerGroupResolver(counting, ResolverCache())

        assert await resolver.resolve("") is None
        assert await resolver.resolve(None) is None
        assert counting.queries == 0

    @pytest.mark.asyncio
    async def test_hits_and_misses_are_memoized(self, catalog):
        counting = _CountingDb(catalog.db)
        cache = ResolverCache()
        resolver = CustomerGroupResolver(counting, cache)

        for _ in range(3):
            assert await resolver.resolve("Retailer") == catalog.retailer_group
            assert await resolver.resolve("Wholesale") is None

        assert counting.queries == 2
        assert cache.customer_groups == {"Retailer": catalog.retailer_group, "Wholesale": None}

    @pytest.mark.asyncio
    async def test_new_cache_sees_new_groups(self, catalog):
        first = CustomerGroupResolver(catalog.db, ResolverCache())
        assert await first.resolve("Wholesale") is None

        group_id = await catalog.db.add_customer_group("Wholesale")

        second = CustomerGroupResolver(catalog.db, ResolverCache())
        assert await second.resolve("Wholesale") == group_id


class TestSupplierResolver:
    """Tests for supplier lookups."""

    @pytest.mark.asyncio
    async def test_resolves_by_code(self, catalog):
        resolver = SupplierResolver(catalog.db, ResolverCache())

        assert await resolver.resolve("SUP1") == catalog.linked_supplier
        assert await resolver.resolve("SUP2") == catalog.unlinked_supplier
        assert await resolver.resolve("NOPE") is None
        assert await resolver.resolve("") is None

    @pytest.mark.asyncio
    async def test_memoized_in_its_own_cache(self, catalog):
        counting = _CountingDb(catalog.db)
        cache = ResolverCache()
        suppliers = SupplierResolver(counting, cache)

        await suppliers.resolve("SUP1")
        await suppliers.resolve("SUP1")

        assert counting.queries == 1
        assert cache.suppliers == {"SUP1": catalog.linked_supplier}
        assert cache.customer_groups == {}
