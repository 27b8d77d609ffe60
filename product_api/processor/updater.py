"""
Batch product updates keyed by external SKU.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from ..db import SQLiteDatabase, UpdateRequestItem, BatchResult
from ..catalog import (
    IdentifierResolver, CustomerGroupResolver, SupplierResolver, ResolverCache,
    AttributeWriter, TierPriceStore, SupplierCostStore, DEFAULT_STORE_ID
)

logger = logging.getLogger(__name__)


DEFAULT_MAX_BATCH_SIZE = 100

# Messages returned to the caller
MSG_INVALID_DATA = "Please provide valid data."
MSG_OVER_LIMIT = "You have requested to update more than allowed max limit. Max allowed limit is: {limit}"
MSG_SKU_NOT_FOUND = "Tradetrak SKU {sku} not found in the system."
MSG_PRICE_NOT_UPDATED = "Product price not updated."
MSG_COST_NOT_UPDATED = "Product cost not updated."
MSG_GROUP_PRICE_NOT_UPDATED = 'Customer group price not updated for "{name}".'
MSG_SUPPLIER_COST_NOT_UPDATED = 'Supplier cost not updated for supplier code "{code}".'


class BatchValidationError(ValueError):
    """The batch is empty or larger than allowed."""
    pass


class BatchProductUpdater:
    """
    Applies price, cost, tier price and supplier cost updates for a batch
    of products.

    Every sub-update commits on its own and failures are collected per SKU
    instead of aborting the batch. Only a missing external SKU attribute
    (AttributeNotConfiguredError) stops the call.
    """

    def __init__(
        self,
        db: SQLiteDatabase,
        identifier_resolver: Optional[IdentifierResolver] = None,
        attribute_writer: Optional[AttributeWriter] = None,
        tier_prices: Optional[TierPriceStore] = None,
        supplier_costs: Optional[SupplierCostStore] = None,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE
    ):
        self._db = db
        self.identifier_resolver = identifier_resolver or IdentifierResolver(db)
        self.attribute_writer = attribute_writer or AttributeWriter(db)
        self.tier_prices = tier_prices or TierPriceStore(db)
        self.supplier_costs = supplier_costs or SupplierCostStore(db)
        self.max_batch_size = max_batch_size

    def validate(self, items: Sequence[UpdateRequestItem]) -> None:
        if not items:
            raise BatchValidationError(MSG_INVALID_DATA)
        if len(items) > self.max_batch_size:
            raise BatchValidationError(MSG_OVER_LIMIT.format(limit=self.max_batch_size))

    async def update_product(self, items: Sequence[UpdateRequestItem]) -> BatchResult:
        """
        Update every product in the batch.

        Args:
            items: Update requests, processed in order

        Returns:
            True if everything was applied, otherwise a dict mapping each
            failing SKU to its error messages

        Raises:
            BatchValidationError: if the batch is empty or too large
            AttributeNotConfiguredError: if SKUs cannot be resolved at all
        """
        self.validate(items)

        # Lookups are cached for this call only
        cache = ResolverCache()
        groups = CustomerGroupResolver(self._db, cache)
        suppliers = SupplierResolver(self._db, cache)

        errors: Dict[str, List[str]] = defaultdict(list)

        for item in items:
            sku = item.external_sku

            # Step 1: Resolve the product
            product_id = await self.identifier_resolver.resolve(sku)
            if not product_id:
                errors[sku].append(MSG_SKU_NOT_FOUND.format(sku=sku))
                logger.warning(f"{sku} :: SKU not found")
                continue

            # Step 2: Price
            if item.price is not None:
                try:
                    await self.attribute_writer.apply(product_id, "price", item.price, DEFAULT_STORE_ID)
                    logger.info(f'{sku} :: Product price updated "{item.price}"')
                except Exception as e:
                    errors[sku].append(MSG_PRICE_NOT_UPDATED)
                    logger.error(f"{sku} :: {e}")

            # Step 3: Cost
            if item.cost is not None:
                try:
                    await self.attribute_writer.apply(product_id, "cost", item.cost, DEFAULT_STORE_ID)
                    logger.info(f'{sku} :: Product cost updated "{item.cost}"')
                except Exception as e:
                    errors[sku].append(MSG_COST_NOT_UPDATED)
                    logger.error(f"{sku} :: {e}")

            # Step 4: Customer group tier prices
            for group_price in item.customer_group_prices:
                if not group_price.name:
                    continue
                try:
                    group_id = await groups.resolve(group_price.name)
                    if not group_id:
                        errors[sku].append(MSG_GROUP_PRICE_NOT_UPDATED.format(name=group_price.name))
                        logger.warning(f'{sku} :: Customer group "{group_price.name}" doesn\'t exist')
                        continue
                    await self.tier_prices.upsert(product_id, group_id, group_price.price)
                    logger.info(f'{sku} :: Tier price "{group_price.name}" price "{group_price.price}"')
                except Exception as e:
                    errors[sku].append(MSG_GROUP_PRICE_NOT_UPDATED.format(name=group_price.name))
                    logger.error(f"{sku} :: {e}")

            # Step 5: Supplier cost
            if item.applies_supplier_cost:
                code = item.supplier_code
                try:
                    supplier_id = await suppliers.resolve(code)
                    if not supplier_id:
                        errors[sku].append(MSG_SUPPLIER_COST_NOT_UPDATED.format(code=code))
                        logger.warning(f"{sku} :: Supplier with code {code} doesn't exist")
                    else:
                        await self.supplier_costs.update_if_linked(product_id, supplier_id, item.supplier_price)
                        logger.info(f'{sku} :: Supplier cost "{code}" price "{item.supplier_price}"')
                except Exception as e:
                    errors[sku].append(MSG_SUPPLIER_COST_NOT_UPDATED.format(code=code))
                    logger.error(f"{sku} :: {e}")

        if errors:
            logger.info(f"Batch finished: {len(items)} items, {len(errors)} SKUs with errors")
            return dict(errors)

        logger.info(f"Batch finished: {len(items)} items updated")
        return True
