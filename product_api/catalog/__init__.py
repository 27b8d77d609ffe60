"""
Catalog lookups and writers.
"""

from .resolvers import (
    IdentifierResolver,
    CustomerGroupResolver,
    SupplierResolver,
    ResolverCache,
    CatalogError,
    AttributeNotConfiguredError,
    EXTERNAL_SKU_ATTRIBUTE_CODE,
    DEFAULT_STORE_ID,
)
from .writers import (
    AttributeWriter,
    TierPriceStore,
    SupplierCostStore,
    AttributeWriteError,
    SupplierLinkNotFoundError,
)

__all__ = [
    "IdentifierResolver",
    "CustomerGroupResolver",
    "SupplierResolver",
    "ResolverCache",
    "CatalogError",
    "AttributeNotConfiguredError",
    "EXTERNAL_SKU_ATTRIBUTE_CODE",
    "DEFAULT_STORE_ID",
    "AttributeWriter",
    "TierPriceStore",
    "SupplierCostStore",
    "AttributeWriteError",
    "SupplierLinkNotFoundError",
]
