"""
Pydantic models for update requests and catalog reference data.
Wire names follow the payload format used by the ERP integration.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Sku -> ordered failure messages for one batch call
ErrorReport = Dict[str, List[str]]
BatchResult = Union[bool, ErrorReport]


class CustomerGroupPrice(BaseModel):
    """A tier price for one customer group (quantity break 1)."""
    name: Optional[str] = None
    price: Decimal


class UpdateRequestItem(BaseModel):
    """One product update inside a batch."""

    model_config = ConfigDict(populate_by_name=True)

    external_sku: str = Field(alias="tradetrek_sku")
    price: Optional[Decimal] = None
    cost: Optional[Decimal] = None
    customer_group_prices: List[CustomerGroupPrice] = Field(
        default_factory=list, alias="customer_group"
    )
    supplier_code: Optional[str] = Field(default=None, alias="supplier_no")
    # Negative or missing means "not provided"; 0 is a real (free) price
    supplier_price: Optional[Decimal] = None

    @property
    def applies_supplier_cost(self) -> bool:
        """Check if the supplier cost sub-update should run."""
        return bool(self.supplier_code) and self.supplier_price is not None and self.supplier_price >= 0


class UpdateRequest(BaseModel):
    """Request body of the batch update endpoint."""
    products: List[UpdateRequestItem]


class TierPrice(BaseModel):
    """A row of the tier price table."""
    product_id: int
    all_groups: int = 0
    customer_group_id: int
    qty: float = 1
    value: float
    website_id: int = 0


class SupplierProductLink(BaseModel):
    """Supplier-specific cost data for a product."""
    id: int
    product_id: int
    supplier_id: int
    price: Optional[float] = None
    updated_at: Optional[datetime] = None
