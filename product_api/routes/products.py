"""
Product update API routes.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_updater, require_auth
from ..db import UpdateRequest, BatchResult
from ..catalog import AttributeNotConfiguredError
from ..processor import BatchProductUpdater, BatchValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", dependencies=[Depends(require_auth)])


@router.post("/update", response_model=BatchResult)
async def update_products(
    request: UpdateRequest,
    updater: BatchProductUpdater = Depends(get_updater)
):
    """
    Update price, cost, tier prices and supplier cost for a batch of products.

    Returns true when every update was applied, otherwise an object mapping
    each failing SKU to its error messages.
    """
    try:
        return await updater.update_product(request.products)
    except BatchValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AttributeNotConfiguredError as e:
        logger.error(f"Product update aborted: {e}")
        raise HTTPException(status_code=500, detail=str(e))
