"""
FastAPI dependency injection.
Process-wide database connection, SKU resolver and session manager.
"""

import logging
from typing import Optional
from fastapi import Request, HTTPException

from .config import settings
from .db import SQLiteDatabase
from .auth import SessionManager
from .catalog import (
    IdentifierResolver, AttributeWriter, TierPriceStore, SupplierCostStore,
    AttributeNotConfiguredError
)
from .processor import BatchProductUpdater

logger = logging.getLogger(__name__)


# Global instances (initialized on startup)
_db: Optional[SQLiteDatabase] = None
_session_manager: Optional[SessionManager] = None
_identifier_resolver: Optional[IdentifierResolver] = None


async def init_dependencies():
    """Initialize global dependencies. Called on app startup."""
    global _db, _session_manager, _identifier_resolver

    _db = SQLiteDatabase(settings.database_path, table_prefix=settings.table_prefix)
    await _db.initialize()

    # Lives for the whole process so the SKU attribute id is looked up once
    _identifier_resolver = IdentifierResolver(_db)
    try:
        await _identifier_resolver.attribute_id()
    except AttributeNotConfiguredError as e:
        logger.warning(f"{e} Product updates will fail until it is created.")

    _session_manager = SessionManager(settings.session_secret)


async def close_dependencies():
    """Close global dependencies. Called on app shutdown."""
    global _db, _identifier_resolver
    if _db:
        await _db.close()
    _db = None
    _identifier_resolver = None


def get_db() -> SQLiteDatabase:
    """Get the database instance."""
    if _db is None:
        raise RuntimeError("Database not initialized")
    return _db


def get_session_manager() -> SessionManager:
    """Get the session manager instance."""
    if _session_manager is None:
        raise RuntimeError("Session manager not initialized")
    return _session_manager


def get_updater() -> BatchProductUpdater:
    """Build an updater for one request. Lookup caches are never shared between requests."""
    db = get_db()
    return BatchProductUpdater(
        db,
        identifier_resolver=_identifier_resolver,
        attribute_writer=AttributeWriter(db),
        tier_prices=TierPriceStore(db),
        supplier_costs=SupplierCostStore(db, timezone=settings.timezone),
        max_batch_size=settings.max_batch_size
    )


async def require_auth(request: Request):
    """Dependency that requires a valid session token."""
    session_manager = get_session_manager()

    if not session_manager.is_authenticated(request):
        raise HTTPException(status_code=401, detail="Not authenticated")
