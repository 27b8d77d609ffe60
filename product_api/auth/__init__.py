"""
Authentication module.
"""

from product_api.auth.password import hash_password, verify_password
from product_api.auth.session import SessionManager, SESSION_COOKIE_NAME

__all__ = [
    "hash_password",
    "verify_password",
    "SessionManager",
    "SESSION_COOKIE_NAME",
]
