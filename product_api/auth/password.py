"""
Admin password hashing.
"""

from passlib.context import CryptContext


_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password for storage in ADMIN_PASSWORD_HASH."""
    return _context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash. Malformed hashes never match."""
    try:
        return _context.verify(password, password_hash)
    except ValueError:
        return False
