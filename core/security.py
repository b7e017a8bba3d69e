"""
Password Verification

Stored user passwords are bcrypt hashes. Hashes produced by PHP's
password_hash() carry the "$2y$" prefix, which is the same algorithm
as "$2b$" and is normalized before checking. bcrypt only uses the
first 72 bytes of a password; longer input is truncated the same way
PHP's password_verify() does.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

PHP_BCRYPT_PREFIX = "$2y$"
BCRYPT_PREFIX = "$2b$"
BCRYPT_MAX_PASSWORD_BYTES = 72


def _normalize_hash(hashed: str) -> bytes:
    if hashed.startswith(PHP_BCRYPT_PREFIX):
        hashed = BCRYPT_PREFIX + hashed[len(PHP_BCRYPT_PREFIX):]
    return hashed.encode("utf-8")


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Check a plain password against a stored bcrypt hash.

    Args:
        password: Password supplied by the caller
        hashed: Stored hash

    Returns:
        True if the password matches. A stored value that is not a
        bcrypt hash never matches.
    """
    if not hashed:
        return False

    try:
        return bcrypt.checkpw(_password_bytes(password), _normalize_hash(hashed))
    except ValueError as e:
        logger.warning(f"Stored password hash is not a valid bcrypt hash: {e}")
        return False
