"""
PIN hashing and verification utilities using bcrypt.

Worker and admin PINs go through the same scheme: hashed on write,
verified on read. Plain PINs are never stored.
"""

import logging
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# Try to create bcrypt context, fallback to PBKDF2 if bcrypt fails
try:
    pin_context = CryptContext(schemes=["bcrypt", "pbkdf2_sha256"], deprecated="auto")
    USE_BCRYPT = True
except Exception:
    pin_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
    USE_BCRYPT = False

_fallback_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_pin(pin: str) -> str:
    """
    Hash a plaintext PIN.

    Args:
        pin: The plaintext PIN to hash

    Returns:
        The hashed PIN as a string

    Raises:
        ValueError: If hashing fails with both schemes

    Example:
        >>> hashed = hash_pin("1234")
        >>> hashed != "1234"
        True
    """
    try:
        return pin_context.hash(pin)
    except Exception as e:
        logger.warning("bcrypt hashing failed, using PBKDF2: %s", e)
        try:
            return _fallback_context.hash(pin)
        except Exception as fallback_error:
            raise ValueError(f"PIN hashing failed: bcrypt error: {e}, fallback error: {fallback_error}")


def verify_pin(plain_pin: str, pin_hash: str) -> bool:
    """
    Verify a plaintext PIN against a stored hash.

    Returns:
        True if the PIN matches, False otherwise (including unknown hash formats)

    Example:
        >>> verify_pin("1234", hash_pin("1234"))
        True
        >>> verify_pin("0000", hash_pin("1234"))
        False
    """
    if not plain_pin or not pin_hash:
        return False
    try:
        return pin_context.verify(plain_pin, pin_hash)
    except (ValueError, TypeError) as e:
        logger.debug("PIN verification error: %s", e)
        return False
