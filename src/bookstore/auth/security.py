"""Password hashing utilities for account authentication."""

import hashlib
import hmac
import secrets
from typing import Optional

from ..config import get_config

# Separator between salt and hash in the stored password column
PASSWORD_SEPARATOR = "$"


def hash_password(password: str, salt: Optional[bytes] = None) -> tuple[str, str]:
    """
    Hash a password using PBKDF2-HMAC-SHA256.

    Args:
        password: The plain text password to hash
        salt: Optional salt bytes. If None, generates a secure random salt.

    Returns:
        tuple[str, str]: (salt_hex, hash_hex)
    """
    if salt is None:
        salt = secrets.token_bytes(32)  # 256-bit salt

    iterations = get_config().app.password_hash_iterations

    password_hash = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt, iterations
    )

    return salt.hex(), password_hash.hex()


def verify_password(password: str, salt_hex: str, hash_hex: str) -> bool:
    """
    Verify a password against stored salt and hash.

    Args:
        password: The plain text password to verify
        salt_hex: The hex-encoded salt
        hash_hex: The hex-encoded hash

    Returns:
        bool: True if password is valid, False otherwise
    """
    if not password or not salt_hex or not hash_hex:
        return False

    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)

        iterations = get_config().app.password_hash_iterations

        computed_hash = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt, iterations
        )

        # Use constant-time comparison to prevent timing attacks
        return hmac.compare_digest(computed_hash, stored_hash)

    except (ValueError, TypeError):
        # Invalid hex encoding or other format errors
        return False


def encode_password(password: str) -> str:
    """Hash a password into the single-column ``salt$hash`` storage form."""
    salt_hex, hash_hex = hash_password(password)
    return f"{salt_hex}{PASSWORD_SEPARATOR}{hash_hex}"


def matches_password(password: str, encoded: Optional[str]) -> bool:
    """Check a plain password against a stored ``salt$hash`` value."""
    if not encoded or PASSWORD_SEPARATOR not in encoded:
        return False
    salt_hex, hash_hex = encoded.split(PASSWORD_SEPARATOR, 1)
    return verify_password(password, salt_hex, hash_hex)
