"""Salted one-way password hashing (PBKDF2-HMAC-SHA256).

Stored format: ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``.
"""
import hashlib
import hmac
import os
from typing import Optional

from lunchplan.utilities.config import PASSWORD_HASH_ITERATIONS

ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    iterations = iterations or PASSWORD_HASH_ITERATIONS
    salt = os.urandom(SALT_BYTES)
    digest = _derive(password, salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Return True if password matches the stored hash. Malformed hashes never match."""
    try:
        algorithm, iterations, salt_hex, digest_hex = stored.split("$")
        if algorithm != ALGORITHM:
            return False
        expected = bytes.fromhex(digest_hex)
        actual = _derive(password, bytes.fromhex(salt_hex), int(iterations))
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(actual, expected)
