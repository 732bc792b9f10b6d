"""
Password hashing - PBKDF2-HMAC-SHA256 with an encoded parameter string.

Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt_hex>$<key_hex>`` so
the iteration count can be raised later without invalidating old rows.
"""

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 600_000
SALT_BYTES = 16
KEY_BYTES = 32


def hash_password(
    password: str, iterations: int = DEFAULT_ITERATIONS, salt: bytes | None = None
) -> str:
    """
    Derive an encoded PBKDF2 hash for a password.

    Args:
        password: Plaintext password
        iterations: PBKDF2 work factor
        salt: Fixed salt (tests only); a random 16-byte salt otherwise

    Returns:
        Encoded hash string
    """
    if salt is None:
        salt = secrets.token_bytes(SALT_BYTES)
    key = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, iterations, KEY_BYTES)
    return f"{ALGORITHM}${iterations}${salt.hex()}${key.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """
    Check a password against an encoded hash in constant time.

    Malformed hashes and unknown algorithms never verify.
    """
    try:
        algorithm, iterations_str, salt_hex, key_hex = encoded.split("$")
        iterations = int(iterations_str)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(key_hex)
    except ValueError:
        return False

    if algorithm != ALGORITHM or iterations <= 0 or not expected:
        return False

    candidate = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, iterations, len(expected))
    return hmac.compare_digest(candidate, expected)
