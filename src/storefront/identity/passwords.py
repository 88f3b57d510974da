"""Salted PBKDF2 password hashing.

Stored format: ``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``.
"""

import hashlib
import hmac
import secrets

_ALGORITHM = "pbkdf2_sha256"
_ITERATIONS = 260_000


def hash_password(password: str, salt: str | None = None, iterations: int = _ITERATIONS) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), iterations)
    return f"{_ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash; malformed hashes never match."""
    try:
        algorithm, iterations, salt, _ = password_hash.split("$")
        iterations = int(iterations)
    except (AttributeError, ValueError):
        return False

    if algorithm != _ALGORITHM:
        return False

    return hmac.compare_digest(hash_password(password, salt=salt, iterations=iterations), password_hash)
