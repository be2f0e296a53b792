"""Credential hashing: bcrypt over a SHA-256 pre-hash.

bcrypt only reads the first 72 bytes of its input; the pre-hash gives every
password a fixed-length input so long passwords keep all their entropy.
"""

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """True if plain_password matches hashed_password; malformed hashes never match."""
    try:
        return bool(
            bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
        )
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return a salted bcrypt hash of password."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")
