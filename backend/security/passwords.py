from __future__ import annotations

from passlib.context import CryptContext


_pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
_dummy_hash: str | None = None


def hash_password(plain_password: str) -> str:
    """Return an Argon2 hash for a given plain password.

    Args:
        plain_password: Raw user password.

    Returns:
        str: Argon2 hash (salted, memory-hard).
    """
    return _pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a plain password against a hash.

    A malformed or unrecognised hash is treated exactly like a wrong
    password so callers cannot tell the two apart.

    Args:
        plain_password: Raw user password.
        hashed_password: Stored Argon2 hash.

    Returns:
        bool: True if the password matches, otherwise False.
    """
    if not hashed_password:
        return False
    try:
        return _pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def burn_password_check(plain_password: str) -> bool:
    """Run a full verification against a throwaway hash; always False.

    Used when no account matches so both login failure paths cost the same.
    """
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = _pwd_context.hash("wardrobe-placeholder-password")
    _pwd_context.verify(plain_password, _dummy_hash)
    return False


def password_needs_rehash(hashed_password: str) -> bool:
    """Return True if the hash was produced with outdated parameters."""
    try:
        return _pwd_context.needs_update(hashed_password)
    except (ValueError, TypeError):
        return True


def is_password_hashed(value: str | None) -> bool:
    """Heuristically check if a given value looks like an Argon2 hash.

    Args:
        value: String to test.

    Returns:
        bool: True if value seems to be an already hashed password.
    """
    if not value:
        return False
    return value.startswith(("$argon2id$", "$argon2i$", "$argon2d$"))
