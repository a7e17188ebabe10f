"""
Password hashing utilities using Argon2id.

Passwords are never stored in plaintext; each hash carries its own salt
and parameters, so hashes created with older parameters keep verifying.

Example Usage:
    >>> from tutorhub_types.password_utils import hash_password, verify_password
    >>> hashed = hash_password("MySecure123!")
    >>> verify_password("MySecure123!", hashed)
    True
"""

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHash


_ph = PasswordHasher(
    time_cost=3,
    memory_cost=65536,  # 64 MB
    parallelism=4,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """
    Hash a password with Argon2id.

    Raises:
        ValueError: If password is empty
    """
    if not password:
        raise ValueError("Password cannot be empty")
    return _ph.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against an Argon2 hash.

    Returns False for a mismatch and for malformed or missing hashes.
    """
    if not password or not hashed_password:
        return False

    try:
        _ph.verify(hashed_password, password)
        return True
    except (VerifyMismatchError, VerificationError, InvalidHash):
        return False


def needs_rehash(hashed_password: str) -> bool:
    """Check whether a hash was created with outdated parameters."""
    try:
        return _ph.check_needs_rehash(hashed_password)
    except InvalidHash:
        return True
