"""
Password hashing and verification utilities.

Uses passlib's bcrypt for secure password storage; the cost factor comes from
``settings.BCRYPT_ROUNDS``.
"""
from __future__ import annotations

from passlib.context import CryptContext

from .config import settings

# Configure passlib context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
)


def hash_password(password: str) -> str:
    """Return a bcrypt hash for the given plain password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hashed form."""
    return pwd_context.verify(plain_password, hashed_password)
