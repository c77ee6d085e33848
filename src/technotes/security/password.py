"""Password hashing utilities."""

from functools import lru_cache
from typing import Optional

from passlib.context import CryptContext

from ..config import Settings, get_settings


@lru_cache(maxsize=None)
def _context_for(rounds: int) -> CryptContext:
    # bcrypt_sha256 pre-hashes with SHA-256 so long passwords aren't truncated at 72 bytes;
    # hashes below the configured cost are reported by needs_update
    return CryptContext(
        schemes=["bcrypt_sha256"],
        deprecated="auto",
        bcrypt_sha256__default_rounds=rounds,
        bcrypt_sha256__min_rounds=rounds,
    )


def get_pwd_context(settings: Optional[Settings] = None) -> CryptContext:
    """Hashing context for the cost factor in ``settings``."""
    settings = settings or get_settings()
    return _context_for(settings.password_hash_rounds)


def hash_password(password: str, settings: Optional[Settings] = None) -> str:
    """Hash a password."""
    return get_pwd_context(settings).hash(password)


def verify_password(
    plain_password: str, hashed_password: str, settings: Optional[Settings] = None
) -> bool:
    """Verify a password against its hash."""
    return get_pwd_context(settings).verify(plain_password, hashed_password)


def needs_update(hashed_password: str, settings: Optional[Settings] = None) -> bool:
    """True when the hash was made with a lower cost than currently configured."""
    return get_pwd_context(settings).needs_update(hashed_password)
