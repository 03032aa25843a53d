"""
ProfileDesk Backend — Password Hashing
=======================================

One-way password hashing through a passlib CryptContext. Hashes are
self-describing strings ("$pbkdf2-sha256$<rounds>$<salt>$<hash>"), so the
scheme can be changed later with `deprecated="auto"` and old hashes still
verify.
"""

from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Verified against when the account does not exist so both login failure
# paths spend the same time hashing
_DUMMY_HASH = _pwd_context.hash("profiledesk-timing-equalizer")


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return _pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        return False


def burn_verify(password: str) -> bool:
    """Run a verification that always fails, for unknown accounts."""
    verify_password(password, _DUMMY_HASH)
    return False
