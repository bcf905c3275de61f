"""Password hashing utilities."""

from passlib.context import CryptContext

from ..core.errors import InvalidInputError

# Argon2id is memory-hard; passlib generates a fresh salt for every hash.
# Parameters match libsodium's "interactive" preset used by the first
# version of the server, so its stored hashes still verify.
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__type="id",
    argon2__memory_cost=65536,
    argon2__rounds=2,
    argon2__parallelism=1,
)


def hash_password(password: str) -> str:
    """Hash a password."""
    if not password:
        raise InvalidInputError("Password cannot be empty", field="password")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Malformed or unknown hashes are a failed check, never an exception.
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def needs_update(hashed_password: str) -> bool:
    """Check if password hash needs updating."""
    return pwd_context.needs_update(hashed_password)
