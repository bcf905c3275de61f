"""Security utilities."""

from .password import hash_password, needs_update, verify_password
from .user_token import TokenIssuer, generate_user_token, tokens_match

__all__ = [
    "hash_password",
    "verify_password",
    "needs_update",
    "TokenIssuer",
    "generate_user_token",
    "tokens_match",
]
