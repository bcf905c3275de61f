"""User token issuance.

Tokens are opaque to the rest of the service: they are generated once at
signup, stored verbatim and handed back on login.
"""

import hmac
import uuid
from datetime import datetime, timezone
from typing import Protocol

from jose import jwt
from jose.exceptions import JOSEError

from ..core.errors import TokenIssuanceError


class TokenIssuer(Protocol):
    """Callable producing an opaque user token."""

    def __call__(self, trustchain_id: str, trustchain_secret: str, user_id: str) -> str: ...


def generate_user_token(
    trustchain_id: str, trustchain_secret: str, user_id: str, algorithm: str = "HS256"
) -> str:
    """Sign a user token for user_id with the trustchain secret."""
    if not trustchain_secret:
        raise TokenIssuanceError(user_id, "trustchain private key is not configured")

    to_encode = {
        "iss": trustchain_id,
        "sub": user_id,
        "iat": int(datetime.now(timezone.utc).timestamp()),
        "jti": str(uuid.uuid4()),
    }
    try:
        return jwt.encode(to_encode, trustchain_secret, algorithm=algorithm)
    except JOSEError as e:
        raise TokenIssuanceError(user_id, str(e)) from e


def tokens_match(presented: str, stored: str) -> bool:
    """Compare two tokens in constant time."""
    if not presented or not stored:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), stored.encode("utf-8"))
