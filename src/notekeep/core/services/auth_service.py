"""Authentication gate.

Stateless: each request is authenticated on its own and the result lives only
as long as the request. Nothing is written to the store.
"""

from typing import Optional

from ..errors import InvalidCredentialsError, InvalidInputError
from ..logging import get_logger
from ..models.user import UserRecord
from ..repositories.user_repository import UserRepository
from ...security import tokens_match, verify_password
from .context import AuthenticatedUser
from .interfaces import IAuthService

logger = get_logger("services.auth")


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def authenticate_password(
        self, user_id: Optional[str], password: Optional[str]
    ) -> AuthenticatedUser:
        """Authenticate with id and password.

        Raises NotFoundError for unknown ids, InvalidCredentialsError for a
        missing or wrong password.
        """
        record = await self._resolve(user_id)

        if not password or not verify_password(password, record.password_hash):
            logger.warning(f"Wrong password for user '{user_id}'")
            raise InvalidCredentialsError()

        return AuthenticatedUser(record=record, method="password")

    async def authenticate_token(
        self, user_id: Optional[str], token: Optional[str]
    ) -> AuthenticatedUser:
        """Authenticate with id and the bearer token issued at signup."""
        record = await self._resolve(user_id)

        if not tokens_match(token or "", record.token or ""):
            logger.warning(f"Wrong token for user '{user_id}'")
            raise InvalidCredentialsError()

        return AuthenticatedUser(record=record, method="token")

    async def _resolve(self, user_id: Optional[str]) -> UserRecord:
        if not user_id:
            raise InvalidInputError("Missing userId", field="userId")
        # NotFoundError propagates when the record is absent
        return await self.user_repo.get(user_id)

