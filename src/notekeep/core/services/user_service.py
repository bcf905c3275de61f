"""User service - the operations the HTTP layer calls.

Pure composition of the repository, the auth gate, the sharing service and
the credential helpers; it keeps no state of its own.
"""

from functools import partial
from typing import List, Optional

from ...config import Settings, get_settings
from ...security import TokenIssuer, generate_user_token, hash_password
from ..errors import (
    ConflictError,
    InvalidInputError,
    NotekeepError,
    NotFoundError,
    TokenIssuanceError,
)
from ..logging import get_logger
from ..models.user import UserRecord
from ..repositories.user_repository import UserRepository
from ..schemas.sharing import ShareResult
from ..schemas.users import WhoAmIResponse
from .auth_service import AuthService
from .context import AuthenticatedUser
from .interfaces import IUserService
from .sharing_service import SharingService

logger = get_logger("services.user")


class UserService(IUserService):
    """User service implementation."""

    def __init__(
        self,
        user_repo: UserRepository,
        settings: Optional[Settings] = None,
        token_issuer: Optional[TokenIssuer] = None,
    ):
        self.user_repo = user_repo
        self.settings = settings or get_settings()
        self.token_issuer = token_issuer or partial(
            generate_user_token, algorithm=self.settings.token_algorithm
        )
        self.auth_service = AuthService(user_repo)
        self.sharing_service = SharingService(user_repo)

    async def signup(self, user_id: Optional[str], password: Optional[str]) -> str:
        """Create a new account and return its user token."""
        if not user_id:
            raise InvalidInputError("missing userId", field="userId")
        if not password:
            raise InvalidInputError("missing password", field="password")

        if await self.user_repo.exists(user_id):
            logger.info(f'User "{user_id}" already exists')
            raise ConflictError(user_id)

        hashed_password = hash_password(password)

        logger.info("Generate a new user token", extra={"user_id": user_id})
        try:
            token = self.token_issuer(
                self.settings.trustchain_id, self.settings.trustchain_private_key, user_id
            )
        except NotekeepError:
            raise
        except Exception as e:
            raise TokenIssuanceError(user_id, str(e)) from e

        logger.info("Save password and token to storage", extra={"user_id": user_id})
        await self.user_repo.create(
            UserRecord(id=user_id, password_hash=hashed_password, token=token)
        )
        return token

    async def login(self, user_id: Optional[str], password: Optional[str]) -> str:
        """Check credentials and serve the token stored at signup."""
        caller = await self.auth_service.authenticate_password(user_id, password)
        logger.info("Retrieve token from storage", extra={"user_id": caller.user_id})
        return caller.record.token or ""

    async def get_payload(self, caller: AuthenticatedUser, target_id: str) -> str:
        """Read target_id's note.

        Unknown users and users without a note are reported the same way.
        """
        logger.info("Retrieve data from storage", extra={"user_id": caller.user_id})
        try:
            target = await self.user_repo.get(target_id)
        except NotFoundError:
            logger.info(f"User {target_id} does not exist")
            raise NotFoundError("Not found") from None

        if not target.has_payload:
            logger.info("User has no stored data")
            raise NotFoundError("Not found")
        return target.payload

    async def put_payload(self, caller: AuthenticatedUser, data: str) -> None:
        """Replace the caller's note."""
        if data is None:
            raise InvalidInputError("missing data", field="body")

        def _set_payload(record: UserRecord) -> None:
            record.payload = data

        logger.info("Save data on storage", extra={"user_id": caller.user_id})
        await self.user_repo.update(caller.user_id, _set_payload)

    async def clear_payload(self, caller: AuthenticatedUser) -> None:
        """Remove the caller's note."""
        logger.info("Clear user data", extra={"user_id": caller.user_id})
        await self.user_repo.clear_payload(caller.user_id)

    async def list_all_ids(self, caller: AuthenticatedUser) -> List[str]:
        """Every known user id; any authenticated user may list them."""
        return await self.user_repo.list_ids()

    async def share(
        self, caller: AuthenticatedUser, owner_id: str, recipient_ids: List[str]
    ) -> ShareResult:
        return await self.sharing_service.share(caller, owner_id, recipient_ids)

    async def who_am_i(self, caller: AuthenticatedUser) -> WhoAmIResponse:
        return WhoAmIResponse.from_record(caller.record)
