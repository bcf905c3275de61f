"""User repository - one JSON file per user on the local filesystem."""

import asyncio
import json
import os
import re
import uuid
import weakref
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Callable, List

import aiofiles
import aiofiles.os
from pydantic import ValidationError

from ..errors import (
    ConflictError,
    CorruptRecordError,
    InvalidInputError,
    NotFoundError,
    StoreUnavailableError,
)
from ..logging import get_logger
from ..models.user import UserRecord

logger = get_logger("repositories.user")

RECORD_SUFFIX = ".json"
_UNSAFE_KEY_CHARS = re.compile(r"[/\\\x00]")


def storage_key(user_id: str) -> str:
    """Turn a user id into a file name that cannot leave the storage folder."""
    if not user_id:
        raise InvalidInputError("User id cannot be empty", field="userId")
    return _UNSAFE_KEY_CHARS.sub("_", user_id) + RECORD_SUFFIX


class UserRepository:
    """Repository for user records.

    Every read goes back to disk. Writes go to a temporary file in the same
    folder which is then renamed over the record, so a record on disk is
    always either the previous or the new version.

    Read-modify-write of one record is serialized per user id within the
    process through update(); there is no locking across processes.
    """

    def __init__(self, storage_dir: Path):
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        # entries go away once no task holds or waits on the lock
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def record_path(self, user_id: str) -> Path:
        """Path of the file holding user_id's record."""
        return self.storage_dir / storage_key(user_id)

    @asynccontextmanager
    async def lock(self, user_id: str) -> AsyncIterator[None]:
        """Hold the per-record lock of user_id."""
        key = storage_key(user_id)
        user_lock = self._locks.get(key)
        if user_lock is None:
            user_lock = asyncio.Lock()
            self._locks[key] = user_lock
        async with user_lock:
            yield

    async def exists(self, user_id: str) -> bool:
        """Check if a record file is present, without parsing it."""
        return self.record_path(user_id).is_file()

    async def get(self, user_id: str) -> UserRecord:
        """Load user_id's record."""
        path = self.record_path(user_id)
        record = await self._read(path, user_id)
        if record.id != user_id:
            # another id sanitized to the same file name
            raise NotFoundError(f"User '{user_id}' not found")
        return record

    async def save(self, record: UserRecord) -> None:
        """Create or fully replace a record."""
        path = self.record_path(record.id)
        content = json.dumps(record.to_storage(), ensure_ascii=False)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")

        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(content)
                await f.flush()
                await asyncio.to_thread(os.fsync, f.fileno())
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Failed to write record {path.name}: {e}")
            try:
                await aiofiles.os.remove(tmp_path)
            except FileNotFoundError:
                pass
            except OSError:
                logger.warning(f"Could not remove temporary file {tmp_path.name}")
            raise StoreUnavailableError("write", path.name, str(e)) from e

    async def create(self, record: UserRecord) -> UserRecord:
        """Save a new record, refusing ids that are already taken."""
        async with self.lock(record.id):
            if await self.exists(record.id):
                raise ConflictError(record.id)
            await self.save(record)
        return record

    async def update(self, user_id: str, apply: Callable[[UserRecord], None]) -> UserRecord:
        """Re-read user_id's record, apply a change to it and write it back."""
        async with self.lock(user_id):
            record = await self.get(user_id)
            apply(record)
            await self.save(record)
            return record

    async def clear_payload(self, user_id: str) -> UserRecord:
        """Remove the payload field from user_id's record."""

        def _clear(record: UserRecord) -> None:
            record.payload = None

        return await self.update(user_id, _clear)

    async def list_ids(self) -> List[str]:
        """All stored user ids, in file name order.

        Any unreadable record fails the whole listing.
        """
        ids = []
        for path in sorted(self.storage_dir.glob(f"*{RECORD_SUFFIX}")):
            record = await self._read(path, path.name[: -len(RECORD_SUFFIX)])
            ids.append(record.id)
        return ids

    async def _read(self, path: Path, user_id: str) -> UserRecord:
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            raise NotFoundError(f"User '{user_id}' not found") from None
        except UnicodeDecodeError as e:
            raise CorruptRecordError(user_id, path.name, str(e)) from e
        except OSError as e:
            logger.error(f"Failed to read record {path.name}: {e}")
            raise StoreUnavailableError("read", path.name, str(e)) from e

        try:
            return UserRecord.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Corrupted record {path.name}", extra={"user_id": user_id})
            raise CorruptRecordError(user_id, path.name, str(e).splitlines()[0]) from e
