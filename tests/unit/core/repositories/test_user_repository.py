"""Unit tests for the file-backed user repository."""

import asyncio
import gc
import json

import aiofiles.os
import pytest

from notekeep.core.errors import (
    ConflictError,
    CorruptRecordError,
    InvalidInputError,
    NotFoundError,
    StoreUnavailableError,
)
from notekeep.core.models import UserRecord
from notekeep.core.repositories import UserRepository, storage_key


def make_record(user_id: str, **kw) -> UserRecord:
    return UserRecord(id=user_id, password_hash="$argon2id$fake", token=f"token-{user_id}", **kw)


class TestStorageKey:
    def test_plain_id(self):
        assert storage_key("bob") == "bob.json"

    def test_path_separators_replaced(self):
        assert storage_key("../../etc/passwd") == ".._.._etc_passwd.json"
        assert storage_key("a\\b") == "a_b.json"
        assert "/" not in storage_key("/abs/path")

    def test_empty_id_rejected(self):
        with pytest.raises(InvalidInputError):
            storage_key("")


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_save_and_get(self, user_repo):
        await user_repo.save(make_record("bob", payload="hello"))

        record = await user_repo.get("bob")
        assert record.id == "bob"
        assert record.payload == "hello"
        assert record.token == "token-bob"
        assert record.note_recipients == []
        assert record.accessible_notes == []

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, user_repo):
        with pytest.raises(NotFoundError):
            await user_repo.get("nobody")

    @pytest.mark.asyncio
    async def test_exists(self, user_repo):
        assert await user_repo.exists("bob") is False
        await user_repo.save(make_record("bob"))
        assert await user_repo.exists("bob") is True

    @pytest.mark.asyncio
    async def test_exists_does_not_parse(self, user_repo):
        user_repo.record_path("bob").write_text("not json at all")
        assert await user_repo.exists("bob") is True

    @pytest.mark.asyncio
    async def test_file_stays_inside_storage_dir(self, user_repo):
        await user_repo.save(make_record("../escape"))

        path = user_repo.record_path("../escape")
        assert path.parent == user_repo.storage_dir
        assert (await user_repo.get("../escape")).id == "../escape"

    @pytest.mark.asyncio
    async def test_colliding_key_is_not_found(self, user_repo):
        await user_repo.save(make_record("a_b"))

        assert await user_repo.exists("a/b") is True
        with pytest.raises(NotFoundError):
            await user_repo.get("a/b")

    @pytest.mark.asyncio
    async def test_save_is_full_overwrite(self, user_repo):
        await user_repo.save(make_record("bob", payload="old", note_recipients=["alice"]))
        await user_repo.save(make_record("bob"))

        record = await user_repo.get("bob")
        assert record.payload is None
        assert record.note_recipients == []

    @pytest.mark.asyncio
    async def test_save_leaves_no_temp_files(self, user_repo):
        await user_repo.save(make_record("bob"))
        await user_repo.save(make_record("bob", payload="again"))

        assert [p.name for p in user_repo.storage_dir.iterdir()] == ["bob.json"]

    @pytest.mark.asyncio
    async def test_failed_write_keeps_previous_record(self, user_repo, monkeypatch):
        await user_repo.save(make_record("bob", payload="v1"))

        async def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(aiofiles.os, "replace", broken_replace)
        with pytest.raises(StoreUnavailableError) as exc_info:
            await user_repo.save(make_record("bob", payload="v2"))
        monkeypatch.undo()

        assert "bob.json" in exc_info.value.message
        assert (await user_repo.get("bob")).payload == "v1"
        assert [p.name for p in user_repo.storage_dir.iterdir()] == ["bob.json"]

    @pytest.mark.asyncio
    async def test_on_disk_format(self, user_repo):
        await user_repo.save(make_record("bob", payload="note", accessible_notes=["alice"]))

        stored = json.loads(user_repo.record_path("bob").read_text())
        assert stored == {
            "id": "bob",
            "hashed_password": "$argon2id$fake",
            "token": "token-bob",
            "data": "note",
            "noteRecipients": [],
            "accessibleNotes": ["alice"],
        }

    @pytest.mark.asyncio
    async def test_reads_legacy_record_without_lists(self, user_repo):
        user_repo.record_path("old").write_text(
            json.dumps({"id": "old", "hashed_password": "h"})
        )

        record = await user_repo.get("old")
        assert record.token is None
        assert record.payload is None
        assert record.note_recipients == []

    @pytest.mark.asyncio
    async def test_corrupt_record_names_resource(self, user_repo):
        user_repo.record_path("alice").write_text("this is {not} valid json[]")

        with pytest.raises(CorruptRecordError) as exc_info:
            await user_repo.get("alice")

        assert exc_info.value.user_id == "alice"
        assert "alice.json" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_record_missing_fields_is_corrupt(self, user_repo):
        user_repo.record_path("alice").write_text(json.dumps({"id": "alice"}))

        with pytest.raises(CorruptRecordError):
            await user_repo.get("alice")

    @pytest.mark.asyncio
    async def test_create_refuses_existing_id(self, user_repo):
        await user_repo.create(make_record("bob", payload="original"))

        with pytest.raises(ConflictError):
            await user_repo.create(make_record("bob"))

        assert (await user_repo.get("bob")).payload == "original"

    @pytest.mark.asyncio
    async def test_update_reads_latest_state(self, user_repo):
        await user_repo.save(make_record("bob"))

        def add_alice(record):
            record.add_recipient("alice")

        updated = await user_repo.update("bob", add_alice)
        assert updated.note_recipients == ["alice"]
        assert (await user_repo.get("bob")).note_recipients == ["alice"]

    @pytest.mark.asyncio
    async def test_concurrent_updates_are_not_lost(self, user_repo):
        await user_repo.save(make_record("bob"))

        def adder(name):
            def _apply(record):
                record.add_recipient(name)
            return _apply

        names = [f"user{i}" for i in range(20)]
        await asyncio.gather(*(user_repo.update("bob", adder(n)) for n in names))

        assert sorted((await user_repo.get("bob")).note_recipients) == sorted(names)

    @pytest.mark.asyncio
    async def test_locks_released_after_use(self, user_repo):
        await user_repo.save(make_record("bob"))

        await user_repo.update("bob", lambda record: record.add_recipient("alice"))
        with pytest.raises(NotFoundError):
            await user_repo.update("ghost", lambda record: None)

        gc.collect()
        assert len(user_repo._locks) == 0

    @pytest.mark.asyncio
    async def test_lock_shared_while_held(self, user_repo):
        async with user_repo.lock("bob"):
            assert len(user_repo._locks) == 1
            waiter = asyncio.create_task(user_repo.clear_payload("bob"))
            await asyncio.sleep(0)
            assert len(user_repo._locks) == 1
            assert not waiter.done()
        with pytest.raises(NotFoundError):
            await waiter

    @pytest.mark.asyncio
    async def test_clear_payload_removes_field(self, user_repo):
        await user_repo.save(make_record("bob", payload="secret"))

        await user_repo.clear_payload("bob")

        assert (await user_repo.get("bob")).payload is None
        assert "data" not in json.loads(user_repo.record_path("bob").read_text())

    @pytest.mark.asyncio
    async def test_clear_payload_unknown_user(self, user_repo):
        with pytest.raises(NotFoundError):
            await user_repo.clear_payload("nobody")

    @pytest.mark.asyncio
    async def test_list_ids_sorted(self, user_repo):
        for user_id in ("charlie", "alice", "bob"):
            await user_repo.save(make_record(user_id))

        assert await user_repo.list_ids() == ["alice", "bob", "charlie"]

    @pytest.mark.asyncio
    async def test_list_ids_empty(self, tmp_path):
        repo = UserRepository(tmp_path / "empty")
        assert await repo.list_ids() == []

    @pytest.mark.asyncio
    async def test_list_ids_returns_original_ids(self, user_repo):
        await user_repo.save(make_record("team/bob"))
        assert await user_repo.list_ids() == ["team/bob"]

    @pytest.mark.asyncio
    async def test_list_ids_fails_on_corrupt_record(self, user_repo):
        await user_repo.save(make_record("bob"))
        user_repo.record_path("alice").write_text("this is {not} valid json[]")

        with pytest.raises(CorruptRecordError) as exc_info:
            await user_repo.list_ids()

        assert exc_info.value.user_id == "alice"
        assert "alice.json" in exc_info.value.message
