"""Unit tests for the UserRecord model."""

import pytest
from pydantic import ValidationError

from notekeep.core.models import UserRecord


def test_new_record_defaults():
    record = UserRecord(id="bob", password_hash="h", token="t")

    assert record.payload is None
    assert record.has_payload is False
    assert record.note_recipients == []
    assert record.accessible_notes == []


def test_empty_id_rejected():
    with pytest.raises(ValidationError):
        UserRecord(id="", password_hash="h")


def test_loads_storage_aliases():
    record = UserRecord.model_validate({
        "id": "bob",
        "hashed_password": "h",
        "data": "note",
        "noteRecipients": ["alice"],
        "accessibleNotes": ["carol"],
    })

    assert record.password_hash == "h"
    assert record.payload == "note"
    assert record.note_recipients == ["alice"]
    assert record.accessible_notes == ["carol"]


def test_empty_payload_is_a_payload():
    record = UserRecord(id="bob", password_hash="h", payload="")

    assert record.has_payload is True
    assert record.to_storage()["data"] == ""


def test_to_storage_drops_absent_payload():
    stored = UserRecord(id="bob", password_hash="h", token="t").to_storage()

    assert "data" not in stored
    assert stored["hashed_password"] == "h"
    assert stored["noteRecipients"] == []


def test_add_recipient_is_idempotent():
    record = UserRecord(id="bob", password_hash="h")

    assert record.add_recipient("alice") is True
    assert record.add_recipient("alice") is False
    assert record.note_recipients == ["alice"]


def test_add_accessible_note_keeps_order():
    record = UserRecord(id="alice", password_hash="h")

    record.add_accessible_note("bob")
    record.add_accessible_note("carol")
    record.add_accessible_note("bob")

    assert record.accessible_notes == ["bob", "carol"]
