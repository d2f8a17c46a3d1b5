from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from chorechart.core.errors import RecordInvalidError, RecordNotFoundError
from chorechart.core.records import AssignPermitted, CommitRecord, FindRecord


class _FakeDb:
    def __init__(self, raise_integrity_on_commit=None, record=None):
        self._raise_integrity_on_commit = raise_integrity_on_commit
        self._record = record
        self.rollback_called = False
        self.refresh_called = False

    def get(self, *_args, **_kwargs):
        return self._record

    def add(self, *_args, **_kwargs):
        return None

    def commit(self):
        if self._raise_integrity_on_commit:
            raise IntegrityError(
                "INSERT INTO users ...",
                {"Username": "grandma"},
                Exception(self._raise_integrity_on_commit),
            )

    def rollback(self):
        self.rollback_called = True

    def refresh(self, *_args, **_kwargs):
        self.refresh_called = True


def test_unique_violation_maps_to_field_error():
    db = _FakeDb(raise_integrity_on_commit="UNIQUE constraint failed: users.Username")

    with pytest.raises(RecordInvalidError) as exc_info:
        CommitRecord(db, SimpleNamespace(), unique_errors={"username": "username"})

    assert exc_info.value.Errors == {"username": ["has already been taken"]}
    assert db.rollback_called is True
    assert db.refresh_called is False


def test_unmapped_integrity_error_is_a_base_error():
    db = _FakeDb(raise_integrity_on_commit="FOREIGN KEY constraint failed")

    with pytest.raises(RecordInvalidError) as exc_info:
        CommitRecord(db, SimpleNamespace())

    assert exc_info.value.Errors == {"base": ["could not be saved"]}


def test_commit_stamps_updated_at():
    record = SimpleNamespace(UpdatedAt=None)

    assert CommitRecord(_FakeDb(), record) is record
    assert record.UpdatedAt is not None


def test_find_record_raises_not_found():
    with pytest.raises(RecordNotFoundError, match="Task not found"):
        FindRecord(_FakeDb(), object, 1, "Task")


def test_assign_permitted_skips_unknown_fields():
    record = SimpleNamespace()

    AssignPermitted(record, {"name": "Dishes", "id": 7}, {"name": "Name"})

    assert record.Name == "Dishes"
    assert not hasattr(record, "id")
