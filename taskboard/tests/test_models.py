"""Unit tests for the Task model and the task schemas."""

import pytest
from datetime import datetime, timedelta, timezone
from pydantic import ValidationError

from taskboard.models import Task, TaskPriority, TaskStatus, User, UTCDateTime, as_utc
from taskboard.schemas.task import TaskCreate, TaskRead, TaskUpdate


def test_task_creation_minimal():
    """Test creating a task with minimal required fields."""
    task = Task(user_id="u1", title="Test Task")

    assert task.oid
    assert task.title == "Test Task"
    assert task.description is None
    assert task.status == TaskStatus.TODO
    assert task.priority == TaskPriority.MEDIUM
    assert task.tags == []
    assert task.due_date is None
    assert isinstance(task.created_at, datetime)
    assert task.updated_at is None


def test_generated_ids_are_distinct():
    assert Task(user_id="u1", title="a").oid != Task(user_id="u1", title="b").oid
    assert User(username="a", hashed_password="x").oid != User(username="b", hashed_password="x").oid


def test_task_read_renames_store_key():
    """The store key is exposed as id and never under its own name."""
    task = Task(user_id="u1", title="Test", tags=["work"])
    read = TaskRead.from_record(task)
    body = read.model_dump(mode="json")

    assert body["id"] == task.oid
    assert "oid" not in body
    assert body["status"] == "todo"
    assert body["priority"] == "medium"
    assert body["tags"] == ["work"]


def test_task_create_defaults():
    payload = TaskCreate(title="Buy milk")

    assert payload.priority == TaskPriority.MEDIUM
    assert payload.tags == []
    assert payload.description is None


def test_task_create_priority_is_case_insensitive():
    assert TaskCreate(title="x", priority="HIGH").priority == TaskPriority.HIGH


def test_task_create_rejects_unknown_priority():
    with pytest.raises(ValidationError):
        TaskCreate(title="x", priority="urgent")


def test_task_create_requires_title():
    with pytest.raises(ValidationError):
        TaskCreate(title="")


def test_due_date_normalized_to_aware_utc():
    payload = TaskCreate(title="x", due_date="2026-11-01T12:00:00+02:00")
    assert payload.due_date == datetime(2026, 11, 1, 10, 0, tzinfo=timezone.utc)
    assert payload.due_date.utcoffset() == timedelta(0)


def test_naive_due_date_is_taken_as_utc():
    payload = TaskCreate(title="x", due_date="2026-11-01T12:00:00")
    assert payload.due_date == datetime(2026, 11, 1, 12, 0, tzinfo=timezone.utc)


def test_new_records_have_aware_timestamps():
    assert Task(user_id="u1", title="x").created_at.tzinfo is not None
    assert User(username="a", hashed_password="x").created_at.tzinfo is not None


def test_task_update_only_tracks_sent_fields():
    patch = TaskUpdate(status="done")
    assert patch.model_dump(exclude_unset=True) == {"status": TaskStatus.DONE}


@pytest.mark.parametrize("field", ["title", "status", "priority"])
def test_task_update_rejects_null_for_required_fields(field):
    with pytest.raises(ValidationError):
        TaskUpdate(**{field: None})


def test_task_update_allows_clearing_optional_fields():
    patch = TaskUpdate(description=None, due_date=None)
    assert patch.model_dump(exclude_unset=True) == {"description": None, "due_date": None}


def test_task_update_null_tags_clears_them():
    patch = TaskUpdate(tags=None)
    assert patch.model_dump(exclude_unset=True) == {"tags": []}


def test_task_update_rejects_unknown_status():
    with pytest.raises(ValidationError):
        TaskUpdate(status="archived")


def test_task_update_normalizes_due_date():
    shifted = datetime(2026, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=1)))
    due_date = TaskUpdate(due_date=shifted).due_date
    assert due_date == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert due_date.tzinfo == timezone.utc


def test_as_utc():
    assert as_utc(None) is None
    assert as_utc(datetime(2026, 1, 1)) == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert as_utc(datetime(2026, 1, 1)).tzinfo == timezone.utc


def test_utc_datetime_column_binds_and_reads_aware_values():
    """SQLite hands back naive values; the column type re-attaches UTC."""
    column_type = UTCDateTime()
    stored = column_type.process_bind_param(
        datetime(2026, 1, 1, 3, 0, tzinfo=timezone(timedelta(hours=3))), None
    )
    assert stored == datetime(2026, 1, 1, tzinfo=timezone.utc)

    loaded = column_type.process_result_value(datetime(2026, 1, 1), None)
    assert loaded == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert loaded.tzinfo == timezone.utc
