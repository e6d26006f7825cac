from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from ..models import Task, TaskPriority, TaskStatus, as_utc


def _lower(value):
    return value.lower() if isinstance(value, str) else value


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: Optional[datetime] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    tags: List[str] = Field(default_factory=list)
    # status and owner are assigned by the server, not the payload

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v):
        return _lower(v)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v):
        return as_utc(v)


class TaskUpdate(BaseModel):
    """Partial patch. Only fields present in the payload are applied."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: Optional[datetime] = None
    priority: Optional[TaskPriority] = None
    tags: Optional[List[str]] = None
    status: Optional[TaskStatus] = None

    @field_validator("priority", "status", mode="before")
    @classmethod
    def parse_enum(cls, v):
        return _lower(v)

    @field_validator("title", "priority", "status")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

    @field_validator("tags")
    @classmethod
    def clear_tags(cls, v):
        # null clears the tags
        return [] if v is None else v

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v):
        return as_utc(v)


class TaskRead(BaseModel):
    """A task as returned to API clients."""
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: TaskPriority
    tags: List[str] = Field(default_factory=list)
    status: TaskStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, task: Task) -> "TaskRead":
        """Translate a stored task, renaming the store key to ``id``."""
        data = task.model_dump(exclude={"oid"})
        return cls(id=task.oid, **data)
