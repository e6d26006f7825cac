from datetime import datetime
from typing import List, Optional
from enum import Enum
from sqlmodel import Field, SQLModel, Column, JSON

from .common import UTCDateTime, new_oid, utcnow


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Task(SQLModel, table=True):
    """Represents a single task owned by a user.

    Attributes:
        oid: Store key, exposed to clients as ``id``
        user_id: Key of the owning user
        title: Task title (required)
        description: Optional detailed description
        due_date: Optional due date and time
        priority: Priority level (high, medium, low)
        tags: List of tags for categorization
        status: Workflow state (todo, in_progress, done)
        created_at: Timestamp when task was created
        updated_at: Timestamp of the last update, None until the first one
    """
    __tablename__ = "tasks"

    oid: str = Field(default_factory=new_oid, primary_key=True)
    user_id: str = Field(foreign_key="users.oid", index=True)
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    due_date: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime()))
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    status: TaskStatus = Field(default=TaskStatus.TODO, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime(), nullable=False))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime()))
