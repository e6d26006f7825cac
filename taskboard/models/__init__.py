"""Models package."""
from .common import UTCDateTime, as_utc, new_oid, utcnow
from .task import Task, TaskStatus, TaskPriority
from .user import User

__all__ = ["Task", "TaskStatus", "TaskPriority", "User", "UTCDateTime", "as_utc", "new_oid", "utcnow"]
