"""Task operations on top of the persistence adapter."""

import logging
from typing import List, Optional

from ..db.store import Store
from ..errors import NotFound
from ..models import Task, TaskStatus, utcnow
from ..schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class TaskService:
    """CRUD over tasks.

    Attributes:
        store: Persistence adapter holding the tasks
    """

    def __init__(self, store: Store):
        self.store = store

    async def list_tasks(self, user_id: str, status: Optional[TaskStatus] = None) -> List[Task]:
        """Tasks owned by ``user_id``, optionally narrowed to one status."""
        return await self.store.find_many(Task, user_id=user_id, status=status)

    async def get_task(self, task_id: str) -> Task:
        """Raises NotFound if no task has this id."""
        task = await self.store.find_by_id(Task, task_id)
        if task is None:
            raise NotFound(f"Task {task_id} not found")
        return task

    async def create_task(self, user_id: str, data: TaskCreate) -> Task:
        """Create a task for ``user_id``.

        New tasks always start as todo with no updated_at.
        """
        payload = data.model_dump()
        payload.update(
            user_id=user_id,
            status=TaskStatus.TODO,
            created_at=utcnow(),
            updated_at=None,
        )
        task = await self.store.create(Task, payload)
        logger.info(f"Created task {task.oid} for user {user_id}")
        return task

    async def update_task(self, task_id: str, patch: TaskUpdate) -> Task:
        """Apply the fields present in ``patch`` and stamp updated_at.

        Raises:
            NotFound: If no task has this id
        """
        changes = patch.model_dump(exclude_unset=True)
        changes["updated_at"] = utcnow()
        task = await self.store.update_by_id(Task, task_id, changes)
        if task is None:
            raise NotFound(f"Task {task_id} not found")
        logger.info(f"Updated task {task_id}: {sorted(changes)}")
        return task

    async def delete_task(self, task_id: str) -> bool:
        deleted = await self.store.delete_by_id(Task, task_id)
        if deleted:
            logger.info(f"Deleted task {task_id}")
        return deleted
