from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..dependencies.auth import get_task_service, get_token_user_id, resolve_owner
from ..errors import ConstraintViolation, NotFound
from ..models import Task, TaskStatus
from ..schemas.task import TaskCreate, TaskRead, TaskUpdate
from ..services.tasks import TaskService

router = APIRouter()


async def _load_task(tasks: TaskService, task_id: str, token_user_id: Optional[str]) -> Task:
    try:
        task = await tasks.get_task(task_id)
    except NotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    # someone else's task looks exactly like a missing one
    if token_user_id is not None and task.user_id != token_user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("", response_model=List[TaskRead])
async def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    user_id: Optional[str] = Query(None, alias="userId"),
    token_user_id: Optional[str] = Depends(get_token_user_id),
    tasks: TaskService = Depends(get_task_service),
):
    owner = resolve_owner(token_user_id, user_id)
    return [TaskRead.from_record(t) for t in await tasks.list_tasks(owner, status=status_filter)]


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: str,
    token_user_id: Optional[str] = Depends(get_token_user_id),
    tasks: TaskService = Depends(get_task_service),
):
    return TaskRead.from_record(await _load_task(tasks, task_id, token_user_id))


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    task: TaskCreate,
    user_id: Optional[str] = Query(None, alias="userId"),
    token_user_id: Optional[str] = Depends(get_token_user_id),
    tasks: TaskService = Depends(get_task_service),
):
    owner = resolve_owner(token_user_id, user_id)
    try:
        created = await tasks.create_task(owner, task)
    except ConstraintViolation:
        # backends that enforce the users foreign key refuse unknown owners
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown userId")
    return TaskRead.from_record(created)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: str,
    task_update: TaskUpdate,
    token_user_id: Optional[str] = Depends(get_token_user_id),
    tasks: TaskService = Depends(get_task_service),
):
    if token_user_id is not None:
        await _load_task(tasks, task_id, token_user_id)
    try:
        updated_task = await tasks.update_task(task_id, task_update)
    except NotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return TaskRead.from_record(updated_task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    token_user_id: Optional[str] = Depends(get_token_user_id),
    tasks: TaskService = Depends(get_task_service),
):
    if token_user_id is not None:
        await _load_task(tasks, task_id, token_user_id)
    success = await tasks.delete_task(task_id)
    if not success:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
