"""Task Routes — HTTP verbs on /api/v1/tasks mapped to TaskService operations.

Invariants:
    - One route per TaskService operation, no logic beyond body parsing
    - Static paths (/project/..., /user/...) declared before /{task_id}
"""

from fastapi import APIRouter, Depends

from taskflow.api.deps import envelope_response, get_task_service
from taskflow.core.domain_types import ProjectId, TaskId, UserId
from taskflow.schemas.task import (
    TaskCreate, TaskPatch, TaskReplace, TaskStatusUpdate,
)
from taskflow.services.task_service import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.get("")
async def list_tasks(service: TaskService = Depends(get_task_service)):
    """All tasks, newest first, with project and assignee embedded."""
    return envelope_response(await service.fetch_tasks())


@router.post("")
async def create_task(
    body: TaskCreate, service: TaskService = Depends(get_task_service),
):
    return envelope_response(await service.create_task(body.to_service()))


@router.get("/project/{project_id}")
async def list_project_tasks(
    project_id: str, service: TaskService = Depends(get_task_service),
):
    return envelope_response(await service.fetch_task_by_project_id(ProjectId(project_id)))


@router.get("/user/{user_id}")
async def list_user_tasks(
    user_id: str, service: TaskService = Depends(get_task_service),
):
    return envelope_response(await service.fetch_task_by_user_id(UserId(user_id)))


@router.get("/{task_id}")
async def get_task(
    task_id: str, service: TaskService = Depends(get_task_service),
):
    return envelope_response(await service.fetch_task_by_id(TaskId(task_id)))


@router.put("/{task_id}")
async def replace_task(
    task_id: str, body: TaskReplace,
    service: TaskService = Depends(get_task_service),
):
    """Replace the mutable fields; notifies the previous assignee."""
    return envelope_response(await service.update_task(TaskId(task_id), body.to_service()))


@router.patch("/{task_id}")
async def patch_task(
    task_id: str, body: TaskPatch,
    service: TaskService = Depends(get_task_service),
):
    """Partial update; no notification."""
    return envelope_response(await service.patch(TaskId(task_id), body.to_service()))


@router.patch("/{task_id}/status")
async def set_task_status(
    task_id: str, body: TaskStatusUpdate,
    service: TaskService = Depends(get_task_service),
):
    return envelope_response(await service.update_task_status(TaskId(task_id), body.status))


@router.delete("/{task_id}")
async def delete_task(
    task_id: str, service: TaskService = Depends(get_task_service),
):
    return envelope_response(await service.delete_task_from_project(TaskId(task_id)))
