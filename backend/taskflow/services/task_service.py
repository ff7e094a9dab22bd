"""Task Service — task lifecycle orchestration over the Repository and dispatcher ports.

Invariants:
    - Every public operation returns an Envelope; no exception crosses the boundary
    - TaskflowError → its own envelope; anything else → 500 with the stringified cause
    - create_task checks, in order: project exists (404), status (400),
      due date (400), description (400), assignee exists (404), uniqueness (409)
    - update_task_status validates status BEFORE checking the task exists
    - Missing task on any mutator → 404
    - Dispatch on update_task and delete_task_from_project only, and only when
      the task had an assignee before the mutation; patch and
      update_task_status never dispatch
    - A dispatch runs after the mutation committed and never rolls it back

Design Decisions:
    - Uniqueness pre-check is a fast path; the store's unique constraint is the
      guarantee, surfacing as ConflictError from the session manager
    - NotificationPolicy.WARN (default) keeps the primary result and attaches
      the dispatch outcome as envelope.notification; PROPAGATE reproduces the
      legacy behaviour of reporting the dispatch failure as the call's result
    - No retries anywhere: a failed dispatch is reported once and dropped
"""

import functools
import logging
from typing import Any, Mapping

from taskflow.core.domain_types import (
    EntityKind, NotificationPolicy, ProjectId, TASK_JOINS, TaskId, UserId,
)
from taskflow.core.envelope import Envelope
from taskflow.core.errors import (
    ConflictError, ErrorContext, InternalError, NotificationDispatchError,
    ResourceNotFoundError, TaskflowError,
)
from taskflow.core.repository_protocols import NotificationDispatcher, Repository
from taskflow.core.task_rules import (
    build_changes, canonical_description, deleted_message,
    normalize_due_date, parse_status, updated_message,
)

logger = logging.getLogger(__name__)

_NEWEST_FIRST = ("created_at", "desc")


def service_boundary(operation: str):
    """Convert every exception raised by a service operation into an Envelope."""
    def decorate(fn):
        @functools.wraps(fn)
        async def wrapper(self, *args, **kwargs) -> Envelope:
            try:
                return await fn(self, *args, **kwargs)
            except TaskflowError as e:
                if e.context.operation is None:
                    e.context.operation = operation
                logger.warning(
                    f"{operation} failed: {e.message}",
                    extra={
                        "operation": operation, "error_code": e.code,
                        "task_id": e.context.task_id,
                        "project_id": e.context.project_id,
                        "user_id": e.context.user_id,
                    },
                )
                return e.to_envelope()
            except Exception as e:
                logger.error(
                    f"{operation} failed unexpectedly: {e}",
                    extra={"operation": operation}, exc_info=True,
                )
                return InternalError(str(e)).to_envelope()
        return wrapper
    return decorate


class TaskService:
    """Validates task commands, mutates tasks, dispatches notifications."""

    def __init__(
        self,
        repository: Repository,
        dispatcher: NotificationDispatcher,
        notification_policy: NotificationPolicy = NotificationPolicy.WARN,
    ):
        self._repository = repository
        self._dispatcher = dispatcher
        self._notification_policy = notification_policy

    # ─── Create ──────────────────────────────────────────────────

    @service_boundary("create_task")
    async def create_task(self, new_task: Mapping[str, Any]) -> Envelope:
        project_id = new_task.get("project_id")
        assigned_to_id = new_task.get("assigned_to_id")

        project = await self._repository.find_one(
            EntityKind.PROJECT, {"id": project_id},
        )
        if project is None:
            raise ResourceNotFoundError(
                "Project", str(project_id), message="Error creating Task",
                context=ErrorContext(project_id=project_id),
            )

        status = parse_status(new_task.get("status"))
        due_date = normalize_due_date(new_task.get("due_date"))
        description = canonical_description(new_task.get("description"))
        if assigned_to_id is not None:
            await self._require_user(assigned_to_id, "Error creating Task")

        existing = await self._repository.find_one(
            EntityKind.TASK, {"description": description},
        )
        if existing is not None:
            raise ConflictError(
                "Error creating Task", "Tasks already exists.",
                context=ErrorContext(project_id=project_id),
            )

        task = await self._repository.create(EntityKind.TASK, {
            "description": description,
            "status": status.value,
            "due_date": due_date,
            "project_id": project_id,
            "assigned_to_id": assigned_to_id,
        })
        logger.info(
            "Task created",
            extra={"task_id": task["id"], "project_id": project_id},
        )
        return Envelope(201, "Task created successfully", task)

    # ─── Reads ───────────────────────────────────────────────────

    @service_boundary("fetch_tasks")
    async def fetch_tasks(self) -> Envelope:
        tasks = await self._repository.find_all(
            EntityKind.TASK, joins=TASK_JOINS, sort=_NEWEST_FIRST,
        )
        return Envelope(200, "Tasks found!", tasks)

    @service_boundary("fetch_task_by_project_id")
    async def fetch_task_by_project_id(self, project_id: ProjectId) -> Envelope:
        tasks = await self._repository.find_all(
            EntityKind.TASK, {"project_id": project_id},
            joins=TASK_JOINS, sort=_NEWEST_FIRST,
        )
        if not tasks:
            return Envelope(
                404, "Tasks not found!",
                f"No tasks found for project with id {project_id}!",
            )
        return Envelope(200, "Tasks found!", tasks)

    @service_boundary("fetch_task_by_id")
    async def fetch_task_by_id(self, task_id: TaskId) -> Envelope:
        task = await self._repository.find_one(
            EntityKind.TASK, {"id": task_id}, joins=TASK_JOINS,
        )
        if task is None:
            return Envelope(
                404, "task not found!", f"task with id {task_id} not found!",
            )
        return Envelope(200, "task found!", task)

    @service_boundary("fetch_task_by_user_id")
    async def fetch_task_by_user_id(self, user_id: UserId) -> Envelope:
        # No matches is a valid answer for a user: 200 with an empty list
        tasks = await self._repository.find_all(
            EntityKind.TASK, {"assigned_to_id": user_id},
            joins=TASK_JOINS, sort=_NEWEST_FIRST,
        )
        return Envelope(200, "Tasks found!", tasks)

    # ─── Mutations ───────────────────────────────────────────────

    @service_boundary("update_task")
    async def update_task(self, task_id: TaskId, body: Mapping[str, Any]) -> Envelope:
        task = await self._require_task(task_id, "Error updating task!")
        changes = await self._validated_changes(task, body)

        updated = await self._repository.update(EntityKind.TASK, task_id, changes)
        if updated is None:
            raise ResourceNotFoundError(
                "Task", task_id, message="Error updating task!",
                context=ErrorContext(task_id=task_id),
            )
        logger.info("Task updated", extra={"task_id": task_id})

        result = Envelope(200, "Task updated successfully", updated)
        return await self._notify(
            result, task["assigned_to_id"], updated_message(updated["description"]),
        )

    @service_boundary("patch")
    async def patch(self, task_id: TaskId, body: Mapping[str, Any]) -> Envelope:
        # Partial update without dispatch, unlike update_task
        task = await self._require_task(task_id, "Error updating task!")
        changes = await self._validated_changes(task, body)

        if changes:
            updated = await self._repository.update(EntityKind.TASK, task_id, changes)
            if updated is None:
                raise ResourceNotFoundError(
                    "Task", task_id, message="Error updating task!",
                    context=ErrorContext(task_id=task_id),
                )
        result = await self._require_task(
            task_id, "Error updating task!", joins=TASK_JOINS,
        )
        logger.info("Task patched", extra={"task_id": task_id})
        return Envelope(200, "Task updated successfully", result)

    @service_boundary("delete_task_from_project")
    async def delete_task_from_project(self, task_id: TaskId) -> Envelope:
        task = await self._require_task(task_id, "Error deleting task")

        deleted = await self._repository.delete(EntityKind.TASK, task_id)
        if deleted is None:
            raise ResourceNotFoundError(
                "Task", task_id, message="Error deleting task",
                context=ErrorContext(task_id=task_id),
            )
        logger.info("Task deleted", extra={"task_id": task_id})

        result = Envelope(200, "Task deleted successfully", deleted)
        return await self._notify(
            result, task["assigned_to_id"], deleted_message(deleted["description"]),
        )

    @service_boundary("update_task_status")
    async def update_task_status(self, task_id: TaskId, status: Any) -> Envelope:
        new_status = parse_status(status)
        await self._require_task(task_id, "Error updating task")

        updated = await self._repository.update(
            EntityKind.TASK, task_id, {"status": new_status.value},
        )
        if updated is None:
            raise ResourceNotFoundError(
                "Task", task_id, message="Error updating task",
                context=ErrorContext(task_id=task_id),
            )
        logger.info(
            f"Task status set to {new_status.value}", extra={"task_id": task_id},
        )
        return Envelope(200, "Task status updated successfully", updated)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _require_task(
        self, task_id: TaskId, message: str, joins: tuple[str, ...] = (),
    ) -> dict:
        task = await self._repository.find_one(
            EntityKind.TASK, {"id": task_id}, joins=joins,
        )
        if task is None:
            raise ResourceNotFoundError(
                "Task", task_id, message=message,
                context=ErrorContext(task_id=task_id),
            )
        return task

    async def _require_user(self, user_id: UserId, message: str) -> dict:
        user = await self._repository.find_one(EntityKind.USER, {"id": user_id})
        if user is None:
            raise ResourceNotFoundError(
                "User", user_id, message=message,
                context=ErrorContext(user_id=user_id),
            )
        return user

    async def _validated_changes(
        self, task: dict, body: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Canonical changeset for task, with reference and uniqueness checks."""
        changes = build_changes(body)
        if changes.get("assigned_to_id") is not None:
            await self._require_user(changes["assigned_to_id"], "Error updating task")
        description = changes.get("description")
        if description is not None and description != task["description"]:
            clash = await self._repository.find_one(
                EntityKind.TASK, {"description": description},
            )
            if clash is not None and clash["id"] != task["id"]:
                raise ConflictError(
                    "Error updating task", "Tasks already exists.",
                    context=ErrorContext(task_id=task["id"]),
                )
        return changes

    async def _notify(
        self, result: Envelope, recipient_id: UserId | None, message: str,
    ) -> Envelope:
        """Dispatch message to recipient_id after a committed mutation."""
        if recipient_id is None:
            return result
        try:
            outcome = await self._dispatcher.create_notification(message, recipient_id)
        except Exception as e:
            logger.error(
                f"Notification dispatcher raised: {e}",
                extra={"recipient_id": recipient_id}, exc_info=True,
            )
            outcome = NotificationDispatchError(str(e)).to_envelope()

        if outcome.ok:
            result.notification = outcome
            return result

        logger.warning(
            f"Notification not delivered: {outcome.message}",
            extra={"recipient_id": recipient_id, "status_code": outcome.code},
        )
        if self._notification_policy is NotificationPolicy.PROPAGATE:
            return Envelope(outcome.code, outcome.message, outcome.details)
        result.notification = outcome
        return result
