"""Read operations — joins, ordering, and the not-found policy per lookup.

Tests cover:
    - fetch_tasks returns newest first with project/assignee embedded
    - fetch_task_by_project_id: 404 when empty
    - fetch_task_by_id: 404 when absent
    - fetch_task_by_user_id: 200 with empty list when nothing matches
    - Store failures on reads come back as structured 500 envelopes
"""

from unittest.mock import AsyncMock

from taskflow.services.task_service import TaskService


async def test_fetch_tasks_empty_store_returns_200_empty_list(service):
    result = await service.fetch_tasks()
    assert result.code == 200
    assert result.details == []


async def test_fetch_tasks_newest_first_with_joins(service, new_task, user, project):
    await service.create_task(new_task(description="older"))
    await service.create_task(
        new_task(description="newer", assigned_to_id=user["id"]),
    )

    result = await service.fetch_tasks()

    assert [t["description"] for t in result.details] == ["newer", "older"]
    newest, oldest = result.details
    assert newest["project"]["id"] == project["id"]
    assert newest["assigned_to"]["name"] == "Ada"
    assert oldest["assigned_to"] is None


async def test_fetch_by_project_returns_tasks(service, new_task, project):
    await service.create_task(new_task())

    result = await service.fetch_task_by_project_id(project["id"])

    assert result.code == 200
    assert len(result.details) == 1
    assert result.details[0]["project"]["name"] == "Website relaunch"


async def test_fetch_by_project_without_tasks_returns_404(service, project):
    result = await service.fetch_task_by_project_id(project["id"])

    assert result.code == 404
    assert result.message == "Tasks not found!"


async def test_fetch_by_id_returns_joined_task(service, new_task):
    created = await service.create_task(new_task())

    result = await service.fetch_task_by_id(created.details["id"])

    assert result.code == 200
    assert result.details["id"] == created.details["id"]
    assert "project" in result.details


async def test_fetch_by_id_missing_returns_404(service):
    result = await service.fetch_task_by_id("missing-id")

    assert result.code == 404
    assert result.details == "task with id missing-id not found!"


async def test_fetch_by_user_returns_only_assigned_tasks(service, new_task, user):
    await service.create_task(new_task(description="mine", assigned_to_id=user["id"]))
    await service.create_task(new_task(description="nobody's"))

    result = await service.fetch_task_by_user_id(user["id"])

    assert result.code == 200
    assert [t["description"] for t in result.details] == ["mine"]


async def test_fetch_by_user_without_tasks_returns_200_empty(service, user):
    result = await service.fetch_task_by_user_id(user["id"])

    assert result.code == 200
    assert result.details == []


async def test_read_failures_return_structured_envelopes(dispatcher):
    repository = AsyncMock()
    repository.find_all.side_effect = RuntimeError("timeout")
    repository.find_one.side_effect = RuntimeError("timeout")
    service = TaskService(repository, dispatcher)

    listing = await service.fetch_tasks()
    single = await service.fetch_task_by_id("t1")

    for result in (listing, single):
        assert result.code == 500
        assert result.details == "timeout"
