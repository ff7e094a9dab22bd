"""SqlAlchemyRepository — the Repository port over SQLite.

Tests cover:
    - Absence is None for find_one/update/delete, [] for find_all
    - Filters are field equality; unknown fields raise
    - Joins embed related rows; sort orders both ways
    - Unique constraint violation surfaces as ConflictError
"""

import pytest

from taskflow.core.domain_types import EntityKind
from taskflow.core.errors import ConflictError


def _task_fields(project_id: str, description: str, **extra) -> dict:
    fields = {
        "description": description,
        "status": "in-progress",
        "due_date": "2030-01-01T00:00:00.000Z",
        "project_id": project_id,
    }
    fields.update(extra)
    return fields


async def test_find_one_absent_returns_none(repository):
    assert await repository.find_one(EntityKind.TASK, {"id": "nope"}) is None


async def test_find_all_without_matches_returns_empty_list(repository):
    assert await repository.find_all(EntityKind.TASK, {"status": "completed"}) == []


async def test_create_assigns_id_and_timestamps(repository, project):
    task = await repository.create(EntityKind.TASK, _task_fields(project["id"], "a"))

    assert len(task["id"]) == 36
    assert isinstance(task["created_at"], str)
    assert task["assigned_to_id"] is None


async def test_duplicate_description_raises_conflict(repository, project):
    await repository.create(EntityKind.TASK, _task_fields(project["id"], "same"))

    with pytest.raises(ConflictError):
        await repository.create(EntityKind.TASK, _task_fields(project["id"], "same"))


async def test_update_returns_new_state(repository, project):
    task = await repository.create(EntityKind.TASK, _task_fields(project["id"], "a"))

    updated = await repository.update(
        EntityKind.TASK, task["id"], {"status": "completed"},
    )

    assert updated["status"] == "completed"
    assert updated["description"] == "a"


async def test_update_and_delete_missing_return_none(repository):
    assert await repository.update(EntityKind.TASK, "nope", {"status": "x"}) is None
    assert await repository.delete(EntityKind.TASK, "nope") is None


async def test_delete_returns_removed_entity(repository, project):
    task = await repository.create(EntityKind.TASK, _task_fields(project["id"], "a"))

    deleted = await repository.delete(EntityKind.TASK, task["id"])

    assert deleted["description"] == "a"
    assert await repository.find_one(EntityKind.TASK, {"id": task["id"]}) is None


async def test_joins_embed_related_entities(repository, project, user):
    await repository.create(
        EntityKind.TASK,
        _task_fields(project["id"], "a", assigned_to_id=user["id"]),
    )

    task = await repository.find_one(
        EntityKind.TASK, {"description": "a"}, joins=("project", "assigned_to"),
    )

    assert task["project"]["name"] == "Website relaunch"
    assert task["assigned_to"]["email"] == "ada@example.com"


async def test_sort_by_field(repository, project):
    for description in ("b", "c", "a"):
        await repository.create(
            EntityKind.TASK, _task_fields(project["id"], description),
        )

    ascending = await repository.find_all(
        EntityKind.TASK, sort=("description", "asc"),
    )
    descending = await repository.find_all(
        EntityKind.TASK, sort=("description", "desc"),
    )

    assert [t["description"] for t in ascending] == ["a", "b", "c"]
    assert [t["description"] for t in descending] == ["c", "b", "a"]


async def test_unknown_filter_field_raises(repository):
    with pytest.raises(ValueError):
        await repository.find_all(EntityKind.TASK, {"colour": "red"})
