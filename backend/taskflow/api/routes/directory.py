"""Project & User Routes — thin create/list/get over the Repository port.

Invariants:
    - No business rules: rows written as validated by the schemas
    - Unknown ids answer 404 envelopes; store errors reach the global handlers

Design Decisions:
    - Repository used directly (no service class): these entities only exist
      so tasks have something to reference
"""

import logging

from fastapi import APIRouter, Depends

from taskflow.api.deps import envelope_response, get_repository
from taskflow.core.domain_types import EntityKind
from taskflow.core.envelope import Envelope
from taskflow.core.errors import ResourceNotFoundError
from taskflow.core.repository_protocols import Repository
from taskflow.schemas.directory import ProjectCreate, UserCreate

logger = logging.getLogger(__name__)
projects_router = APIRouter(prefix="/api/v1/projects", tags=["projects"])
users_router = APIRouter(prefix="/api/v1/users", tags=["users"])


async def _get_or_404(
    repository: Repository, kind: EntityKind, label: str, entity_id: str,
) -> Envelope:
    entity = await repository.find_one(kind, {"id": entity_id})
    if entity is None:
        return ResourceNotFoundError(
            label, entity_id, message=f"{label} not found!",
        ).to_envelope()
    return Envelope(200, f"{label} found!", entity)


# ─── Projects ────────────────────────────────────────────────────

@projects_router.post("")
async def create_project(
    body: ProjectCreate, repository: Repository = Depends(get_repository),
):
    project = await repository.create(EntityKind.PROJECT, body.model_dump())
    logger.info("Project created", extra={"project_id": project["id"]})
    return envelope_response(
        Envelope(201, "Project created successfully", project),
    )


@projects_router.get("")
async def list_projects(repository: Repository = Depends(get_repository)):
    projects = await repository.find_all(
        EntityKind.PROJECT, sort=("created_at", "desc"),
    )
    return envelope_response(Envelope(200, "Projects found!", projects))


@projects_router.get("/{project_id}")
async def get_project(
    project_id: str, repository: Repository = Depends(get_repository),
):
    return envelope_response(
        await _get_or_404(repository, EntityKind.PROJECT, "Project", project_id),
    )


# ─── Users ───────────────────────────────────────────────────────

@users_router.post("")
async def create_user(
    body: UserCreate, repository: Repository = Depends(get_repository),
):
    user = await repository.create(EntityKind.USER, body.model_dump())
    return envelope_response(Envelope(201, "User created successfully", user))


@users_router.get("/{user_id}")
async def get_user(
    user_id: str, repository: Repository = Depends(get_repository),
):
    return envelope_response(
        await _get_or_404(repository, EntityKind.USER, "User", user_id),
    )


@users_router.get("/{user_id}/notifications")
async def list_user_notifications(
    user_id: str, repository: Repository = Depends(get_repository),
):
    """Notifications stored for a user by the dispatcher, newest first."""
    notifications = await repository.find_all(
        EntityKind.NOTIFICATION, {"recipient_id": user_id},
        sort=("created_at", "desc"),
    )
    return envelope_response(Envelope(200, "Notifications found!", notifications))
