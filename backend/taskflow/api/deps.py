"""Route Dependencies — builds the Repository and TaskService per request.

Invariants:
    - Adapters built from the db_manager singleton at request time, so tests
      can swap the manager or override these dependencies
    - Notification policy read from settings
"""

from fastapi import Depends
from fastapi.responses import JSONResponse

from taskflow.config import get_settings
from taskflow.core.envelope import Envelope
from taskflow.core.repository_protocols import Repository
from taskflow.infrastructure.database import DatabaseSessionManager, get_db_manager
from taskflow.infrastructure.sql_repository import SqlAlchemyRepository
from taskflow.services.notification_dispatcher import StoredNotificationDispatcher
from taskflow.services.task_service import TaskService


def get_repository(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> Repository:
    return SqlAlchemyRepository(db)


def get_task_service(
    repository: Repository = Depends(get_repository),
) -> TaskService:
    return TaskService(
        repository,
        StoredNotificationDispatcher(repository),
        notification_policy=get_settings().notification_failure_policy,
    )


def envelope_response(envelope: Envelope) -> JSONResponse:
    """Translate an envelope into an HTTP response with the same status."""
    return JSONResponse(status_code=envelope.code, content=envelope.to_dict())
