"""Stored Notification Dispatcher — persists notifications through the Repository port.

Invariants:
    - Returns 201 with the stored notification on success
    - Returns 404 when the recipient user does not exist
    - Never raises: store failures become a 500 envelope

Design Decisions:
    - Implements the NotificationDispatcher port on top of the same Repository
      port TaskService uses: one storage adapter, two collaborators
"""

import logging

from taskflow.core.domain_types import EntityKind, UserId
from taskflow.core.envelope import Envelope
from taskflow.core.errors import (
    ErrorContext, InternalError, ResourceNotFoundError, TaskflowError,
)
from taskflow.core.repository_protocols import Repository

logger = logging.getLogger(__name__)


class StoredNotificationDispatcher:
    """Delivers a notification by storing it for the recipient."""

    def __init__(self, repository: Repository):
        self._repository = repository

    async def create_notification(
        self, message: str, recipient_id: UserId,
    ) -> Envelope:
        try:
            user = await self._repository.find_one(
                EntityKind.USER, {"id": recipient_id},
            )
            if user is None:
                raise ResourceNotFoundError(
                    "User", recipient_id, message="Error creating notification",
                    context=ErrorContext(user_id=recipient_id),
                )
            notification = await self._repository.create(
                EntityKind.NOTIFICATION,
                {"message": message, "recipient_id": recipient_id},
            )
        except TaskflowError as e:
            logger.warning(
                f"Notification not stored: {e.message}",
                extra={"recipient_id": recipient_id, "error_code": e.code},
            )
            return e.to_envelope()
        except Exception as e:
            logger.error(
                f"Notification dispatch failed: {e}",
                extra={"recipient_id": recipient_id}, exc_info=True,
            )
            return InternalError(str(e)).to_envelope()

        logger.info(
            "Notification stored", extra={"recipient_id": recipient_id},
        )
        return Envelope(
            code=201,
            message="Notification created successfully",
            details=notification,
        )
