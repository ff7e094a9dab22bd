"""Boundary Protocols — contracts between the task lifecycle core and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store and dispatch IO accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Entities cross the boundary as plain dicts keyed by column name
    - Absence is None, distinct from an empty list

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - One generic Repository keyed by EntityKind instead of one per entity:
      the core only needs find/create/update/delete semantics
"""

from typing import Any, Mapping, Protocol, Sequence

from taskflow.core.domain_types import EntityKind, UserId
from taskflow.core.envelope import Envelope


class Repository(Protocol):
    """Persistence capability over Task/Project/User/Notification entities."""

    async def find_one(
        self, kind: EntityKind, filters: Mapping[str, Any],
        joins: Sequence[str] = (),
    ) -> dict | None: ...

    async def find_all(
        self, kind: EntityKind, filters: Mapping[str, Any] | None = None,
        joins: Sequence[str] = (), sort: tuple[str, str] | None = None,
    ) -> list[dict]: ...

    async def create(self, kind: EntityKind, fields: Mapping[str, Any]) -> dict: ...

    async def update(
        self, kind: EntityKind, entity_id: str, fields: Mapping[str, Any],
    ) -> dict | None: ...

    async def delete(self, kind: EntityKind, entity_id: str) -> dict | None: ...


class NotificationDispatcher(Protocol):
    """Delivers a message to a user; reports the outcome as an envelope."""

    async def create_notification(
        self, message: str, recipient_id: UserId,
    ) -> Envelope: ...
