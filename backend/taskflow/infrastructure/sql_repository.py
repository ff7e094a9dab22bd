"""SQL Repository — SQLAlchemy adapter for the Repository port.

Invariants:
    - Each call runs in its own session and commits before returning
      (no transaction spans two calls)
    - Entities returned as dicts keyed by column name; datetimes as ISO strings
    - Requested joins embedded as nested dicts under the relationship name
    - update/delete of a missing id return None; find_all never returns None

Design Decisions:
    - Session-per-call via DatabaseSessionManager.session(): rollback and
      exception mapping come from the manager
    - Joins loaded eagerly with selectinload: nothing lazy-loads after the
      session closes
"""

import logging
from datetime import datetime
from typing import Any, Mapping, Sequence

from sqlalchemy import inspect as sa_inspect, select
from sqlalchemy.orm import selectinload

from taskflow.core.domain_types import EntityKind
from taskflow.db.base import Base
from taskflow.infrastructure.database import DatabaseSessionManager
from taskflow.models import Notification, Project, Task, User

logger = logging.getLogger(__name__)

_MODELS: dict[EntityKind, type[Base]] = {
    EntityKind.TASK: Task,
    EntityKind.PROJECT: Project,
    EntityKind.USER: User,
    EntityKind.NOTIFICATION: Notification,
}


def _to_entity(obj: Base, joins: Sequence[str] = ()) -> dict:
    """Column values of obj as a dict, plus requested relationships."""
    entity: dict[str, Any] = {}
    for attr in sa_inspect(obj).mapper.column_attrs:
        value = getattr(obj, attr.key)
        entity[attr.key] = value.isoformat() if isinstance(value, datetime) else value
    for name in joins:
        related = getattr(obj, name)
        entity[name] = _to_entity(related) if related is not None else None
    return entity


def _column(model: type[Base], name: str):
    if name not in sa_inspect(model).columns:
        raise ValueError(f"{model.__name__} has no field '{name}'")
    return getattr(model, name)


class SqlAlchemyRepository:
    """Repository port over the Taskflow ORM models."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    def _select(
        self, kind: EntityKind, filters: Mapping[str, Any] | None,
        joins: Sequence[str],
    ):
        model = _MODELS[kind]
        stmt = select(model)
        for name, value in (filters or {}).items():
            stmt = stmt.where(_column(model, name) == value)
        for name in joins:
            stmt = stmt.options(selectinload(getattr(model, name)))
        return stmt

    async def find_one(
        self, kind: EntityKind, filters: Mapping[str, Any],
        joins: Sequence[str] = (),
    ) -> dict | None:
        async with self._db.session() as db:
            result = await db.execute(self._select(kind, filters, joins).limit(1))
            obj = result.scalars().first()
            return _to_entity(obj, joins) if obj is not None else None

    async def find_all(
        self, kind: EntityKind, filters: Mapping[str, Any] | None = None,
        joins: Sequence[str] = (), sort: tuple[str, str] | None = None,
    ) -> list[dict]:
        stmt = self._select(kind, filters, joins)
        if sort:
            field, direction = sort
            column = _column(_MODELS[kind], field)
            stmt = stmt.order_by(
                column.desc() if direction == "desc" else column.asc(),
            )
        async with self._db.session() as db:
            result = await db.execute(stmt)
            return [_to_entity(obj, joins) for obj in result.scalars().all()]

    async def create(self, kind: EntityKind, fields: Mapping[str, Any]) -> dict:
        model = _MODELS[kind]
        async with self._db.session() as db:
            obj = model(**fields)
            db.add(obj)
            await db.commit()
            await db.refresh(obj)
            logger.debug(f"Created {kind.value} {obj.id}")
            return _to_entity(obj)

    async def update(
        self, kind: EntityKind, entity_id: str, fields: Mapping[str, Any],
    ) -> dict | None:
        model = _MODELS[kind]
        async with self._db.session() as db:
            obj = await db.get(model, entity_id)
            if obj is None:
                return None
            for name, value in fields.items():
                _column(model, name)
                setattr(obj, name, value)
            await db.commit()
            await db.refresh(obj)
            return _to_entity(obj)

    async def delete(self, kind: EntityKind, entity_id: str) -> dict | None:
        model = _MODELS[kind]
        async with self._db.session() as db:
            obj = await db.get(model, entity_id)
            if obj is None:
                return None
            entity = _to_entity(obj)
            await db.delete(obj)
            await db.commit()
            return entity
