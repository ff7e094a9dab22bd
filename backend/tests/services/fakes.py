"""Test doubles for the NotificationDispatcher and Repository ports.

RecordingDispatcher:
    - records every (message, recipient_id) call
    - answers with a configurable envelope, or raises a configured exception

StaleCheckRepository:
    - wraps a real repository; task-description lookups wait until every
      concurrent caller has looked, then report "no duplicate"
    - serializes writes the way a single-writer store does
"""

import asyncio

from taskflow.core.domain_types import EntityKind
from taskflow.core.envelope import Envelope


class RecordingDispatcher:
    def __init__(self):
        self.calls: list[tuple[str, str]] = []
        self.response = Envelope(201, "Notification created successfully", {})
        self.error: Exception | None = None

    async def create_notification(self, message, recipient_id):
        self.calls.append((message, recipient_id))
        if self.error is not None:
            raise self.error
        return self.response


class StaleCheckRepository:
    def __init__(self, inner, parties: int):
        self._inner = inner
        self._barrier = asyncio.Barrier(parties)
        self._write_lock = asyncio.Lock()

    async def find_one(self, kind, filters, joins=()):
        if kind is EntityKind.TASK and "description" in filters:
            await self._barrier.wait()
            return None
        return await self._inner.find_one(kind, filters, joins)

    async def find_all(self, kind, filters=None, joins=(), sort=None):
        return await self._inner.find_all(kind, filters, joins, sort)

    async def create(self, kind, fields):
        async with self._write_lock:
            return await self._inner.create(kind, fields)

    async def update(self, kind, entity_id, fields):
        async with self._write_lock:
            return await self._inner.update(kind, entity_id, fields)

    async def delete(self, kind, entity_id):
        async with self._write_lock:
            return await self._inner.delete(kind, entity_id)
