# app/core/events/service.py

"""Service layer behind the remote ``/events`` API."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import format_timestamp, utcnow
from app.core.errors import NotFoundError
from .models import EventRecordModel
from .schemas import EventRecord, user_fields

log = logging.getLogger(__name__)


def to_record(model: EventRecordModel) -> EventRecord:
    return {
        "id": model.id,
        **model.fields,
        "createdAt": format_timestamp(model.created_at),
        "updatedAt": format_timestamp(model.updated_at),
    }


class EventsService:
    """
    Async CRUD over stored event records.
    Receives its AsyncSession through dependency injection.
    """

    def __init__(self, db_session: AsyncSession) -> None:
        self.db: AsyncSession = db_session

    async def list_events(self) -> List[EventRecord]:
        """All records, newest first."""
        stmt = select(EventRecordModel).order_by(EventRecordModel.created_at.desc())
        rows = (await self.db.execute(stmt)).scalars().all()
        log.debug("Listing %d events", len(rows))
        return [to_record(row) for row in rows]

    async def get_event(self, event_id: str) -> EventRecord:
        return to_record(await self._get_model(event_id))

    async def create_event(self, data: Mapping[str, Any]) -> EventRecord:
        now = utcnow()
        model = EventRecordModel(fields=user_fields(data), created_at=now, updated_at=now)
        self.db.add(model)
        await self.db.flush()
        await self.db.refresh(model)
        log.info("Created event id=%s", model.id)
        return to_record(model)

    async def update_event(self, event_id: str, updates: Mapping[str, Any]) -> EventRecord:
        """Merge ``updates`` into the stored fields and refresh ``updatedAt``."""
        model = await self._get_model(event_id)
        # Reassign so the JSON column is flagged dirty.
        model.fields = {**model.fields, **user_fields(updates)}
        model.updated_at = utcnow()
        await self.db.flush()
        log.info("Updated event id=%s", event_id)
        return to_record(model)

    async def delete_event(self, event_id: str) -> None:
        model = await self._get_model(event_id)
        await self.db.delete(model)
        await self.db.flush()
        log.info("Deleted event id=%s", event_id)

    async def _get_model(self, event_id: str) -> EventRecordModel:
        model = await self.db.get(EventRecordModel, event_id)
        if model is None:
            log.warning("Event id %s not found", event_id)
            raise NotFoundError(f"Event {event_id} not found")
        return model


__all__ = ["EventsService"]
