# app/api/v1/events.py

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.core.events.service import EventsService
from app.db.base import get_async_db_session

router = APIRouter(prefix="/api/events", tags=["events"])
log = logging.getLogger(__name__)


def get_events_service(db: AsyncSession = Depends(get_async_db_session)) -> EventsService:
    return EventsService(db)


def _not_found(exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "message": "Event not found", "error": str(exc)},
    )


@router.get("", summary="List events, newest first")
async def list_events(service: EventsService = Depends(get_events_service)):
    return {"success": True, "data": await service.list_events()}


@router.get("/{event_id}", summary="Get one event")
async def get_event(event_id: str, service: EventsService = Depends(get_events_service)):
    try:
        return {"success": True, "data": await service.get_event(event_id)}
    except NotFoundError as e:
        return _not_found(e)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create an event")
async def create_event(
    payload: Dict[str, Any] = Body(...),
    service: EventsService = Depends(get_events_service),
):
    return {"success": True, "data": await service.create_event(payload)}


@router.put("/{event_id}", summary="Update an event")
async def update_event(
    event_id: str,
    payload: Dict[str, Any] = Body(...),
    service: EventsService = Depends(get_events_service),
):
    try:
        return {"success": True, "data": await service.update_event(event_id, payload)}
    except NotFoundError as e:
        return _not_found(e)


@router.delete("/{event_id}", summary="Delete an event")
async def delete_event(event_id: str, service: EventsService = Depends(get_events_service)):
    try:
        await service.delete_event(event_id)
    except NotFoundError as e:
        return _not_found(e)
    return {"success": True, "message": "Event deleted"}
