# app/core/events/store.py
"""
Event CRUD with transparent fallback from the remote store to the local cache.

Every top-level operation starts with a short liveness probe. The probe's
answer is a local value for that call only; nothing about liveness is
remembered between calls, so the store heals itself as soon as the remote
comes back. Writes served remotely are mirrored into the local cache, so the
cache always holds the latest known state.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Literal, Mapping, Optional, TypeVar

import httpx

from app.config import settings
from app.core.clock import timestamp_now
from app.core.errors import NotFoundError, StoreUnavailableError
from .cache import LocalCache, get_local_cache
from .schemas import EventRecord, user_fields

log = logging.getLogger(__name__)

T = TypeVar("T")
Source = Literal["remote", "local"]


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Outcome of one store operation and the backend that served it."""
    value: T
    source: Source


class EventStore:
    def __init__(
        self,
        base_url: str,
        cache: LocalCache,
        *,
        probe_timeout: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], str] = timestamp_now,
    ) -> None:
        self.cache = cache
        self.probe_timeout = probe_timeout
        self._clock = clock
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), transport=transport)
        # Serialises the cache read-modify-write of concurrent operations.
        self._lock = asyncio.Lock()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "EventStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ #
    #                              remote                                 #
    # ------------------------------------------------------------------ #

    async def probe(self) -> bool:
        """Lightweight read against the remote store with a short timeout."""
        try:
            response = await self._client.get("/events", timeout=self.probe_timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            log.info("Remote event store unavailable (%s); using local cache", type(e).__name__)
            return False
        return True

    async def _request(self, method: str, path: str, payload: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Call the remote store and return the ``data`` member of its reply.

        Raises:
            NotFoundError: the remote answered 404.
            StoreUnavailableError: transport failure, any other error status
                or an unreadable body.
        """
        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.HTTPError as exc:
            raise StoreUnavailableError(f"{method} {path} failed: {exc}") from exc
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(f"{method} {path}: not found")
        if response.is_error:
            raise StoreUnavailableError(f"{method} {path} returned {response.status_code}")
        try:
            body = response.json()
        except ValueError as exc:
            raise StoreUnavailableError(f"{method} {path} returned invalid JSON") from exc
        if not isinstance(body, dict):
            raise StoreUnavailableError(f"{method} {path} returned an unexpected body")
        return body.get("data")

    # ------------------------------------------------------------------ #
    #                               reads                                 #
    # ------------------------------------------------------------------ #

    async def get_all_events(self) -> StoreResult[List[EventRecord]]:
        async with self._lock:
            if await self.probe():
                try:
                    events = await self._request("GET", "/events")
                    if not isinstance(events, list):
                        raise StoreUnavailableError("GET /events did not return a list")
                except (StoreUnavailableError, NotFoundError) as e:
                    log.warning("Remote read failed after live probe, reading local cache: %s", e)
                else:
                    await self.cache.save(events)
                    return StoreResult(events, "remote")
            return StoreResult(await self.cache.load(), "local")

    async def get_event_by_id(self, event_id: str) -> StoreResult[Optional[EventRecord]]:
        """Return the record, or ``None`` when no backend knows ``event_id``."""
        async with self._lock:
            if await self.probe():
                try:
                    record = _expect_record(await self._request("GET", f"/events/{event_id}"))
                except NotFoundError:
                    return StoreResult(None, "remote")
                except StoreUnavailableError as e:
                    log.warning("Remote read of %s failed, reading local cache: %s", event_id, e)
                else:
                    events = await self.cache.load()
                    index = _index_of(events, event_id)
                    if index is not None:
                        events[index] = record
                        await self.cache.save(events)
                    return StoreResult(record, "remote")
            events = await self.cache.load()
            index = _index_of(events, event_id)
            return StoreResult(events[index] if index is not None else None, "local")

    # ------------------------------------------------------------------ #
    #                               writes                                #
    # ------------------------------------------------------------------ #

    async def create_event(self, data: Mapping[str, Any]) -> StoreResult[EventRecord]:
        payload = user_fields(data)
        async with self._lock:
            if await self.probe():
                try:
                    created = _expect_record(await self._request("POST", "/events", payload))
                except (StoreUnavailableError, NotFoundError) as e:
                    log.warning("Remote create failed, creating locally: %s", e)
                else:
                    events = [ev for ev in await self.cache.load() if ev.get("id") != created["id"]]
                    events.insert(0, created)
                    await self.cache.save(events)
                    return StoreResult(created, "remote")

            events = await self.cache.load()
            now = self._clock()
            record: EventRecord = {"id": _mint_id(events), **payload, "createdAt": now, "updatedAt": now}
            events.insert(0, record)
            await self.cache.save(events)
            log.info("Created event id=%s in local cache", record["id"])
            return StoreResult(record, "local")

    async def update_event(self, event_id: str, updates: Mapping[str, Any]) -> StoreResult[EventRecord]:
        """
        Raises:
            NotFoundError: no backend holds ``event_id``; the cache is left unchanged.
        """
        changes = user_fields(updates)
        async with self._lock:
            if await self.probe():
                try:
                    updated = _expect_record(await self._request("PUT", f"/events/{event_id}", changes))
                except StoreUnavailableError as e:
                    log.warning("Remote update of %s failed, updating locally: %s", event_id, e)
                else:
                    events = await self.cache.load()
                    index = _index_of(events, event_id)
                    if index is None:
                        events.insert(0, updated)
                    else:
                        events[index] = updated
                    await self.cache.save(events)
                    return StoreResult(updated, "remote")

            events = await self.cache.load()
            index = _index_of(events, event_id)
            if index is None:
                raise NotFoundError(f"Event {event_id} not found")
            events[index] = {**events[index], **changes, "updatedAt": self._clock()}
            await self.cache.save(events)
            return StoreResult(events[index], "local")

    async def delete_event(self, event_id: str) -> StoreResult[bool]:
        """
        Raises:
            NotFoundError: no backend holds ``event_id``; the cache is left unchanged.
        """
        async with self._lock:
            source: Source = "local"
            if await self.probe():
                try:
                    await self._request("DELETE", f"/events/{event_id}")
                    source = "remote"
                except StoreUnavailableError as e:
                    log.warning("Remote delete of %s failed, deleting locally: %s", event_id, e)

            events = await self.cache.load()
            remaining = [ev for ev in events if ev.get("id") != event_id]
            if source == "local" and len(remaining) == len(events):
                raise NotFoundError(f"Event {event_id} not found")
            await self.cache.save(remaining)
            return StoreResult(True, source)


def _expect_record(data: Any) -> EventRecord:
    if not isinstance(data, dict) or not data.get("id"):
        raise StoreUnavailableError("remote reply carried no event record")
    return data


def _index_of(events: List[EventRecord], event_id: str) -> Optional[int]:
    return next((i for i, ev in enumerate(events) if ev.get("id") == event_id), None)


def _mint_id(events: List[EventRecord]) -> str:
    """Millisecond timestamp, bumped until it clashes with no cached id."""
    taken = {ev.get("id") for ev in events}
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def get_event_store(transport: Optional[httpx.AsyncBaseTransport] = None) -> EventStore:
    return EventStore(
        settings.EVENTS_API_URL,
        get_local_cache(),
        probe_timeout=settings.EVENTS_PROBE_TIMEOUT,
        transport=transport,
    )


__all__ = ["EventStore", "StoreResult", "get_event_store"]
