"""
Event records.

* ``EventsService`` - server side of the remote ``/events`` API (service.py).
* ``EventStore``    - client with remote-to-local-cache fallback (store.py).
* ``LocalCache``    - durable single-key cache backends (cache.py).

The ORM model is imported lazily by ``app.db.base.create_db_and_tables``.
"""
from __future__ import annotations

from .cache import JsonFileCache, LocalCache, RedisCache, get_local_cache
from .store import EventStore, StoreResult, get_event_store

__all__: list[str] = [
    "EventStore",
    "StoreResult",
    "get_event_store",
    "LocalCache",
    "JsonFileCache",
    "RedisCache",
    "get_local_cache",
]
