# app/core/events/cache.py
"""
Durable local cache for event records.

The whole collection (newest first) lives under one key as a JSON list.

* ``JsonFileCache`` - a JSON file on disk (default).
* ``RedisCache``    - one Redis string key.
* ``get_local_cache()`` - picks a backend from ``settings.LOCAL_CACHE_BACKEND``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, List, Optional

from redis import asyncio as aioredis

from app.config import settings
from .schemas import EventRecord

log = logging.getLogger(__name__)


class LocalCache(ABC):
    """Load/save the cached event list as one unit."""

    name: str

    @abstractmethod
    async def load(self) -> List[EventRecord]:
        """Return the cached records, or ``[]`` when nothing has been stored yet."""
        ...

    @abstractmethod
    async def save(self, events: List[EventRecord]) -> None:
        """Replace the cached records."""
        ...

    @staticmethod
    def _decode(raw: str | bytes | None) -> List[EventRecord]:
        if not raw:
            return []
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"Cached events must be a JSON list, got {type(data).__name__}")
        return data

    @staticmethod
    def _encode(events: List[EventRecord]) -> str:
        return json.dumps(events, ensure_ascii=False)


class JsonFileCache(LocalCache):
    name = "file"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    async def load(self) -> List[EventRecord]:
        raw = await asyncio.to_thread(self._read_file, self.path)
        return self._decode(raw)

    async def save(self, events: List[EventRecord]) -> None:
        body = self._encode(events)
        await asyncio.to_thread(self._write_file, self.path, body)
        log.debug("JsonFileCache: stored %d events in %s", len(events), self.path)

    @staticmethod
    def _read_file(path: Path) -> Optional[str]:
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _write_file(path: Path, body: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f"{path.name}.tmp")
        tmp_path.write_text(body, encoding="utf-8")
        os.replace(tmp_path, path)


class RedisCache(LocalCache):
    name = "redis"

    def __init__(self, client: aioredis.Redis, key: str) -> None:
        self.client = client
        self.key = key

    @classmethod
    def from_url(cls, url: str, key: str) -> "RedisCache":
        return cls(aioredis.Redis.from_url(url), key)

    async def load(self) -> List[EventRecord]:
        return self._decode(await self.client.get(self.key))

    async def save(self, events: List[EventRecord]) -> None:
        await self.client.set(self.key, self._encode(events))
        log.debug("RedisCache: stored %d events under %s", len(events), self.key)


_CACHE_FACTORIES: Dict[str, Callable[[], LocalCache]] = {
    "file": lambda: JsonFileCache(settings.LOCAL_CACHE_PATH),
    "redis": lambda: RedisCache.from_url(settings.REDIS_URL, settings.LOCAL_CACHE_KEY),
}


def get_local_cache(name: str | None = None) -> LocalCache:
    """
    Return a local cache backend.

    ``name`` is case-insensitive; defaults to ``settings.LOCAL_CACHE_BACKEND``.
    """
    backend_key = (name or settings.LOCAL_CACHE_BACKEND).lower()
    try:
        factory = _CACHE_FACTORIES[backend_key]
    except KeyError as exc:
        raise ValueError(f"Unknown local cache backend: {backend_key}") from exc
    return factory()


__all__: list[str] = ["LocalCache", "JsonFileCache", "RedisCache", "get_local_cache"]
