import pytest

from app.core.events.cache import JsonFileCache, RedisCache, get_local_cache


class FakeRedis:
    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value):
        self.store[key] = value.encode("utf-8")


@pytest.mark.asyncio
async def test_file_cache_missing_file_is_empty(tmp_path):
    cache = JsonFileCache(tmp_path / "nested" / "events.json")
    assert await cache.load() == []


@pytest.mark.asyncio
async def test_file_cache_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "events.json"
    events = [{"id": "2", "title": "नया कार्यक्रम"}, {"id": "1", "title": "Launch"}]

    await JsonFileCache(path).save(events)

    assert await JsonFileCache(path).load() == events
    assert "नया कार्यक्रम" in path.read_text(encoding="utf-8")
    assert not path.with_name("events.json.tmp").exists()


@pytest.mark.asyncio
async def test_file_cache_corrupt_content_propagates(tmp_path):
    path = tmp_path / "events.json"
    path.write_text('{"not": "a list"}', encoding="utf-8")

    with pytest.raises(ValueError):
        await JsonFileCache(path).load()


@pytest.mark.asyncio
async def test_redis_cache_single_key():
    client = FakeRedis()
    cache = RedisCache(client, "smart_event_planner_events")

    assert await cache.load() == []
    await cache.save([{"id": "1"}])

    assert list(client.store) == ["smart_event_planner_events"]
    assert await cache.load() == [{"id": "1"}]


def test_get_local_cache_from_settings():
    cache = get_local_cache()
    assert isinstance(cache, JsonFileCache)
    assert cache.name == "file"


def test_get_local_cache_redis_by_name():
    cache = get_local_cache("REDIS")
    assert isinstance(cache, RedisCache)


def test_get_local_cache_unknown():
    with pytest.raises(ValueError, match="Unknown local cache backend"):
        get_local_cache("memcached")
