"""
Tests for condition store adapters.
"""

import json

import httpx
import pytest

from symptolens.config import Settings
from symptolens.services.condition_store import (
    ConditionStoreError,
    HttpConditionStore,
    InMemoryConditionStore,
    JsonFileConditionStore,
    RedisConditionStore,
    build_condition_store,
)


class FakeCache:
    def __init__(self, value=None, error: Exception | None = None):
        self.value = value
        self.error = error

    async def get_raw(self, key: str):
        if self.error:
            raise self.error
        return self.value


async def test_in_memory_store(sample_records):
    store = InMemoryConditionStore(sample_records)

    assert await store.fetch_conditions() == sample_records


async def test_file_store_reads_envelope(tmp_path, sample_records):
    path = tmp_path / "conditions.json"
    path.write_text(json.dumps({"conditions": sample_records}), encoding="utf-8")

    records = await JsonFileConditionStore(path).fetch_conditions()

    assert len(records) == 3


async def test_file_store_missing_file(tmp_path):
    store = JsonFileConditionStore(tmp_path / "missing.json")

    with pytest.raises(ConditionStoreError):
        await store.fetch_conditions()


async def test_file_store_invalid_json(tmp_path):
    path = tmp_path / "conditions.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConditionStoreError):
        await JsonFileConditionStore(path).fetch_conditions()


async def test_http_store_fetches_list(sample_records):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=sample_records))
    async with httpx.AsyncClient(transport=transport) as client:
        store = HttpConditionStore("http://reference.test/conditions", client=client)
        records = await store.fetch_conditions()

    assert [r["name"] for r in records] == ["Common Cold", "Influenza", "Contact Dermatitis"]


async def test_http_store_error_status():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    async with httpx.AsyncClient(transport=transport) as client:
        store = HttpConditionStore("http://reference.test/conditions", client=client)
        with pytest.raises(ConditionStoreError):
            await store.fetch_conditions()


async def test_http_store_unexpected_shape():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"items": []}))
    async with httpx.AsyncClient(transport=transport) as client:
        store = HttpConditionStore("http://reference.test/conditions", client=client)
        with pytest.raises(ConditionStoreError):
            await store.fetch_conditions()


async def test_redis_store_reads_json(sample_records):
    store = RedisConditionStore(FakeCache(json.dumps(sample_records)), "symptolens:conditions")

    records = await store.fetch_conditions()

    assert len(records) == 3


async def test_redis_store_missing_key():
    store = RedisConditionStore(FakeCache(None), "symptolens:conditions")

    with pytest.raises(ConditionStoreError):
        await store.fetch_conditions()


async def test_redis_store_disconnected():
    store = RedisConditionStore(FakeCache(error=ConnectionError("Redis not connected")), "k")

    with pytest.raises(ConditionStoreError):
        await store.fetch_conditions()


def test_build_condition_store_selection(tmp_path):
    assert build_condition_store(Settings(CONDITION_STORE_BACKEND="none")) is None

    file_store = build_condition_store(
        Settings(CONDITION_STORE_BACKEND="file", CONDITION_STORE_PATH=str(tmp_path / "c.json"))
    )
    assert isinstance(file_store, JsonFileConditionStore)

    http_store = build_condition_store(
        Settings(CONDITION_STORE_BACKEND="http", CONDITION_STORE_URL="http://reference.test")
    )
    assert isinstance(http_store, HttpConditionStore)

    redis_store = build_condition_store(Settings(CONDITION_STORE_BACKEND="redis"), FakeCache())
    assert isinstance(redis_store, RedisConditionStore)


def test_build_condition_store_misconfigured():
    assert build_condition_store(Settings(CONDITION_STORE_BACKEND="http")) is None


async def test_file_store_passes_malformed_records_through(tmp_path, sample_records):
    path = tmp_path / "conditions.json"
    path.write_text(json.dumps(["junk", *sample_records]), encoding="utf-8")

    records = await JsonFileConditionStore(path).fetch_conditions()

    assert records[0] == "junk"
    assert len(records) == 4
