"""
Tests for the condition repository.
"""

import asyncio
import logging

import pytest
from prometheus_client import REGISTRY

from symptolens.config import Settings
from symptolens.services.condition_repository import (
    SOURCE_FALLBACK,
    SOURCE_STORE,
    ConditionRepository,
    parse_conditions,
)
from symptolens.services.condition_store import ConditionStore, ConditionStoreError, InMemoryConditionStore
from symptolens.services.default_conditions import DEFAULT_CONDITION_RECORDS


class FailingStore(ConditionStore):
    name = "failing"

    def __init__(self):
        self.calls = 0

    async def fetch_conditions(self) -> list[dict]:
        self.calls += 1
        raise ConditionStoreError("store offline")


class SlowStore(ConditionStore):
    name = "slow"

    def __init__(self, records: list[dict], delay: float):
        self.records = records
        self.delay = delay
        self.calls = 0

    async def fetch_conditions(self) -> list[dict]:
        self.calls += 1
        await asyncio.sleep(self.delay)
        return list(self.records)


class FlakyStore(ConditionStore):
    """Fails on the first call, then serves records."""

    name = "flaky"

    def __init__(self, records: list[dict]):
        self.records = records
        self.calls = 0

    async def fetch_conditions(self) -> list[dict]:
        self.calls += 1
        if self.calls == 1:
            raise ConditionStoreError("transient")
        return list(self.records)


async def test_loads_from_store(repository: ConditionRepository):
    snapshot = await repository.snapshot()

    assert snapshot.source == SOURCE_STORE
    assert [c.name for c in snapshot] == ["Common Cold", "Influenza", "Contact Dermatitis"]


async def test_falls_back_when_store_fails(settings: Settings, fake_clock):
    store = FailingStore()
    repository = ConditionRepository(store, settings, clock=fake_clock)

    conditions = await repository.get_all()

    assert repository.status()["source"] == SOURCE_FALLBACK
    assert len(conditions) == len(DEFAULT_CONDITION_RECORDS)
    # One attempt plus one retry
    assert store.calls == 2


async def test_falls_back_without_store(settings: Settings):
    repository = ConditionRepository(None, settings)

    snapshot = await repository.snapshot()

    assert snapshot.source == SOURCE_FALLBACK
    assert snapshot.get("influenza") is not None


async def test_store_timeout_falls_back(sample_records):
    settings = Settings(CONDITION_STORE_TIMEOUT=0.01, CONDITION_STORE_RETRIES=0)
    store = SlowStore(sample_records, delay=1.0)
    repository = ConditionRepository(store, settings)

    snapshot = await repository.snapshot()

    assert snapshot.source == SOURCE_FALLBACK
    assert store.calls == 1


async def test_retry_recovers_from_transient_failure(sample_records, settings: Settings):
    store = FlakyStore(sample_records)
    repository = ConditionRepository(store, settings)

    snapshot = await repository.snapshot()

    assert snapshot.source == SOURCE_STORE
    assert store.calls == 2


async def test_empty_store_falls_back(settings: Settings):
    repository = ConditionRepository(InMemoryConditionStore([]), settings)

    snapshot = await repository.snapshot()

    assert snapshot.source == SOURCE_FALLBACK


async def test_malformed_records_skipped(sample_records, settings: Settings):
    records = sample_records + [
        {"name": "No Description"},
        {"name": "Bad Urgency", "description": "x", "symptoms": ["a"], "urgency": "extreme"},
        {"name": "common cold", "description": "duplicate", "symptoms": ["cough"]},
    ]
    repository = ConditionRepository(InMemoryConditionStore(records), settings)

    conditions = await repository.get_all()

    assert [c.name for c in conditions] == ["Common Cold", "Influenza", "Contact Dermatitis"]


def test_parse_conditions_accepts_camel_case(sample_records):
    conditions = parse_conditions(sample_records)

    influenza = conditions[1]
    assert influenza.body_locations == ["general", "chest"]
    assert influenza.symptom_relationships.commonly_together == ["fever", "body aches", "chills"]
    assert conditions[2].visual_cues == ["redness", "blisters"]
    assert conditions[2].recommendation == "Avoid the irritant. Use a cool compress."


async def test_cached_until_ttl_expires(repository: ConditionRepository, fake_clock, settings: Settings):
    await repository.snapshot()
    await repository.snapshot()
    assert repository.load_count == 1

    fake_clock.advance(settings.CONDITION_CACHE_TTL - 1)
    await repository.snapshot()
    assert repository.load_count == 1

    fake_clock.advance(2)
    await repository.snapshot()
    assert repository.load_count == 2


async def test_concurrent_first_access_loads_once(sample_records, settings: Settings):
    store = SlowStore(sample_records, delay=0.05)
    repository = ConditionRepository(store, settings)

    snapshots = await asyncio.gather(*(repository.snapshot() for _ in range(10)))

    assert store.calls == 1
    assert all(s is snapshots[0] for s in snapshots)


async def test_stale_snapshot_served_during_reload(sample_records, settings: Settings, fake_clock):
    store = SlowStore(sample_records, delay=0.05)
    repository = ConditionRepository(store, settings, clock=fake_clock)
    first = await repository.snapshot()

    fake_clock.advance(settings.CONDITION_CACHE_TTL + 1)
    reloading = asyncio.create_task(repository.snapshot())
    await asyncio.sleep(0)

    during = await repository.snapshot()
    after = await reloading

    assert during is first
    assert after is not first
    assert store.calls == 2


async def test_invalidate_forces_reload(repository: ConditionRepository):
    await repository.snapshot()

    repository.invalidate()
    assert repository.status()["expires_in_seconds"] == 0.0

    await repository.snapshot()
    assert repository.load_count == 2


async def test_reload(repository: ConditionRepository):
    await repository.snapshot()

    snapshot = await repository.reload()

    assert snapshot.source == SOURCE_STORE
    assert repository.load_count == 2


async def test_get_by_name_case_insensitive(repository: ConditionRepository):
    assert (await repository.get_by_name("common cold")).name == "Common Cold"
    assert (await repository.get_by_name("INFLUENZA")).name == "Influenza"
    assert await repository.get_by_name("Unknown Condition") is None
    assert await repository.get_by_name("") is None
    assert await repository.get_by_name(None) is None


def test_status_before_load(repository: ConditionRepository):
    status = repository.status()

    assert status["loaded"] is False
    assert status["total_conditions"] == 0


class NonListStore(ConditionStore):
    name = "broken"

    def __init__(self):
        self.calls = 0

    async def fetch_conditions(self):
        self.calls += 1
        return None


async def test_non_object_records_skipped_and_logged(sample_records, settings: Settings, caplog):
    before = REGISTRY.get_sample_value("symptolens_skipped_conditions_total") or 0.0
    repository = ConditionRepository(InMemoryConditionStore(["junk", *sample_records, 42]), settings)

    with caplog.at_level(logging.WARNING, logger="symptolens.services.condition_repository"):
        snapshot = await repository.snapshot()

    after = REGISTRY.get_sample_value("symptolens_skipped_conditions_total")
    assert snapshot.source == SOURCE_STORE
    assert len(snapshot) == 3
    assert after - before == 2
    assert sum("Skipping malformed condition record" in r.getMessage() for r in caplog.records) == 2


async def test_non_list_store_result_falls_back(settings: Settings):
    store = NonListStore()
    repository = ConditionRepository(store, settings)

    snapshot = await repository.snapshot()

    assert snapshot.source == SOURCE_FALLBACK
    assert store.calls == 2
