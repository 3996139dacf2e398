"""
Condition repository with TTL snapshot cache and fallback reference data.
"""

import asyncio
import time
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from pydantic import ValidationError

from symptolens.config import Settings, get_settings
from symptolens.core.logging import get_logger
from symptolens.core.metrics import CONDITION_LOADS_TOTAL, SKIPPED_CONDITIONS_TOTAL
from symptolens.schemas.conditions import MedicalCondition
from symptolens.services.condition_store import ConditionStore
from symptolens.services.default_conditions import default_conditions

logger = get_logger(__name__)

SOURCE_STORE = "store"
SOURCE_FALLBACK = "fallback"


class ConditionSnapshot:
    """
    Immutable view of the reference conditions for one cache epoch.

    Built completely before it is published, so readers never see a
    partially populated cache.
    """

    __slots__ = ("_conditions", "_by_name", "_source", "_loaded_at", "_loaded_monotonic")

    def __init__(
        self,
        conditions: Iterable[MedicalCondition],
        source: str,
        loaded_at: datetime,
        loaded_monotonic: float
    ):
        self._conditions = tuple(conditions)
        self._by_name = {c.key: c for c in self._conditions}
        self._source = source
        self._loaded_at = loaded_at
        self._loaded_monotonic = loaded_monotonic

    @property
    def conditions(self) -> tuple[MedicalCondition, ...]:
        return self._conditions

    @property
    def source(self) -> str:
        return self._source

    @property
    def loaded_at(self) -> datetime:
        return self._loaded_at

    @property
    def loaded_monotonic(self) -> float:
        return self._loaded_monotonic

    def get(self, name: Optional[str]) -> Optional[MedicalCondition]:
        """Case-insensitive lookup; None when unknown."""
        if not name:
            return None
        return self._by_name.get(name.strip().lower())

    def __len__(self) -> int:
        return len(self._conditions)

    def __iter__(self):
        return iter(self._conditions)


def parse_conditions(records: Iterable[Any]) -> list[MedicalCondition]:
    """
    Validate raw records, skipping malformed ones.

    Duplicate names keep the first record.
    """
    conditions: list[MedicalCondition] = []
    seen: set[str] = set()

    for index, record in enumerate(records):
        try:
            condition = MedicalCondition.model_validate(record)
        except ValidationError as e:
            SKIPPED_CONDITIONS_TOTAL.inc()
            name = record.get("name") if isinstance(record, dict) else None
            logger.warning(
                f"Skipping malformed condition record: {e.error_count()} validation errors",
                extra={"index": index, "condition": name}
            )
            continue

        if condition.key in seen:
            logger.warning(
                f"Skipping duplicate condition: {condition.name}",
                extra={"index": index}
            )
            continue

        seen.add(condition.key)
        conditions.append(condition)

    return conditions


class ConditionRepository:
    """
    Owns the reference condition set.

    Loads lazily from a condition store, falls back to the built-in
    conditions when the store is unavailable, and reloads after the cache
    TTL expires. Each load builds a new ConditionSnapshot and swaps it in.
    """

    def __init__(
        self,
        store: Optional[ConditionStore] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self._store = store
        self._settings = settings or get_settings()
        self._clock = clock
        self._snapshot: Optional[ConditionSnapshot] = None
        self._stale = False
        self._lock = asyncio.Lock()
        self._load_count = 0

    @property
    def ttl(self) -> float:
        return float(self._settings.CONDITION_CACHE_TTL)

    @property
    def load_count(self) -> int:
        """Number of completed loads."""
        return self._load_count

    def _is_fresh(self, snapshot: ConditionSnapshot) -> bool:
        if self._stale:
            return False
        return self._clock() - snapshot.loaded_monotonic < self.ttl

    async def snapshot(self) -> ConditionSnapshot:
        """
        Get the current snapshot, loading or reloading when needed.

        While a reload is in flight, readers holding an older snapshot are
        served that snapshot instead of waiting.
        """
        current = self._snapshot
        if current is not None and self._is_fresh(current):
            return current

        if current is not None and self._lock.locked():
            logger.debug("Reload in progress; serving stale conditions")
            return current

        async with self._lock:
            # Another reader may have finished a reload while we waited
            current = self._snapshot
            if current is not None and self._is_fresh(current):
                return current
            return await self._load_locked()

    async def load(self) -> ConditionSnapshot:
        """Load the reference conditions now, replacing the current snapshot."""
        async with self._lock:
            return await self._load_locked()

    async def reload(self) -> ConditionSnapshot:
        """Invalidate and load again."""
        self.invalidate()
        return await self.load()

    def invalidate(self) -> None:
        """Mark the current snapshot stale; the next access reloads."""
        self._stale = True

    async def get_all(self) -> list[MedicalCondition]:
        """Get all reference conditions in repository order."""
        snapshot = await self.snapshot()
        return list(snapshot.conditions)

    async def get_by_name(self, name: Optional[str]) -> Optional[MedicalCondition]:
        """Case-insensitive lookup; None when the condition is unknown."""
        snapshot = await self.snapshot()
        return snapshot.get(name)

    async def _load_locked(self) -> ConditionSnapshot:
        conditions = await self._fetch_from_store()
        source = SOURCE_STORE

        if not conditions:
            conditions = default_conditions()
            source = SOURCE_FALLBACK

        snapshot = ConditionSnapshot(
            conditions,
            source=source,
            loaded_at=datetime.utcnow(),
            loaded_monotonic=self._clock()
        )
        self._snapshot = snapshot
        self._stale = False
        self._load_count += 1
        CONDITION_LOADS_TOTAL.labels(source=source).inc()

        logger.info(
            f"Loaded {len(snapshot)} reference conditions",
            extra={"source": source, "ttl": self.ttl}
        )
        return snapshot

    async def _fetch_from_store(self) -> list[MedicalCondition]:
        """Read and validate store records; empty list means fall back."""
        if self._store is None:
            logger.info("No condition store configured; using built-in conditions")
            return []

        settings = self._settings
        attempts = max(1, settings.CONDITION_STORE_RETRIES + 1)

        for attempt in range(1, attempts + 1):
            try:
                records = await asyncio.wait_for(
                    self._store.fetch_conditions(),
                    timeout=settings.CONDITION_STORE_TIMEOUT
                )
            except asyncio.TimeoutError:
                logger.warning(
                    f"Condition store timed out after {settings.CONDITION_STORE_TIMEOUT}s",
                    extra={"store": self._store.name, "attempt": attempt}
                )
                continue
            except Exception as e:
                logger.warning(
                    f"Condition store unavailable: {e}",
                    extra={"store": self._store.name, "attempt": attempt}
                )
                continue

            if not isinstance(records, list):
                logger.warning(
                    f"Condition store returned {type(records).__name__} instead of a list",
                    extra={"store": self._store.name, "attempt": attempt}
                )
                continue

            conditions = parse_conditions(records)
            if not conditions:
                logger.warning(
                    "Condition store returned no usable conditions; using built-in conditions",
                    extra={"store": self._store.name, "records": len(records)}
                )
            return conditions

        logger.warning(
            f"Condition store failed {attempts} times; using built-in conditions",
            extra={"store": self._store.name}
        )
        return []

    def status(self) -> dict[str, Any]:
        """Get repository status."""
        snapshot = self._snapshot
        if snapshot is None:
            return {
                "loaded": False,
                "source": None,
                "total_conditions": 0,
                "loaded_at": None,
                "expires_in_seconds": None
            }

        expires_in = 0.0 if self._stale else max(
            0.0, self.ttl - (self._clock() - snapshot.loaded_monotonic)
        )
        return {
            "loaded": True,
            "source": snapshot.source,
            "total_conditions": len(snapshot),
            "loaded_at": snapshot.loaded_at,
            "expires_in_seconds": round(expires_in, 1)
        }

    async def close(self) -> None:
        """Release the underlying store."""
        if self._store is not None:
            await self._store.close()
