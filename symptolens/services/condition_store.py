"""
Condition store adapters.

A store hands raw condition records to the repository. Stores may be slow
or unavailable; every failure surfaces as ConditionStoreError so the
repository can fall back to its defaults.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import httpx

from symptolens.config import Settings, get_settings
from symptolens.core.cache import CacheService
from symptolens.core.logging import get_logger

logger = get_logger(__name__)


class ConditionStoreError(Exception):
    """Raised when a store cannot supply condition records."""


def _extract_records(payload: Any, source: str) -> list[Any]:
    """
    Accept a bare list or a {"conditions": [...]} envelope.

    Records are passed through unvalidated; the repository skips and logs
    malformed ones.
    """
    if isinstance(payload, dict):
        payload = payload.get("conditions")
    if not isinstance(payload, list):
        raise ConditionStoreError(f"{source} returned an unexpected payload shape")
    return list(payload)


class ConditionStore(ABC):
    """Source of raw condition records."""

    name: str = "store"

    @abstractmethod
    async def fetch_conditions(self) -> list[dict]:
        """
        Fetch all condition records.

        Raises:
            ConditionStoreError: If the store is unreachable or returns junk.
        """

    async def close(self) -> None:
        """Release any held resources."""


class InMemoryConditionStore(ConditionStore):
    """Store backed by records supplied at construction time."""

    name = "memory"

    def __init__(self, records: list[dict]):
        self._records = list(records)

    async def fetch_conditions(self) -> list[dict]:
        return list(self._records)


class JsonFileConditionStore(ConditionStore):
    """Store reading a JSON export from local disk."""

    name = "file"

    def __init__(self, path: str | Path):
        self._path = Path(path)

    async def fetch_conditions(self) -> list[dict]:
        # File reads block; keep them off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_sync)

    def _read_sync(self) -> list[dict]:
        try:
            with self._path.open(encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            raise ConditionStoreError(f"Could not read {self._path}: {e}") from e
        return _extract_records(payload, str(self._path))


class HttpConditionStore(ConditionStore):
    """Store fetching a JSON list of conditions from a reference-data service."""

    name = "http"

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self._url = url
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                limits=httpx.Limits(
                    max_keepalive_connections=10,
                    keepalive_expiry=30
                )
            )
        return self._client

    async def fetch_conditions(self) -> list[dict]:
        client = await self._get_client()
        try:
            response = await client.get(self._url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ConditionStoreError(f"Condition service request failed: {e}") from e

        records = _extract_records(payload, self._url)
        logger.debug(f"Fetched {len(records)} condition records", extra={"url": self._url})
        return records

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


class RedisConditionStore(ConditionStore):
    """Store reading a JSON document kept under a single Redis key."""

    name = "redis"

    def __init__(self, cache: CacheService, key: str):
        self._cache = cache
        self._key = key

    async def fetch_conditions(self) -> list[dict]:
        try:
            raw = await self._cache.get_raw(self._key)
        except Exception as e:
            raise ConditionStoreError(f"Redis read failed: {e}") from e

        if raw is None:
            raise ConditionStoreError(f"Redis key {self._key} is empty")

        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise ConditionStoreError(f"Redis key {self._key} holds invalid JSON") from e
        return _extract_records(payload, self._key)


def build_condition_store(
    settings: Optional[Settings] = None,
    cache: Optional[CacheService] = None
) -> Optional[ConditionStore]:
    """
    Create the store selected by CONDITION_STORE_BACKEND.

    Returns None when no store is configured; the repository then serves
    its built-in conditions.
    """
    settings = settings or get_settings()
    backend = settings.CONDITION_STORE_BACKEND.lower()

    if backend == "http" and settings.CONDITION_STORE_URL:
        return HttpConditionStore(settings.CONDITION_STORE_URL, settings.CONDITION_STORE_TIMEOUT)
    if backend == "file" and settings.CONDITION_STORE_PATH:
        return JsonFileConditionStore(settings.CONDITION_STORE_PATH)
    if backend == "redis" and cache is not None:
        return RedisConditionStore(cache, settings.CONDITION_STORE_REDIS_KEY)

    if backend != "none":
        logger.warning(
            f"Condition store backend '{backend}' is not fully configured",
            extra={"backend": backend}
        )
    return None
