"""
LLM enhancement client.

Fetches supplementary predictions from an external LLM-backed service.
Predictions are only merged into the pipeline output, never substituted
for it, so every failure here degrades to an empty list.
"""

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from symptolens.config import Settings, get_settings
from symptolens.core.logging import get_logger
from symptolens.schemas.conditions import PotentialCondition

logger = get_logger(__name__)


def _reasoning_notes(value: Any) -> list[str]:
    """A single string is one note; anything but a list of strings is rejected."""
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(note, str) for note in value):
        return list(value)
    raise TypeError(f"reasoning_notes must be a string or list of strings, got {type(value).__name__}")


def parse_predictions(payload: Any) -> list[PotentialCondition]:
    """
    Convert an LLM service payload into predictions.

    Accepts a list, a single object, or a {"predictions": [...]} envelope.
    Items may name the condition with "name" or "label"; items without a
    name, an unusable score or malformed reasoning notes are skipped.
    """
    if isinstance(payload, dict) and "predictions" in payload:
        payload = payload["predictions"]
    if isinstance(payload, dict):
        if "error" in payload:
            logger.warning(f"LLM enhancement service error: {payload['error']}")
            return []
        payload = [payload]
    if not isinstance(payload, list):
        return []

    predictions = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        name = item.get("name") or item.get("label")
        if not name:
            continue

        data = {k: v for k, v in item.items() if k not in ("label", "relevance")}
        data["name"] = str(name)
        try:
            data["reasoning_notes"] = _reasoning_notes(item.get("reasoning_notes")) + [
                "Suggested by LLM enhancement"
            ]
            data["score"] = min(1.0, max(0.0, float(item.get("score", 0.5))))
            predictions.append(PotentialCondition.model_validate(data))
        except (TypeError, ValueError, ValidationError) as e:
            logger.warning(f"Skipping malformed LLM prediction: {e}", extra={"condition": name})

    return predictions


class HttpPredictionSource:
    """Posts identified factors to the LLM enhancement endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self._url = url
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        return self._client

    async def predict(
        self,
        identified_factors: list[str],
        body_location: Optional[str] = None
    ) -> list[PotentialCondition]:
        """
        Request supplementary predictions.

        Returns:
            Parsed predictions, or an empty list on any failure.
        """
        if not identified_factors:
            return []

        client = await self._get_client()
        try:
            response = await client.post(
                self._url,
                json={"identified_factors": identified_factors, "body_location": body_location}
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"LLM enhancement unavailable: {e}", extra={"url": self._url})
            return []

        predictions = parse_predictions(payload)
        logger.info(f"Received {len(predictions)} LLM predictions")
        return predictions

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


def build_prediction_source(settings: Optional[Settings] = None) -> Optional[HttpPredictionSource]:
    """LLM prediction source if LLM_ENHANCEMENT_URL is configured."""
    settings = settings or get_settings()
    if not settings.LLM_ENHANCEMENT_URL:
        return None
    return HttpPredictionSource(settings.LLM_ENHANCEMENT_URL, settings.LLM_ENHANCEMENT_TIMEOUT)
