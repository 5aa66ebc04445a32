"""
API Key Rotation

Priority-ordered pool of credentials for the external generative API.
A call is attempted with each usable key in turn:

- success            -> return (an unvalidated key is promoted to active)
- "API key not valid" -> key marked invalid, try the next key
- rate limit / 429   -> key marked exhausted, try the next key
- anything else      -> re-raised immediately

When the pool is exhausted the configured fallback key gets one attempt.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from tokenvault.app.services.obfuscation_codec import ObfuscationCodec
from tokenvault.app.services.unit_of_work import UnitOfWorkFactory
from tokenvault.domain.base import generate_uuid
from tokenvault.domain.entities import ApiKey, ApiKeyStatus, mask_api_key
from tokenvault.domain.errors import (
    DecodeError,
    NoApiKeyAvailableError,
    PersistenceError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

INVALID_KEY_MARKERS = ("API key not valid",)
EXHAUSTED_KEY_MARKERS = ("429", "RESOURCE_EXHAUSTED", "rate limit")

CANDIDATE_PRIORITY = (
    ApiKeyStatus.active,
    ApiKeyStatus.unvalidated,
    ApiKeyStatus.exhausted,
)


def classify_failure(exc: BaseException) -> Optional[ApiKeyStatus]:
    """Map a provider error to the key status it implies, None if unrelated"""
    message = str(exc)
    if any(marker in message for marker in INVALID_KEY_MARKERS):
        return ApiKeyStatus.invalid
    if any(marker in message for marker in EXHAUSTED_KEY_MARKERS):
        return ApiKeyStatus.exhausted
    return None


def parse_api_key_records(records: Any) -> List[ApiKey]:
    if not isinstance(records, list):
        raise ValueError(f"Expected a list of API keys, got {type(records).__name__}")

    keys = []
    for record in records:
        if not isinstance(record, dict):
            raise ValueError("API key record is not an object")
        value = record.get("value")
        if not value:
            continue
        keys.append(
            ApiKey(
                id=record.get("id") or generate_uuid(),
                value=value,
                masked=record.get("masked") or mask_api_key(value),
                status=record.get("status") or ApiKeyStatus.unvalidated,
            )
        )
    return keys


class ApiKeyRotation:
    """
    Persisted API key pool with status-driven failover.

    Business Rules:
    - Candidate order: active, then unvalidated, then exhausted
    - Invalid keys are never attempted again
    - Key values are never returned to callers unmasked except to the call itself
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        codec: ObfuscationCodec,
        storage_key: str = "api_keys",
        fallback_key: Optional[str] = None,
    ):
        self._uow_factory = uow_factory
        self._codec = codec
        self._storage_key = storage_key
        self._fallback_key = fallback_key or None
        self._keys: List[ApiKey] = []
        self.lock = asyncio.Lock()

    async def load(self) -> int:
        async with self.lock:
            try:
                async with self._uow_factory() as uow:
                    blob = await uow.slots.get(self._storage_key)
            except PersistenceError:
                logger.exception("Could not read API key pool, starting empty")
                self._keys = []
                return 0

            if blob is None:
                self._keys = []
                return 0

            try:
                self._keys = parse_api_key_records(self._codec.decode(blob))
            except (DecodeError, ValueError) as exc:
                logger.warning(f"Discarding corrupt API key pool: {exc}")
                self._keys = []
            return len(self._keys)

    async def _persist(self) -> bool:
        blob = self._codec.encode([key.model_dump(mode="json") for key in self._keys])
        try:
            async with self._uow_factory() as uow:
                await uow.slots.put(self._storage_key, blob)
                await uow.commit()
        except PersistenceError:
            logger.exception("Failed to persist API key pool; in-memory state kept")
            return False
        return True

    def candidates(self) -> List[ApiKey]:
        ordered = []
        for status in CANDIDATE_PRIORITY:
            ordered.extend(key for key in self._keys if key.status == status)
        return [key.model_copy() for key in ordered]

    async def list_keys(self) -> List[ApiKey]:
        async with self.lock:
            return [key.model_copy() for key in self._keys]

    async def add_key(self, value: str) -> ApiKey:
        """Add a key as unvalidated. Adding a known value returns the existing key."""
        value = value.strip()
        if not value:
            raise ValueError("API key value must not be empty")

        async with self.lock:
            for key in self._keys:
                if key.value == value:
                    return key.model_copy()

            key = ApiKey(id=generate_uuid(), value=value, masked=mask_api_key(value))
            self._keys.append(key)
            await self._persist()
            logger.info(f"Added API key {key.masked}")
            return key.model_copy()

    async def remove_key(self, key_id: str) -> bool:
        async with self.lock:
            remaining = [key for key in self._keys if key.id != key_id]
            if len(remaining) == len(self._keys):
                return False
            self._keys = remaining
            await self._persist()
            return True

    async def _set_status(self, key_id: str, status: ApiKeyStatus) -> None:
        async with self.lock:
            for key in self._keys:
                if key.id == key_id and key.status != status:
                    key.status = status
                    await self._persist()
                    return

    async def execute(self, call: Callable[[str], Awaitable[T]]) -> T:
        """
        Run call(api_key) with the best available key, failing over as needed.

        Raises:
            NoApiKeyAvailableError: no key succeeded and there is no fallback
            Exception: any provider error unrelated to key validity
        """
        for key in self.candidates():
            try:
                result = await call(key.value)
            except Exception as exc:
                status = classify_failure(exc)
                if status is None:
                    raise
                logger.warning(f"API key {key.masked} marked {status.value}: {exc}")
                await self._set_status(key.id, status)
                continue

            if key.status == ApiKeyStatus.unvalidated:
                await self._set_status(key.id, ApiKeyStatus.active)
            return result

        if self._fallback_key:
            logger.info("No pooled API key succeeded, using fallback key")
            return await call(self._fallback_key)

        raise NoApiKeyAvailableError("No usable API key available; add a key to the pool")
