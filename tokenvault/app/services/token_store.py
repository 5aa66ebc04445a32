"""
Token Store

Canonical in-memory token collection backed by one durable storage slot.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from tokenvault.app.services.obfuscation_codec import ObfuscationCodec
from tokenvault.app.services.unit_of_work import UnitOfWorkFactory
from tokenvault.domain.entities import AccessToken
from tokenvault.domain.errors import DecodeError, PersistenceError

logger = logging.getLogger(__name__)


def parse_token_records(records: Any) -> List[AccessToken]:
    """
    Validate a decoded collection of serialized tokens.

    Raises:
        ValueError: records is not a list, or an entry is not a valid token
            (pydantic.ValidationError is a ValueError)
    """
    if not isinstance(records, list):
        raise ValueError(f"Expected a list of tokens, got {type(records).__name__}")
    return [AccessToken.model_validate(record) for record in records]


class TokenStore:
    """
    Owner of the token collection for the lifetime of the process.

    Business Rules:
    - In-memory state is the source of truth; the slot only mirrors it
    - Corrupt or missing storage loads as an empty store, never an error
    - A failed write is logged and does not undo the in-memory mutation

    Concurrency: every mutation must run while holding ``lock`` so the
    read-check-mutate-persist sequence is atomic for other callers on the
    event loop. ``persist`` does not take the lock itself.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        codec: ObfuscationCodec,
        storage_key: str = "access_tokens",
    ):
        self._uow_factory = uow_factory
        self._codec = codec
        self._storage_key = storage_key
        self._tokens: Dict[str, AccessToken] = {}
        self.lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, value: str) -> bool:
        return value in self._tokens

    def get(self, value: str) -> Optional[AccessToken]:
        return self._tokens.get(value)

    def all(self) -> List[AccessToken]:
        """Live token objects in insertion order"""
        return list(self._tokens.values())

    def add(self, token: AccessToken) -> None:
        self._tokens[token.value] = token

    def remove(self, value: str) -> Optional[AccessToken]:
        return self._tokens.pop(value, None)

    def replace_all(self, tokens: Iterable[AccessToken]) -> None:
        self._tokens = {token.value: token for token in tokens}

    async def load(self) -> int:
        """
        Read the durable slot into memory.

        Returns:
            Number of tokens loaded
        """
        async with self.lock:
            try:
                async with self._uow_factory() as uow:
                    blob = await uow.slots.get(self._storage_key)
            except PersistenceError:
                logger.exception("Could not read token storage, starting empty")
                self._tokens = {}
                return 0

            if blob is None:
                logger.info("No token storage found, starting empty")
                self._tokens = {}
                return 0

            try:
                tokens = parse_token_records(self._codec.decode(blob))
            except (DecodeError, ValueError) as exc:
                logger.warning(f"Discarding corrupt token storage: {exc}")
                self._tokens = {}
                return 0

            self.replace_all(tokens)
            logger.info(f"Loaded {len(self._tokens)} token(s) from storage")
            return len(self._tokens)

    async def persist(self) -> bool:
        """
        Write the current collection to the durable slot.

        Returns:
            True if the write committed, False if it failed (logged)
        """
        records = [token.to_record() for token in self._tokens.values()]
        blob = self._codec.encode(records)
        try:
            async with self._uow_factory() as uow:
                await uow.slots.put(self._storage_key, blob)
                await uow.commit()
        except PersistenceError:
            logger.exception(
                f"Failed to persist {len(records)} token(s); in-memory state kept"
            )
            return False
        return True
