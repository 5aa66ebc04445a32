"""
Token Lifecycle

State machine over the token store: issue, claim (activate), heartbeat,
release and delete, plus the lazy inactivity reaper.

    available --activate--> active --release/reap--> used
                              ^  |
                              +--+ activate (same device), touch

There is no background timer. Stale sessions are reaped as a side effect
of every read that needs an up-to-date view (list, validate, activate, touch).
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Union

from tokenvault.app.services.token_store import TokenStore
from tokenvault.domain.base import (
    MS_PER_DAY,
    MS_PER_MINUTE,
    generate_token_value,
    generate_uuid,
    now_ms,
)
from tokenvault.domain.entities import (
    AccessToken,
    Rejection,
    RejectionReason,
    TokenStatus,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

DEFAULT_INACTIVITY_MINUTES = 15


def short_value(value: str) -> str:
    """Token prefix safe to write to logs"""
    return f"{value[:6]}..."


@dataclass(frozen=True)
class TokenStats:
    available: int
    active: int
    used: int
    total: int


def summarize_tokens(tokens: Iterable[AccessToken]) -> TokenStats:
    tokens = list(tokens)
    counts = Counter(token.status for token in tokens)
    return TokenStats(
        available=counts[TokenStatus.available],
        active=counts[TokenStatus.active],
        used=counts[TokenStatus.used],
        total=len(tokens),
    )


class TokenLifecycle:
    """
    Lifecycle operations over a TokenStore.

    Business Rules:
    - A token is claimable when it exists, is not expired, is not used,
      and is either available or already bound to the calling device
    - At most one device holds an active token; the claim check and the
      bind happen under the store lock as one step
    - Active tokens idle for the inactivity window become used, with
      used_at backdated to the last recorded activity
    - Every mutation is persisted before the operation returns
    - Callers only ever receive copies of stored tokens
    """

    def __init__(
        self,
        store: TokenStore,
        clock: Clock = now_ms,
        inactivity_minutes: int = DEFAULT_INACTIVITY_MINUTES,
    ):
        self._store = store
        self._clock = clock
        self._inactivity_ms = inactivity_minutes * MS_PER_MINUTE

    # ------------------------------------------------------------------
    # Internal helpers (caller holds the store lock)
    # ------------------------------------------------------------------

    def _reap(self, now: int) -> bool:
        changed = False
        for token in self._store.all():
            if token.is_stale(now, self._inactivity_ms):
                ended_at = token.last_activity
                token.mark_used(ended_at)
                logger.info(
                    f"Reaped inactive token {short_value(token.value)} (last activity {ended_at})"
                )
                changed = True
        return changed

    def _claim_rejection(
        self, value: str, fingerprint: str, now: int
    ) -> Optional[Rejection]:
        token = self._store.get(value)
        if token is None:
            return Rejection(RejectionReason.not_found, value)
        if token.is_expired(now):
            return Rejection(RejectionReason.expired, value)
        if token.status == TokenStatus.used:
            return Rejection(RejectionReason.used, value)
        if token.status == TokenStatus.active and not token.is_bound_to(fingerprint):
            return Rejection(RejectionReason.bound_to_other_device, value)
        return None

    # ------------------------------------------------------------------
    # Administrative operations
    # ------------------------------------------------------------------

    async def issue(self, expiry_days: Optional[int] = None) -> AccessToken:
        """
        Create a new available token.

        Args:
            expiry_days: Days until expiry, or None for a token that never expires

        Returns:
            Copy of the newly issued token
        """
        if expiry_days is not None and expiry_days <= 0:
            raise ValueError("expiry_days must be positive or None")

        async with self._store.lock:
            now = self._clock()
            value = generate_token_value()
            while value in self._store:
                value = generate_token_value()

            token = AccessToken(
                value=value,
                created_at=now,
                expires_at=now + expiry_days * MS_PER_DAY if expiry_days else None,
            )
            self._store.add(token)
            await self._store.persist()

            logger.info(
                f"Issued token {short_value(value)} (expiry_days={expiry_days})"
            )
            return token.model_copy(deep=True)

    async def deactivate(self, value: str) -> Optional[AccessToken]:
        """
        Force a token into the used state, ending any session on it.

        Used for client logout and for administrative force-logout.

        Returns:
            Copy of the released token, or None if it does not exist
        """
        async with self._store.lock:
            token = self._store.get(value)
            if token is None:
                return None

            token.mark_used(self._clock())
            await self._store.persist()

            logger.info(f"Released token {short_value(value)}")
            return token.model_copy(deep=True)

    release = deactivate

    async def delete(self, value: str) -> bool:
        """Remove a token permanently. Returns True if it existed."""
        async with self._store.lock:
            if self._store.remove(value) is None:
                return False
            await self._store.persist()
            logger.info(f"Deleted token {short_value(value)}")
            return True

    async def reap(self) -> bool:
        """Sweep stale active tokens. Returns True if anything changed."""
        async with self._store.lock:
            changed = self._reap(self._clock())
            if changed:
                await self._store.persist()
            return changed

    async def list_tokens(self) -> List[AccessToken]:
        """
        Reaped snapshot of every token, newest first.

        Returns:
            Deep copies ordered by created_at descending
        """
        async with self._store.lock:
            if self._reap(self._clock()):
                await self._store.persist()
            tokens = sorted(
                self._store.all(), key=lambda token: token.created_at, reverse=True
            )
            return [token.model_copy(deep=True) for token in tokens]

    async def stats(self) -> TokenStats:
        return summarize_tokens(await self.list_tokens())

    # ------------------------------------------------------------------
    # Client operations
    # ------------------------------------------------------------------

    async def check_claim(self, value: str, fingerprint: str) -> Optional[Rejection]:
        """
        Evaluate whether a device may use a token, without claiming it.

        Returns:
            None if usable, otherwise the Rejection explaining why not
        """
        async with self._store.lock:
            now = self._clock()
            if self._reap(now):
                await self._store.persist()
            return self._claim_rejection(value, fingerprint, now)

    async def is_usable(self, value: str, fingerprint: str) -> bool:
        return await self.check_claim(value, fingerprint) is None

    async def activate(
        self, value: str, fingerprint: str
    ) -> Union[AccessToken, Rejection]:
        """
        Bind a token to the calling device and start a session.

        Re-activating a token already bound to the same device (page reload)
        succeeds and starts a fresh session. Any other failed precondition
        returns a Rejection and leaves the token untouched.

        Returns:
            Copy of the activated token, or a Rejection
        """
        async with self._store.lock:
            now = self._clock()
            reaped = self._reap(now)

            rejection = self._claim_rejection(value, fingerprint, now)
            if rejection is not None:
                if reaped:
                    await self._store.persist()
                logger.info(
                    f"Rejected activation of {short_value(value)}: {rejection.reason.value}"
                )
                return rejection

            token = self._store.get(value)
            token.bind(fingerprint, generate_uuid(), now)
            await self._store.persist()

            logger.info(f"Activated token {short_value(value)}")
            return token.model_copy(deep=True)

    async def touch(self, value: str, fingerprint: str) -> bool:
        """
        Best-effort heartbeat for an active session.

        Silently ignored unless the token is active and bound to the caller.

        Returns:
            True if last_activity was refreshed
        """
        async with self._store.lock:
            now = self._clock()
            reaped = self._reap(now)

            token = self._store.get(value)
            refreshed = (
                token is not None
                and token.status == TokenStatus.active
                and token.is_bound_to(fingerprint)
            )
            if refreshed:
                token.refresh_activity(now)

            if refreshed or reaped:
                await self._store.persist()
            return refreshed
