"""
AccessToken Entity

Single-use bearer token gating access to the application.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .enums import RejectionReason, TokenStatus


class AccessToken(BaseModel):
    """
    AccessToken entity - opaque secret that unlocks the application.

    Business Rules:
    - available -> active -> used; used is terminal
    - While active the token is bound to exactly one device and session
    - Binding fields are cleared on every transition out of active
    - expires_at of None means the token never expires

    Timestamps are epoch milliseconds. The serialized form uses camelCase
    keys (createdAt, deviceFingerprint, ...) shared by the durable slot and
    backup files.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    value: str = Field(min_length=1)
    status: TokenStatus = TokenStatus.available

    created_at: int
    expires_at: Optional[int] = None
    used_at: Optional[int] = None

    # Device binding, present only while active
    device_fingerprint: Optional[str] = None
    session_id: Optional[str] = None
    last_activity: Optional[int] = None

    @model_validator(mode="after")
    def check_binding_invariants(self) -> "AccessToken":
        binding = (self.device_fingerprint, self.session_id, self.last_activity)
        if self.status == TokenStatus.active:
            if any(field is None for field in binding):
                raise ValueError(
                    "active token requires deviceFingerprint, sessionId and lastActivity"
                )
        elif any(field is not None for field in binding):
            raise ValueError(f"{self.status.value} token cannot carry a device binding")

        if self.status == TokenStatus.used:
            if self.used_at is None:
                raise ValueError("used token requires usedAt")
            if self.used_at < self.created_at:
                raise ValueError("usedAt cannot precede createdAt")
        return self

    def is_expired(self, now: int) -> bool:
        return self.expires_at is not None and self.expires_at < now

    def is_bound_to(self, fingerprint: str) -> bool:
        return self.device_fingerprint == fingerprint

    def is_stale(self, now: int, inactivity_ms: int) -> bool:
        return (
            self.status == TokenStatus.active
            and self.last_activity is not None
            and now - self.last_activity >= inactivity_ms
        )

    def bind(self, fingerprint: str, session_id: str, now: int) -> None:
        self.status = TokenStatus.active
        self.device_fingerprint = fingerprint
        self.session_id = session_id
        self.last_activity = now

    def refresh_activity(self, now: int) -> None:
        self.last_activity = now

    def mark_used(self, at: int) -> None:
        self.status = TokenStatus.used
        self.used_at = at
        self.device_fingerprint = None
        self.session_id = None
        self.last_activity = None

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class Rejection:
    """Negative outcome of a claim attempt; not an error"""

    reason: RejectionReason
    token_value: str
