"""
Token Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the token domain.
Provides type safety and clear contracts between layers.
"""

from typing import List, Optional
from pydantic import BaseModel

from tokenvault.domain.entities import AccessToken


# ============================================================================
# Nested Models
# ============================================================================


class TokenInfo(BaseModel):
    """Full token view for administrators"""

    value: str
    status: str
    created_at: int
    expires_at: Optional[int] = None
    used_at: Optional[int] = None
    device_fingerprint: Optional[str] = None
    session_id: Optional[str] = None
    last_activity: Optional[int] = None

    @classmethod
    def from_entity(cls, token: AccessToken) -> "TokenInfo":
        return cls(**token.model_dump(mode="json"))


class TokenStatsInfo(BaseModel):
    """Token counts per status"""

    available: int
    active: int
    used: int
    total: int


# ============================================================================
# Response DTOs
# ============================================================================


class ListTokensResponse(BaseModel):
    """Response for list tokens use case"""

    tokens: List[TokenInfo]
    stats: TokenStatsInfo


class ReleaseTokenResponse(BaseModel):
    """Response for administrative release use case"""

    message: str
    token: TokenInfo


class DeleteTokenResponse(BaseModel):
    """Response for delete token use case"""

    message: str
    value: str
    deleted: bool


class TokenLoginResponse(BaseModel):
    """Response for client token login (activation)"""

    token: str
    session_id: str
    status: str
    expires_at: Optional[int] = None


class ValidateTokenResponse(BaseModel):
    """Response for token validation"""

    usable: bool
    reason: Optional[str] = None


class HeartbeatResponse(BaseModel):
    """Response for session heartbeat"""

    refreshed: bool


class LogoutResponse(BaseModel):
    """Response for client logout"""

    message: str
    released: bool
