"""
Token Session Use Case

Client-side session upkeep: validation, heartbeat, and logout.
"""

from tokenvault.app.services.token_lifecycle import TokenLifecycle
from tokenvault.libs.result import Result, Return
from .dtos import HeartbeatResponse, LogoutResponse, ValidateTokenResponse


class TokenSessionUseCase:
    """
    Use case for the client session after login.

    Business Rules:
    - Validation never changes the claimed token
    - Heartbeats are best-effort and never fail the caller
    - Logout retires the token permanently, even if it was never activated
    """

    def __init__(self, lifecycle: TokenLifecycle):
        self.lifecycle = lifecycle

    async def validate(self, value: str, fingerprint: str) -> Result[ValidateTokenResponse]:
        """
        Check whether the device could use the token right now.

        Returns:
            Result with usable flag and, when unusable, the rejection reason
        """
        rejection = await self.lifecycle.check_claim(value, fingerprint)
        if rejection is None:
            return Return.ok(ValidateTokenResponse(usable=True))

        return Return.ok(
            ValidateTokenResponse(usable=False, reason=rejection.reason.value)
        )

    async def heartbeat(self, value: str, fingerprint: str) -> Result[HeartbeatResponse]:
        refreshed = await self.lifecycle.touch(value, fingerprint)
        return Return.ok(HeartbeatResponse(refreshed=refreshed))

    async def logout(self, value: str) -> Result[LogoutResponse]:
        """
        End the client session.

        Unknown tokens are not an error here, the client only wants to be
        logged out.
        """
        token = await self.lifecycle.deactivate(value)
        if token is None:
            return Return.ok(LogoutResponse(message="No session to end", released=False))

        return Return.ok(LogoutResponse(message="Logged out", released=True))
