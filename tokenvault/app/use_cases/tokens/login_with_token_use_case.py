"""
Login With Token Use Case

Client presents an access token from a device and starts a session.
"""

from tokenvault.app.services.token_lifecycle import TokenLifecycle
from tokenvault.domain.entities import Rejection
from tokenvault.libs.result import Result, Return
from .dtos import TokenLoginResponse
from .rejections import rejection_error


class LoginWithTokenUseCase:
    """
    Use case for token login (activation).

    Business Rules:
    - A token is bound to the first device that activates it
    - The same device may log in again and gets a fresh session
    - Expired, used, or foreign-bound tokens are rejected untouched
    - Idle sessions are reaped before the claim is evaluated
    """

    def __init__(self, lifecycle: TokenLifecycle):
        self.lifecycle = lifecycle

    async def execute(self, value: str, fingerprint: str) -> Result[TokenLoginResponse]:
        """
        Execute token login use case.

        Args:
            value: Access token presented by the client
            fingerprint: Installation fingerprint of the calling device

        Returns:
            Result with TokenLoginResponse, or Error naming the rejection
        """
        outcome = await self.lifecycle.activate(value, fingerprint)

        if isinstance(outcome, Rejection):
            return Return.err(rejection_error(outcome))

        return Return.ok(
            TokenLoginResponse(
                token=outcome.value,
                session_id=outcome.session_id,
                status=outcome.status.value,
                expires_at=outcome.expires_at,
            )
        )
