"""
Release Token Use Case

Administrative force-logout: ends the session on a token and retires it.
"""

from tokenvault.app.services.token_lifecycle import TokenLifecycle
from tokenvault.libs.result import Error, Result, Return
from .dtos import ReleaseTokenResponse, TokenInfo


class ReleaseTokenUseCase:
    """
    Use case for releasing a token.

    Business Rules:
    - Release always moves the token to used, whatever its current state
    - The device binding and session are cleared
    - A released token can never be activated again
    """

    def __init__(self, lifecycle: TokenLifecycle):
        self.lifecycle = lifecycle

    async def execute(self, value: str) -> Result[ReleaseTokenResponse]:
        token = await self.lifecycle.release(value)
        if token is None:
            return Return.err(Error("TOKEN_NOT_FOUND", "Token not found"))

        return Return.ok(
            ReleaseTokenResponse(
                message="Token session released",
                token=TokenInfo.from_entity(token),
            )
        )
