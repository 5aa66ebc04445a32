"""
Delete Token Use Case

Permanently removes a token. There is no soft delete.
"""

from tokenvault.app.services.token_lifecycle import TokenLifecycle
from tokenvault.libs.result import Error, Result, Return
from .dtos import DeleteTokenResponse


class DeleteTokenUseCase:
    def __init__(self, lifecycle: TokenLifecycle):
        self.lifecycle = lifecycle

    async def execute(self, value: str) -> Result[DeleteTokenResponse]:
        deleted = await self.lifecycle.delete(value)
        if not deleted:
            return Return.err(Error("TOKEN_NOT_FOUND", "Token not found"))

        return Return.ok(
            DeleteTokenResponse(message="Token deleted", value=value, deleted=True)
        )
