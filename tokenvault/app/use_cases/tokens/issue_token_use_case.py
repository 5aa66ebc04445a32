"""
Issue Token Use Case

Administrator creates a new single-use access token.
"""

from typing import Optional

from tokenvault.app.services.token_lifecycle import TokenLifecycle
from tokenvault.libs.result import Error, Result, Return
from .dtos import TokenInfo


class IssueTokenUseCase:
    """
    Use case for issuing access tokens.

    Business Rules:
    - New tokens start available and unbound
    - Expiry is a positive number of days, or omitted for no expiry
    """

    def __init__(self, lifecycle: TokenLifecycle):
        self.lifecycle = lifecycle

    async def execute(self, expiry_days: Optional[int] = None) -> Result[TokenInfo]:
        """
        Execute issue token use case.

        Args:
            expiry_days: Days until the token expires, None for never

        Returns:
            Result with the issued TokenInfo, or Error
        """
        if expiry_days is not None and expiry_days <= 0:
            return Return.err(
                Error(
                    "INVALID_EXPIRY",
                    "Expiry must be a positive number of days or omitted",
                )
            )

        token = await self.lifecycle.issue(expiry_days)
        return Return.ok(TokenInfo.from_entity(token))
