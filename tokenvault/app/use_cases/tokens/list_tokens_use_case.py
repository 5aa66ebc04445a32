"""
List Tokens Use Case

Administrator dashboard view of every token with per-status counts.
"""

from tokenvault.app.services.token_lifecycle import TokenLifecycle, summarize_tokens
from tokenvault.libs.result import Result, Return
from .dtos import ListTokensResponse, TokenInfo, TokenStatsInfo


class ListTokensUseCase:
    """
    Use case for listing tokens.

    Listing reaps idle sessions first, so an abandoned session shows up as
    used without any background job.
    """

    def __init__(self, lifecycle: TokenLifecycle):
        self.lifecycle = lifecycle

    async def execute(self) -> Result[ListTokensResponse]:
        tokens = await self.lifecycle.list_tokens()
        stats = summarize_tokens(tokens)

        return Return.ok(
            ListTokensResponse(
                tokens=[TokenInfo.from_entity(token) for token in tokens],
                stats=TokenStatsInfo(
                    available=stats.available,
                    active=stats.active,
                    used=stats.used,
                    total=stats.total,
                ),
            )
        )
