"""
Token Use Cases

Administrative token management and client session flows.
"""

from .issue_token_use_case import IssueTokenUseCase
from .list_tokens_use_case import ListTokensUseCase
from .release_token_use_case import ReleaseTokenUseCase
from .delete_token_use_case import DeleteTokenUseCase
from .login_with_token_use_case import LoginWithTokenUseCase
from .token_session_use_case import TokenSessionUseCase
from .rejections import REJECTION_ERRORS, rejection_error
from .dtos import (
    TokenInfo,
    TokenStatsInfo,
    ListTokensResponse,
    ReleaseTokenResponse,
    DeleteTokenResponse,
    TokenLoginResponse,
    ValidateTokenResponse,
    HeartbeatResponse,
    LogoutResponse,
)

__all__ = [
    # Use Cases
    "IssueTokenUseCase",
    "ListTokensUseCase",
    "ReleaseTokenUseCase",
    "DeleteTokenUseCase",
    "LoginWithTokenUseCase",
    "TokenSessionUseCase",
    # Error mapping
    "REJECTION_ERRORS",
    "rejection_error",
    # DTOs - Responses
    "ListTokensResponse",
    "ReleaseTokenResponse",
    "DeleteTokenResponse",
    "TokenLoginResponse",
    "ValidateTokenResponse",
    "HeartbeatResponse",
    "LogoutResponse",
    # DTOs - Nested Models
    "TokenInfo",
    "TokenStatsInfo",
]
