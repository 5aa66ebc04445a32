"""
Token Vault Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    TokenStatus,
    RejectionReason,
    ApiKeyStatus,
)

# Export all entities
from .access_token import AccessToken, Rejection
from .api_key import ApiKey, mask_api_key
from .storage_slot import StorageSlot

__all__ = [
    # Enums
    "TokenStatus",
    "RejectionReason",
    "ApiKeyStatus",
    # Entities
    "AccessToken",
    "Rejection",
    "ApiKey",
    "mask_api_key",
    "StorageSlot",
]
