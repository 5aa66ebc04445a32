"""
API Key Use Cases
"""

from .manage_api_keys_use_case import ManageApiKeysUseCase
from .dtos import ApiKeyInfo, ListApiKeysResponse, RemoveApiKeyResponse

__all__ = [
    "ManageApiKeysUseCase",
    "ApiKeyInfo",
    "ListApiKeysResponse",
    "RemoveApiKeyResponse",
]
