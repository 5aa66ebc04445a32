"""
API Key Use Case DTOs
"""

from typing import List
from pydantic import BaseModel

from tokenvault.domain.entities import ApiKey


class ApiKeyInfo(BaseModel):
    """Masked view of a pooled key; the raw value never leaves the service"""

    id: str
    masked: str
    status: str

    @classmethod
    def from_entity(cls, key: ApiKey) -> "ApiKeyInfo":
        return cls(id=key.id, masked=key.masked, status=key.status.value)


class ListApiKeysResponse(BaseModel):
    keys: List[ApiKeyInfo]


class RemoveApiKeyResponse(BaseModel):
    message: str
    id: str
