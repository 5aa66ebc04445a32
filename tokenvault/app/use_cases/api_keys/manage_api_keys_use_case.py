"""
Manage API Keys Use Case

Administrator maintenance of the external API key pool.
"""

from tokenvault.app.services.api_key_rotation import ApiKeyRotation
from tokenvault.libs.result import Error, Result, Return
from .dtos import ApiKeyInfo, ListApiKeysResponse, RemoveApiKeyResponse


class ManageApiKeysUseCase:
    """
    Use case for the API key pool.

    Business Rules:
    - New keys start unvalidated and are promoted on first success
    - Adding a key that is already pooled returns the existing entry
    - Responses only ever carry masked key values
    """

    def __init__(self, api_keys: ApiKeyRotation):
        self.api_keys = api_keys

    async def list_keys(self) -> Result[ListApiKeysResponse]:
        keys = await self.api_keys.list_keys()
        return Return.ok(
            ListApiKeysResponse(keys=[ApiKeyInfo.from_entity(key) for key in keys])
        )

    async def add_key(self, value: str) -> Result[ApiKeyInfo]:
        try:
            key = await self.api_keys.add_key(value)
        except ValueError as exc:
            return Return.err(Error("INVALID_API_KEY", str(exc)))
        return Return.ok(ApiKeyInfo.from_entity(key))

    async def remove_key(self, key_id: str) -> Result[RemoveApiKeyResponse]:
        removed = await self.api_keys.remove_key(key_id)
        if not removed:
            return Return.err(Error("API_KEY_NOT_FOUND", "API key not found"))
        return Return.ok(RemoveApiKeyResponse(message="API key removed", id=key_id))
