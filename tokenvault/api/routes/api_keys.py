from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from tokenvault.api.error import ClientError, ServerError
from tokenvault.app.services.vault import TokenVault
from tokenvault.app.use_cases.api_keys import (
    ApiKeyInfo,
    ListApiKeysResponse,
    ManageApiKeysUseCase,
    RemoveApiKeyResponse,
)
from tokenvault.depends import get_current_admin, get_vault

router = APIRouter(prefix="/admin/api-keys", tags=["API Keys"])


class AddApiKeyRequest(BaseModel):
    key: str = Field(..., description="Raw API key value")


@router.get("", status_code=status.HTTP_200_OK, response_model=ListApiKeysResponse)
async def list_api_keys(
    admin: dict = Depends(get_current_admin),
    vault: TokenVault = Depends(get_vault),
):
    """List pooled API keys (masked)"""
    use_case = ManageApiKeysUseCase(vault.api_keys)
    result = await use_case.list_keys()
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiKeyInfo)
async def add_api_key(
    request: AddApiKeyRequest,
    admin: dict = Depends(get_current_admin),
    vault: TokenVault = Depends(get_vault),
):
    """
    Add API Key

    Raises:
        - 400 Bad Request: Key value is blank
    """
    use_case = ManageApiKeysUseCase(vault.api_keys)
    result = await use_case.add_key(request.key)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_API_KEY":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{key_id}", status_code=status.HTTP_200_OK, response_model=RemoveApiKeyResponse
)
async def remove_api_key(
    key_id: str,
    admin: dict = Depends(get_current_admin),
    vault: TokenVault = Depends(get_vault),
):
    """
    Remove API Key

    Raises:
        - 404 Not Found: No key with this id
    """
    use_case = ManageApiKeysUseCase(vault.api_keys)
    result = await use_case.remove_key(key_id)

    if result.is_err():
        error = result.error
        if error.code == "API_KEY_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
