from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from tokenvault.api.error import ClientError, ServerError
from tokenvault.app.services.vault import TokenVault
from tokenvault.app.use_cases.admin import AdminLoginResponse, AdminLoginUseCase
from tokenvault.app.use_cases.backup import (
    ExportBackupUseCase,
    ImportBackupResponse,
    ImportBackupUseCase,
)
from tokenvault.app.use_cases.tokens import (
    DeleteTokenResponse,
    DeleteTokenUseCase,
    IssueTokenUseCase,
    ListTokensResponse,
    ListTokensUseCase,
    ReleaseTokenResponse,
    ReleaseTokenUseCase,
    TokenInfo,
)
from tokenvault.depends import get_current_admin, get_vault

router = APIRouter(prefix="/admin", tags=["Admin"])


class AdminLoginRequest(BaseModel):
    """Administrator login HTTP request payload"""

    email: EmailStr = Field(..., description="Administrator email")
    password: str = Field(..., description="Administrator password")


@router.post(
    "/login", status_code=status.HTTP_200_OK, response_model=AdminLoginResponse
)
async def admin_login(request: AdminLoginRequest):
    """
    Administrator Login

    Returns a bearer JWT for the admin routes.

    Raises:
        - 401 Unauthorized: Invalid credentials
    """
    use_case = AdminLoginUseCase(
        ApplicationConfig.ADMIN_EMAIL,
        ApplicationConfig.ADMIN_PASSWORD_HASH,
        ApplicationConfig.ADMIN_TOKEN_EXPIRE_MINUTES,
    )
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class IssueTokenRequest(BaseModel):
    """Issue token HTTP request payload"""

    expiry_days: Optional[int] = Field(
        None, description="Days until expiry; omit for a token that never expires"
    )


@router.post(
    "/tokens", status_code=status.HTTP_201_CREATED, response_model=TokenInfo
)
async def issue_token(
    request: IssueTokenRequest,
    admin: dict = Depends(get_current_admin),
    vault: TokenVault = Depends(get_vault),
):
    """
    Issue Access Token

    Creates a new available token with a random 24-character value.

    Raises:
        - 400 Bad Request: Expiry is zero or negative
        - 401 Unauthorized: Missing or invalid admin token
    """
    use_case = IssueTokenUseCase(vault.lifecycle)
    result = await use_case.execute(request.expiry_days)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_EXPIRY":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get(
    "/tokens", status_code=status.HTTP_200_OK, response_model=ListTokensResponse
)
async def list_tokens(
    admin: dict = Depends(get_current_admin),
    vault: TokenVault = Depends(get_vault),
):
    """
    List Access Tokens

    Newest first, with per-status counts. Idle sessions are reaped first.
    """
    use_case = ListTokensUseCase(vault.lifecycle)
    result = await use_case.execute()
    return result.value


@router.get("/tokens/export", status_code=status.HTTP_200_OK)
async def export_tokens(
    admin: dict = Depends(get_current_admin),
    vault: TokenVault = Depends(get_vault),
):
    """
    Export Backup

    Downloads every token as an obfuscated text file named
    token-backup-YYYY-MM-DD.txt.
    """
    use_case = ExportBackupUseCase(vault.backups)
    result = await use_case.execute()
    backup = result.value

    return PlainTextResponse(
        backup.content,
        headers={"Content-Disposition": f'attachment; filename="{backup.filename}"'},
    )


class ImportBackupRequest(BaseModel):
    """Import backup HTTP request payload"""

    backup: str = Field(..., description="Backup file content as exported")


@router.post(
    "/tokens/import",
    status_code=status.HTTP_200_OK,
    response_model=ImportBackupResponse,
)
async def import_tokens(
    request: ImportBackupRequest,
    admin: dict = Depends(get_current_admin),
    vault: TokenVault = Depends(get_vault),
):
    """
    Import Backup

    Merges a backup into the store. Imported tokens replace local tokens
    with the same value.

    Raises:
        - 400 Bad Request: Backup cannot be decoded or is malformed
        - 422 Unprocessable Entity: Backup belongs to another application
    """
    use_case = ImportBackupUseCase(vault.backups)
    result = await use_case.execute(request.backup)

    if result.is_err():
        error = result.error
        if error.code in ("BACKUP_DECODE_FAILED", "INVALID_BACKUP_FORMAT"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "WRONG_APPLICATION":
            raise ClientError(
                error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
            )
        raise ServerError(error)

    return result.value


@router.post(
    "/tokens/{value}/release",
    status_code=status.HTTP_200_OK,
    response_model=ReleaseTokenResponse,
)
async def release_token(
    value: str,
    admin: dict = Depends(get_current_admin),
    vault: TokenVault = Depends(get_vault),
):
    """
    Force Logout

    Ends any session on the token and marks it used.

    Raises:
        - 404 Not Found: Token does not exist
    """
    use_case = ReleaseTokenUseCase(vault.lifecycle)
    result = await use_case.execute(value)

    if result.is_err():
        error = result.error
        if error.code == "TOKEN_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/tokens/{value}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteTokenResponse,
)
async def delete_token(
    value: str,
    admin: dict = Depends(get_current_admin),
    vault: TokenVault = Depends(get_vault),
):
    """
    Delete Token

    Raises:
        - 404 Not Found: Token does not exist
    """
    use_case = DeleteTokenUseCase(vault.lifecycle)
    result = await use_case.execute(value)

    if result.is_err():
        error = result.error
        if error.code == "TOKEN_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
