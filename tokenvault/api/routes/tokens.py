from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from tokenvault.api.error import ClientError, ServerError
from tokenvault.app.services.vault import TokenVault
from tokenvault.app.use_cases.tokens import (
    HeartbeatResponse,
    LoginWithTokenUseCase,
    LogoutResponse,
    TokenLoginResponse,
    TokenSessionUseCase,
    ValidateTokenResponse,
)
from tokenvault.depends import get_device_fingerprint, get_vault

router = APIRouter(prefix="/tokens", tags=["Tokens"])

REJECTION_STATUS = {
    "TOKEN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TOKEN_EXPIRED": status.HTTP_403_FORBIDDEN,
    "TOKEN_USED": status.HTTP_403_FORBIDDEN,
    "TOKEN_BOUND_TO_OTHER_DEVICE": status.HTTP_409_CONFLICT,
}


class TokenRequest(BaseModel):
    """Client token HTTP request payload"""

    token: str = Field(..., min_length=1, description="Access token value")


@router.post(
    "/validate",
    status_code=status.HTTP_200_OK,
    response_model=ValidateTokenResponse,
)
async def validate_token(
    request: TokenRequest,
    fingerprint: str = Depends(get_device_fingerprint),
    vault: TokenVault = Depends(get_vault),
):
    """
    Validate Token

    Reports whether this device could log in with the token, without
    claiming it.
    """
    use_case = TokenSessionUseCase(vault.lifecycle)
    result = await use_case.validate(request.token, fingerprint)
    return result.value


@router.post(
    "/login", status_code=status.HTTP_200_OK, response_model=TokenLoginResponse
)
async def login_with_token(
    request: TokenRequest,
    fingerprint: str = Depends(get_device_fingerprint),
    vault: TokenVault = Depends(get_vault),
):
    """
    Token Login

    Binds the token to this device and starts a session.

    Raises:
        - 403 Forbidden: Token expired or already used
        - 404 Not Found: Token does not exist
        - 409 Conflict: Token is bound to another device
    """
    use_case = LoginWithTokenUseCase(vault.lifecycle)
    result = await use_case.execute(request.token, fingerprint)

    if result.is_err():
        error = result.error
        if error.code in REJECTION_STATUS:
            raise ClientError(error, status_code=REJECTION_STATUS[error.code])
        raise ServerError(error)

    return result.value


@router.post(
    "/heartbeat", status_code=status.HTTP_200_OK, response_model=HeartbeatResponse
)
async def heartbeat(
    request: TokenRequest,
    fingerprint: str = Depends(get_device_fingerprint),
    vault: TokenVault = Depends(get_vault),
):
    """
    Session Heartbeat

    Refreshes the inactivity timer. Never fails; refreshed is false when the
    session is gone or belongs to another device.
    """
    use_case = TokenSessionUseCase(vault.lifecycle)
    result = await use_case.heartbeat(request.token, fingerprint)
    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: TokenRequest,
    vault: TokenVault = Depends(get_vault),
):
    """
    Logout

    Ends the session. The token is used afterwards and cannot log in again.
    """
    use_case = TokenSessionUseCase(vault.lifecycle)
    result = await use_case.logout(request.token)
    return result.value
