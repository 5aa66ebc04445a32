from fastapi import Depends, Header, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from tokenvault.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tokenvault.api.error import ClientError
from tokenvault.api.utils.jwt import ADMIN_ROLE, verify_jwt
from tokenvault.app.services.vault import TokenVault
from tokenvault.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


def create_unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(AsyncSessionLocal)


def get_vault(request: Request) -> TokenVault:
    """Service container built once in the application lifespan"""
    return request.app.state.vault


async def get_device_fingerprint(x_device_fingerprint: str = Header(None)) -> str:
    """
    Extract the calling device's fingerprint from X-Device-Fingerprint.

    Raises:
        ClientError: 400 if the header is missing or blank
    """
    if not x_device_fingerprint or not x_device_fingerprint.strip():
        raise ClientError(
            Error("DEVICE_FINGERPRINT_REQUIRED", "X-Device-Fingerprint header is required")
        )
    return x_device_fingerprint.strip()


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify the admin JWT from Authorization header.

    Returns:
        Decoded JWT payload containing sub and role

    Raises:
        ClientError: 401 if token is missing, invalid or expired
        ClientError: 403 if the token is not an admin token
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = verify_jwt(credentials.credentials)
    if payload is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if payload.get("role") != ADMIN_ROLE:
        raise ClientError(
            Error("FORBIDDEN", "Administrator access required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    return payload
