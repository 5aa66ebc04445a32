"""
Admin Login Use Case

Authenticates the single configured administrator and returns a JWT.
"""

import logging
import secrets
from datetime import timedelta

import bcrypt

from tokenvault.api.utils.jwt import generate_admin_jwt
from tokenvault.libs.result import Error, Result, Return
from .dtos import AdminLoginResponse

logger = logging.getLogger(__name__)

# Hash of a throwaway password, checked when the real hash is unusable
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(4))


class AdminLoginUseCase:
    """
    Use case for administrator login.

    Business Rules:
    - Constant-time comparison for both email and password
    - An empty configured hash disables admin login entirely
    - JWT carries role=admin and expires after the configured minutes
    """

    def __init__(self, admin_email: str, password_hash: str, expire_minutes: int = 60):
        self.admin_email = admin_email
        self.password_hash = password_hash
        self.expire_minutes = expire_minutes

    def _check_password(self, password: str) -> bool:
        if not self.password_hash:
            bcrypt.checkpw(b"dummy_password", _DUMMY_HASH)
            return False
        try:
            return bcrypt.checkpw(password.encode(), self.password_hash.encode())
        except ValueError:
            logger.error("Configured admin password hash is not a valid bcrypt hash")
            bcrypt.checkpw(b"dummy_password", _DUMMY_HASH)
            return False

    async def execute(self, email: str, password: str) -> Result[AdminLoginResponse]:
        """
        Execute admin login use case.

        Args:
            email: Administrator email
            password: Plain text password

        Returns:
            Result with AdminLoginResponse, or Error
        """
        email_matches = secrets.compare_digest(
            email.strip().lower().encode(), self.admin_email.strip().lower().encode()
        )
        # Always hash, even when the email is wrong
        password_valid = self._check_password(password)

        if not (email_matches and password_valid):
            logger.warning("Rejected admin login attempt")
            return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

        access_token = generate_admin_jwt(
            self.admin_email, timedelta(minutes=self.expire_minutes)
        )
        logger.info("Administrator logged in")
        return Return.ok(
            AdminLoginResponse(
                access_token=access_token,
                expires_in=self.expire_minutes * 60,
            )
        )
