"""
Admin Use Case DTOs
"""

from pydantic import BaseModel


class AdminLoginResponse(BaseModel):
    """Response for administrator login"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
