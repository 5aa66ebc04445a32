"""
ApiKey Entity

Third-party API credential managed by the rotation pool.
"""

from pydantic import BaseModel, ConfigDict

from .enums import ApiKeyStatus


def mask_api_key(value: str) -> str:
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


class ApiKey(BaseModel):
    """
    ApiKey entity - one credential for the external generative API.

    Business Rules:
    - New keys start unvalidated and become active after a successful call
    - Keys rejected by the provider are marked invalid and never retried
    - Rate-limited keys are marked exhausted and retried last
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    value: str
    masked: str
    status: ApiKeyStatus = ApiKeyStatus.unvalidated
