"""
Token Vault Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TokenStatus(str, Enum):
    """Access token lifecycle state"""

    available = "available"
    active = "active"
    used = "used"


class RejectionReason(str, Enum):
    """Why a token cannot be claimed by a device"""

    not_found = "not_found"
    expired = "expired"
    used = "used"
    bound_to_other_device = "bound_to_other_device"


class ApiKeyStatus(str, Enum):
    """Health of a third-party API key in the rotation pool"""

    active = "active"
    unvalidated = "unvalidated"
    exhausted = "exhausted"
    invalid = "invalid"
