"""
Issue Device Fingerprint Use Case

Hands a client installation the identifier it sends as X-Device-Fingerprint.
"""

from pydantic import BaseModel

from tokenvault.domain.base import generate_device_fingerprint
from tokenvault.libs.result import Result, Return


class DeviceFingerprintResponse(BaseModel):
    fingerprint: str


class IssueDeviceFingerprintUseCase:
    """
    Use case for issuing device fingerprints.

    Business Rules:
    - Every call returns a new random 32-character fingerprint
    - The server keeps no record of issued values; the client stores its
      own and reuses it for every claim, heartbeat and validation
    """

    async def execute(self) -> Result[DeviceFingerprintResponse]:
        return Return.ok(DeviceFingerprintResponse(fingerprint=generate_device_fingerprint()))
