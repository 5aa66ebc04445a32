from .issue_device_fingerprint_use_case import (
    DeviceFingerprintResponse,
    IssueDeviceFingerprintUseCase,
)

__all__ = [
    "IssueDeviceFingerprintUseCase",
    "DeviceFingerprintResponse",
]
