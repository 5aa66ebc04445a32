from fastapi import APIRouter, Response, status

from tokenvault.app.use_cases.devices import (
    DeviceFingerprintResponse,
    IssueDeviceFingerprintUseCase,
)

router = APIRouter(prefix="/device", tags=["Device"])


@router.get(
    "/fingerprint",
    status_code=status.HTTP_200_OK,
    response_model=DeviceFingerprintResponse,
)
async def issue_fingerprint(response: Response):
    """
    Device Fingerprint

    Issues a fresh fingerprint on every call. A client fetches one on first
    run, stores it locally, and sends it as X-Device-Fingerprint from then
    on. Two clients never share a value, so a token bound to one of them
    stays unavailable to the other.
    """
    response.headers["Cache-Control"] = "no-store"
    use_case = IssueDeviceFingerprintUseCase()
    result = await use_case.execute()
    return result.value
