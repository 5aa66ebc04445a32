from tokenvault.domain.entities import Rejection, RejectionReason
from tokenvault.libs.result import Error

REJECTION_ERRORS = {
    RejectionReason.not_found: Error("TOKEN_NOT_FOUND", "Token not found"),
    RejectionReason.expired: Error("TOKEN_EXPIRED", "Token has expired"),
    RejectionReason.used: Error("TOKEN_USED", "Token has already been used"),
    RejectionReason.bound_to_other_device: Error(
        "TOKEN_BOUND_TO_OTHER_DEVICE", "Token is in use on another device"
    ),
}


def rejection_error(rejection: Rejection) -> Error:
    return REJECTION_ERRORS[rejection.reason]
