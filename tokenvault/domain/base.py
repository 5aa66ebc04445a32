import secrets
import string
import time
import uuid

ALPHANUMERIC = string.ascii_letters + string.digits

TOKEN_VALUE_LENGTH = 24
DEVICE_FINGERPRINT_LENGTH = 32
MS_PER_MINUTE = 60 * 1000
MS_PER_DAY = 24 * 60 * MS_PER_MINUTE


def generate_uuid() -> str:
    return str(uuid.uuid4())


def random_alphanumeric(length: int) -> str:
    return "".join(secrets.choice(ALPHANUMERIC) for _ in range(length))


def generate_token_value() -> str:
    return random_alphanumeric(TOKEN_VALUE_LENGTH)


def generate_device_fingerprint() -> str:
    return random_alphanumeric(DEVICE_FINGERPRINT_LENGTH)


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)
