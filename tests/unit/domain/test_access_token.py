import pytest
from pydantic import ValidationError

from tokenvault.domain.entities import AccessToken, TokenStatus


def test_new_token_is_available_and_unbound():
    token = AccessToken(value="tok", created_at=1000)
    assert token.status == TokenStatus.available
    assert token.device_fingerprint is None
    assert token.expires_at is None


def test_accepts_camel_case_input():
    token = AccessToken.model_validate(
        {
            "value": "tok",
            "status": "active",
            "createdAt": 1000,
            "deviceFingerprint": "device-a",
            "sessionId": "s-1",
            "lastActivity": 1500,
        }
    )
    assert token.is_bound_to("device-a")
    assert token.last_activity == 1500


def test_active_token_requires_full_binding():
    with pytest.raises(ValidationError):
        AccessToken(
            value="tok",
            created_at=1000,
            status=TokenStatus.active,
            device_fingerprint="device-a",
        )


def test_available_token_cannot_carry_binding():
    with pytest.raises(ValidationError):
        AccessToken(value="tok", created_at=1000, session_id="s-1")


def test_used_token_requires_used_at_after_creation():
    with pytest.raises(ValidationError):
        AccessToken(value="tok", created_at=1000, status=TokenStatus.used)
    with pytest.raises(ValidationError):
        AccessToken(value="tok", created_at=1000, status=TokenStatus.used, used_at=999)


def test_empty_value_rejected():
    with pytest.raises(ValidationError):
        AccessToken(value="", created_at=1000)


def test_expiry_is_strictly_after_expires_at():
    token = AccessToken(value="tok", created_at=0, expires_at=5000)
    assert not token.is_expired(5000)
    assert token.is_expired(5001)


def test_mark_used_clears_binding():
    token = AccessToken(value="tok", created_at=0)
    token.bind("device-a", "s-1", 100)
    token.mark_used(200)

    assert token.status == TokenStatus.used
    assert token.used_at == 200
    assert token.device_fingerprint is None
    assert token.session_id is None
    assert token.last_activity is None


def test_is_stale_only_for_active_tokens():
    token = AccessToken(value="tok", created_at=0)
    assert not token.is_stale(10_000_000, 1000)

    token.bind("device-a", "s-1", 0)
    assert not token.is_stale(999, 1000)
    assert token.is_stale(1000, 1000)
