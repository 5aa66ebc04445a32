import logging

import pytest

from tests.fixtures.clock import START_MS
from tokenvault.app.services.backup_manager import (
    BackupManager,
    compute_checksum,
    to_iso8601,
)
from tokenvault.domain.entities import TokenStatus
from tokenvault.domain.errors import BackupFormatError, DecodeError, WrongApplicationError

APPLICATION = "ai-prewedding-photographer"
DEVICE_A = "A" * 32


@pytest.fixture
def backups(lifecycle, store, codec, clock):
    return BackupManager(lifecycle, store, codec, application=APPLICATION, clock=clock)


def make_envelope(tokens, application=APPLICATION, version="1.0", checksum=None):
    return {
        "metadata": {
            "version": version,
            "created": to_iso8601(START_MS),
            "application": application,
            "tokenCount": len(tokens),
        },
        "tokens": tokens,
        "timestamp": START_MS,
        "checksum": compute_checksum(tokens) if checksum is None else checksum,
    }


def token_record(value, status="available", created_at=START_MS, **extra):
    record = {
        "value": value,
        "status": status,
        "createdAt": created_at,
        "expiresAt": None,
        "usedAt": None,
        "deviceFingerprint": None,
        "sessionId": None,
        "lastActivity": None,
    }
    record.update(extra)
    return record


def test_checksum_is_character_sum_in_hex():
    # "[" (91) + "]" (93)
    assert compute_checksum([]) == "b8"
    assert compute_checksum([{"a": 1}]) == format(sum(map(ord, '[{"a":1}]')) % 65536, "x")


def test_checksum_counts_surrogate_pairs():
    # U+1F600 is stored as the surrogate pair D83D DE00
    expected = sum(map(ord, '[{"a":"')) + 0xD83D + 0xDE00 + sum(map(ord, '"}]'))
    assert compute_checksum([{"a": "\U0001F600"}]) == format(expected % 65536, "x")


def test_iso_timestamp_format():
    assert to_iso8601(START_MS) == "2024-06-01T12:00:00.000Z"


def test_export_filename(backups):
    assert backups.export_filename() == "token-backup-2024-06-01.txt"


@pytest.mark.asyncio
async def test_export_envelope(backups, lifecycle, codec, clock):
    issued = await lifecycle.issue(7)
    envelope = codec.decode(await backups.export())

    assert envelope["metadata"] == {
        "version": "1.0",
        "created": "2024-06-01T12:00:00.000Z",
        "application": APPLICATION,
        "tokenCount": 1,
    }
    assert envelope["timestamp"] == clock.now
    assert envelope["tokens"][0]["value"] == issued.value
    assert envelope["tokens"][0]["expiresAt"] == issued.expires_at
    assert envelope["checksum"] == compute_checksum(envelope["tokens"])


@pytest.mark.asyncio
async def test_export_reaps_idle_sessions(backups, lifecycle, codec, clock):
    token = await lifecycle.issue()
    await lifecycle.activate(token.value, DEVICE_A)
    clock.advance(minutes=20)

    envelope = codec.decode(await backups.export())
    assert envelope["tokens"][0]["status"] == "used"


@pytest.mark.asyncio
async def test_export_then_import_restores_tokens(backups, lifecycle, store):
    first = await lifecycle.issue()
    second = await lifecycle.issue(3)
    await lifecycle.activate(second.value, DEVICE_A)
    blob = await backups.export()
    before = {token.value: token for token in store.all()}

    await lifecycle.delete(first.value)
    await lifecycle.delete(second.value)
    outcome = await backups.import_backup(blob)

    assert outcome.success
    assert outcome.imported == 2
    assert outcome.count == 2
    assert outcome.message == "Successfully imported 2 token(s)."
    assert {token.value: token for token in store.all()} == before


@pytest.mark.asyncio
async def test_import_overwrites_matching_tokens(backups, lifecycle, store, codec):
    token = await lifecycle.issue()
    local_only = await lifecycle.issue()
    blob = codec.encode(
        make_envelope(
            [token_record(token.value, status="used", usedAt=START_MS + 5)]
        )
    )

    outcome = await backups.import_backup(blob)

    assert outcome.count == 2
    assert store.get(token.value).status == TokenStatus.used
    assert store.get(local_only.value).status == TokenStatus.available


@pytest.mark.asyncio
async def test_import_persists(backups, codec, slot_data):
    blob = codec.encode(make_envelope([token_record("imported-1")]))
    await backups.import_backup(blob)

    records = codec.decode(slot_data["access_tokens"])
    assert [record["value"] for record in records] == ["imported-1"]


@pytest.mark.asyncio
async def test_import_wrong_application_leaves_store_unchanged(backups, lifecycle, store, codec):
    await lifecycle.issue()
    before = [token.model_copy() for token in store.all()]
    blob = codec.encode(make_envelope([token_record("foreign")], application="another-app"))

    with pytest.raises(WrongApplicationError):
        await backups.import_backup(blob)
    assert store.all() == before


@pytest.mark.asyncio
async def test_import_undecodable_blob(backups, store):
    with pytest.raises(DecodeError):
        await backups.import_backup("definitely not a backup")
    assert len(store) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "envelope",
    [
        ["not", "an", "object"],
        {"tokens": []},
        {"metadata": {"version": "1.0"}, "tokens": []},
        {"metadata": {"application": APPLICATION, "version": "1.0"}},
        {"metadata": {"application": APPLICATION, "version": "1.0"}, "tokens": {}},
        {"metadata": {"application": APPLICATION, "version": "2.0"}, "tokens": []},
    ],
)
async def test_import_rejects_malformed_envelopes(backups, store, codec, envelope):
    with pytest.raises(BackupFormatError):
        await backups.import_backup(codec.encode(envelope))
    assert len(store) == 0


@pytest.mark.asyncio
async def test_import_rejects_invalid_token_record(backups, lifecycle, store, codec):
    await lifecycle.issue()
    # active without a device binding
    blob = codec.encode(make_envelope([token_record("good"), token_record("bad", status="active")]))

    with pytest.raises(BackupFormatError):
        await backups.import_backup(blob)
    assert len(store) == 1
    assert "good" not in store


@pytest.mark.asyncio
async def test_checksum_mismatch_is_logged_and_import_proceeds(backups, store, codec, caplog):
    blob = codec.encode(make_envelope([token_record("tok-1")], checksum="0"))

    with caplog.at_level(logging.WARNING):
        outcome = await backups.import_backup(blob)

    assert outcome.imported == 1
    assert "tok-1" in store
    assert "checksum mismatch" in caplog.text


@pytest.mark.asyncio
async def test_token_count_mismatch_is_only_a_warning(backups, store, codec, caplog):
    envelope = make_envelope([token_record("tok-1")])
    envelope["metadata"]["tokenCount"] = 5

    with caplog.at_level(logging.WARNING):
        outcome = await backups.import_backup(codec.encode(envelope))

    assert outcome.imported == 1
    assert "lists 5 token(s)" in caplog.text


def test_application_property(backups):
    assert backups.application == APPLICATION
