"""
Backup Manager

Portable snapshot of the token collection. A backup is the obfuscated form
of this envelope:

    {
      "metadata": {"version", "created", "application", "tokenCount"},
      "tokens": [...],
      "timestamp": <epoch ms>,
      "checksum": <hex>
    }

The checksum is an integrity hint only (sum of the UTF-16 code units of the
serialized token array modulo 65536). Changing the algorithm requires a new
format version.
"""

import logging
import struct
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any, List

from tokenvault.app.services.obfuscation_codec import ObfuscationCodec, compact_json
from tokenvault.app.services.token_lifecycle import Clock, TokenLifecycle
from tokenvault.app.services.token_store import TokenStore, parse_token_records
from tokenvault.domain.base import now_ms
from tokenvault.domain.entities import AccessToken
from tokenvault.domain.errors import BackupFormatError, WrongApplicationError

logger = logging.getLogger(__name__)

BACKUP_FORMAT_VERSION = "1.0"
SUPPORTED_VERSIONS = frozenset({BACKUP_FORMAT_VERSION})


def compute_checksum(records: List[dict]) -> str:
    """Sum of UTF-16 code units of the compact JSON array, mod 2**16, in hex

    Characters outside the BMP count as their two surrogate halves.
    """
    data = compact_json(records).encode("utf-16-le")
    return format(sum(unit for (unit,) in struct.iter_unpack("<H", data)) % 65536, "x")


def to_iso8601(timestamp_ms: int) -> str:
    moment = datetime.fromtimestamp(timestamp_ms / 1000, UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ImportOutcome:
    success: bool
    message: str
    imported: int
    count: int


class BackupManager:
    """
    Export and import of the full token set.

    Business Rules:
    - Export always reflects a reaped view of the store
    - Import is all-or-nothing: a backup that fails decoding, structure or
      provenance checks leaves the store untouched
    - Checksum mismatch is logged and the import still proceeds
    - Merge: imported tokens overwrite existing tokens with the same value;
      tokens only present locally are kept
    """

    def __init__(
        self,
        lifecycle: TokenLifecycle,
        store: TokenStore,
        codec: ObfuscationCodec,
        application: str,
        version: str = BACKUP_FORMAT_VERSION,
        clock: Clock = now_ms,
    ):
        self._lifecycle = lifecycle
        self._store = store
        self._codec = codec
        self._application = application
        self._version = version
        self._clock = clock

    @property
    def application(self) -> str:
        return self._application

    def export_filename(self) -> str:
        day = datetime.fromtimestamp(self._clock() / 1000, UTC).strftime("%Y-%m-%d")
        return f"token-backup-{day}.txt"

    async def export(self) -> str:
        """
        Build an obfuscated backup of every token.

        Returns:
            Backup text, suitable for writing to a UTF-8 file
        """
        tokens = await self._lifecycle.list_tokens()
        records = [token.to_record() for token in tokens]
        now = self._clock()

        envelope = {
            "metadata": {
                "version": self._version,
                "created": to_iso8601(now),
                "application": self._application,
                "tokenCount": len(records),
            },
            "tokens": records,
            "timestamp": now,
            "checksum": compute_checksum(records),
        }
        logger.info(f"Exported backup with {len(records)} token(s)")
        return self._codec.encode(envelope)

    def _validate_envelope(self, envelope: Any) -> List[dict]:
        if not isinstance(envelope, dict):
            raise BackupFormatError("Backup content is not an object")

        metadata = envelope.get("metadata")
        if not isinstance(metadata, dict) or "application" not in metadata:
            raise BackupFormatError("Backup metadata is missing")

        if metadata["application"] != self._application:
            raise WrongApplicationError(self._application, metadata["application"])

        version = metadata.get("version")
        if version not in SUPPORTED_VERSIONS:
            raise BackupFormatError(f"Unsupported backup version: {version!r}")

        records = envelope.get("tokens")
        if not isinstance(records, list):
            raise BackupFormatError("Backup does not contain a token list")

        token_count = metadata.get("tokenCount")
        if token_count != len(records):
            logger.warning(
                f"Backup metadata lists {token_count} token(s) but contains {len(records)}"
            )

        checksum = envelope.get("checksum")
        expected = compute_checksum(records)
        if checksum != expected:
            logger.warning(
                f"Backup checksum mismatch (file {checksum!r}, computed {expected!r}); importing anyway"
            )
        return records

    async def import_backup(self, blob: str) -> ImportOutcome:
        """
        Merge a backup into the store.

        Args:
            blob: Backup text produced by export()

        Returns:
            ImportOutcome with the number imported and the new store size

        Raises:
            DecodeError: blob cannot be decoded
            BackupFormatError: envelope or a token record is malformed
            WrongApplicationError: backup belongs to another application
        """
        envelope = self._codec.decode(blob)
        records = self._validate_envelope(envelope)

        try:
            imported: List[AccessToken] = parse_token_records(records)
        except ValueError as exc:
            raise BackupFormatError(f"Backup contains an invalid token: {exc}") from exc

        async with self._store.lock:
            merged = {token.value: token for token in self._store.all()}
            for token in imported:
                merged[token.value] = token
            self._store.replace_all(merged.values())
            await self._store.persist()
            total = len(self._store)

        logger.info(f"Imported {len(imported)} token(s); store now holds {total}")
        return ImportOutcome(
            success=True,
            message=f"Successfully imported {len(imported)} token(s).",
            imported=len(imported),
            count=total,
        )
