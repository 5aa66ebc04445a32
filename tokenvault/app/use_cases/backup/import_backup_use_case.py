"""
Import Backup Use Case

Merges a previously exported backup into the token store.
"""

import logging

from tokenvault.app.services.backup_manager import BackupManager
from tokenvault.domain.errors import BackupFormatError, DecodeError, WrongApplicationError
from tokenvault.libs.result import Error, Result, Return
from .dtos import ImportBackupResponse

logger = logging.getLogger(__name__)


class ImportBackupUseCase:
    """
    Use case for importing backups.

    Business Rules:
    - Rejected backups leave the store exactly as it was
    - Backups from another application are refused
    - Imported tokens overwrite local tokens with the same value
    """

    def __init__(self, backups: BackupManager):
        self.backups = backups

    async def execute(self, blob: str) -> Result[ImportBackupResponse]:
        """
        Execute import backup use case.

        Args:
            blob: Backup text as produced by export

        Returns:
            Result with ImportBackupResponse, or Error
        """
        try:
            outcome = await self.backups.import_backup(blob)
        except DecodeError as exc:
            logger.warning(f"Backup could not be decoded: {exc}")
            return Return.err(
                Error(
                    "BACKUP_DECODE_FAILED",
                    "Backup file could not be decoded. It may be corrupted.",
                )
            )
        except WrongApplicationError:
            return Return.err(
                Error(
                    "WRONG_APPLICATION",
                    f"Backup was not created by {self.backups.application}",
                )
            )
        except BackupFormatError as exc:
            return Return.err(Error("INVALID_BACKUP_FORMAT", str(exc)))

        return Return.ok(
            ImportBackupResponse(
                success=outcome.success,
                message=outcome.message,
                imported=outcome.imported,
                count=outcome.count,
            )
        )
