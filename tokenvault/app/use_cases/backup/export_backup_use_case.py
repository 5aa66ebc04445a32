"""
Export Backup Use Case

Produces an obfuscated snapshot of every token for safekeeping.
"""

from tokenvault.app.services.backup_manager import BackupManager
from tokenvault.libs.result import Result, Return
from .dtos import ExportBackupResponse


class ExportBackupUseCase:
    def __init__(self, backups: BackupManager):
        self.backups = backups

    async def execute(self) -> Result[ExportBackupResponse]:
        content = await self.backups.export()
        return Return.ok(
            ExportBackupResponse(
                filename=self.backups.export_filename(),
                content=content,
            )
        )
