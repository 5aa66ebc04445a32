"""
Backup Use Cases

Export and import of the full token set.
"""

from .export_backup_use_case import ExportBackupUseCase
from .import_backup_use_case import ImportBackupUseCase
from .dtos import ExportBackupResponse, ImportBackupResponse

__all__ = [
    "ExportBackupUseCase",
    "ImportBackupUseCase",
    "ExportBackupResponse",
    "ImportBackupResponse",
]
