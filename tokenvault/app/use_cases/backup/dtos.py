"""
Backup Use Case DTOs
"""

from pydantic import BaseModel


class ExportBackupResponse(BaseModel):
    """Backup text and the suggested download filename"""

    filename: str
    content: str


class ImportBackupResponse(BaseModel):
    """Response for backup import"""

    success: bool
    message: str
    imported: int
    count: int
