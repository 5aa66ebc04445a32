"""
Token Vault Domain Errors

Exceptions reserved for storage faults and malformed external input.
Expected business conditions (unknown token, wrong device, expiry) are
modelled as return values, not exceptions.
"""


class TokenVaultError(Exception):
    """Base class for all token vault errors"""


class DecodeError(TokenVaultError):
    """Obfuscated text could not be turned back into structured data"""


class BackupFormatError(TokenVaultError):
    """Decoded backup envelope does not have the expected structure"""


class WrongApplicationError(TokenVaultError):
    """Backup file was produced by a different application"""

    def __init__(self, expected: str, actual: object):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Backup belongs to application {actual!r}, expected {expected!r}"
        )


class PersistenceError(TokenVaultError):
    """Durable storage could not be read or written"""


class NoApiKeyAvailableError(TokenVaultError):
    """Every API key in the pool failed and no fallback key is configured"""
