"""
Token Vault service container.

Built once at process start and injected into request handlers; there is
no module-level token state.
"""

from dataclasses import dataclass

from tokenvault.app.services.api_key_rotation import ApiKeyRotation
from tokenvault.app.services.backup_manager import BackupManager
from tokenvault.app.services.obfuscation_codec import ObfuscationCodec
from tokenvault.app.services.token_lifecycle import Clock, TokenLifecycle
from tokenvault.app.services.token_store import TokenStore
from tokenvault.app.services.unit_of_work import UnitOfWorkFactory
from tokenvault.domain.base import now_ms


@dataclass
class TokenVault:
    store: TokenStore
    lifecycle: TokenLifecycle
    backups: BackupManager
    api_keys: ApiKeyRotation


async def build_vault(
    config, uow_factory: UnitOfWorkFactory, clock: Clock = now_ms
) -> TokenVault:
    """
    Wire every service from configuration and load persisted state.

    Args:
        config: ApplicationConfig-like object
        uow_factory: Callable returning a fresh UnitOfWork
        clock: Epoch-millisecond time source

    Returns:
        Loaded TokenVault
    """
    codec = ObfuscationCodec(config.OBFUSCATION_KEY)
    store = TokenStore(uow_factory, codec, storage_key=config.TOKEN_STORAGE_KEY)
    lifecycle = TokenLifecycle(
        store, clock=clock, inactivity_minutes=config.TOKEN_INACTIVITY_MINUTES
    )
    backups = BackupManager(
        lifecycle,
        store,
        codec,
        application=config.BACKUP_APPLICATION,
        version=config.BACKUP_FORMAT_VERSION,
        clock=clock,
    )
    api_keys = ApiKeyRotation(
        uow_factory,
        codec,
        storage_key=config.API_KEYS_STORAGE_KEY,
        fallback_key=config.GENERATIVE_API_KEY,
    )

    await store.load()
    await api_keys.load()

    return TokenVault(
        store=store,
        lifecycle=lifecycle,
        backups=backups,
        api_keys=api_keys,
    )
