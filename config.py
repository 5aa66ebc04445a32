import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tokenvault.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Admin authentication
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_EMAIL = data.get("ADMIN_EMAIL", "admin@example.com")
    ADMIN_PASSWORD_HASH = data.get("ADMIN_PASSWORD_HASH", "")  # bcrypt; empty disables admin login
    ADMIN_TOKEN_EXPIRE_MINUTES = data.get("ADMIN_TOKEN_EXPIRE_MINUTES", 60)

    # Token storage and lifecycle
    OBFUSCATION_KEY = data.get("OBFUSCATION_KEY", "AIPreweddingPhotographerSecretKey2024")
    TOKEN_STORAGE_KEY = data.get("TOKEN_STORAGE_KEY", "access_tokens")
    API_KEYS_STORAGE_KEY = data.get("API_KEYS_STORAGE_KEY", "api_keys")
    TOKEN_INACTIVITY_MINUTES = data.get("TOKEN_INACTIVITY_MINUTES", 15)

    # Backup files
    BACKUP_APPLICATION = data.get("BACKUP_APPLICATION", "ai-prewedding-photographer")
    BACKUP_FORMAT_VERSION = data.get("BACKUP_FORMAT_VERSION", "1.0")

    # Fallback credential for the external generative API
    GENERATIVE_API_KEY = data.get("GENERATIVE_API_KEY", os.environ.get("GEMINI_API_KEY", ""))
