"""Tool configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Ranges (keep count, bcrypt cost) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# bcrypt cost below this is considered too cheap for stored credentials
MIN_BCRYPT_ROUNDS = 10


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    Every setting has a default suitable for a local MongoDB, so the
    commands run without any environment configured.
    """

    # App
    app_name: str = "prehistoric-vr-database"
    app_version: str = "1.0.0"
    debug: bool = False

    # Store: the URI normally names the database; mongodb_database is the
    # fallback when it does not (e.g. "mongodb://host:27017/").
    mongodb_uri: str = "mongodb://localhost:27017/prehistoric_vr"
    mongodb_database: str = "prehistoric_vr"
    mongodb_server_selection_timeout_ms: int = 5000

    # Backups
    backup_dir: str = "backups"
    backup_keep_count: int = 5

    # Administrative account provisioned by the migration
    admin_email: str = "admin@prehistoricvr.com"
    admin_password: SecretStr = SecretStr("admin123456")
    bcrypt_rounds: int = MIN_BCRYPT_ROUNDS

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_ranges(self) -> "Settings":
        """Validate numeric ranges and required strings."""
        if not self.mongodb_uri:
            raise ValueError("MONGODB_URI must not be empty.")
        if self.backup_keep_count < 1:
            raise ValueError(
                f"BACKUP_KEEP_COUNT must be >= 1, got: {self.backup_keep_count}"
            )
        if self.bcrypt_rounds < MIN_BCRYPT_ROUNDS:
            raise ValueError(
                f"BCRYPT_ROUNDS must be >= {MIN_BCRYPT_ROUNDS}, got: {self.bcrypt_rounds}"
            )
        if self.mongodb_server_selection_timeout_ms < 1:
            raise ValueError("MONGODB_SERVER_SELECTION_TIMEOUT_MS must be positive.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
