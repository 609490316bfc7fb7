"""Application configuration from environment."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PASSWORD_SALT = "default_salt_change_in_production"


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "KOReader Sync Server"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./kosync.db"

    # Appended to every password before hashing and verification
    password_salt: str = DEFAULT_PASSWORD_SALT
    password_hash_rounds: int = 12

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # json | text


def get_settings() -> Settings:
    return Settings()


# Package dir holding templates/ and static/
BASE_DIR = Path(__file__).resolve().parent.parent
