import logging

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseSettings):
    # Application settings
    app_name: str = "VidShare"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./vidshare.db"

    # Security settings
    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 3
    access_token_cookie: str = "access_token"

    # CORS settings
    allowed_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Anonymous view sessions (Redis when configured, in-memory otherwise)
    redis_url: str | None = None
    anonymous_view_ttl_seconds: int = 60 * 60 * 24
    # Honour X-Forwarded-For / X-Real-IP only when running behind a proxy that sets them
    trust_forwarded_for: bool = False

    # Listing limits
    history_page_default: int = 10
    history_page_max: int = 100
    recommended_limit: int = 8

    # Reaction compare-and-swap re-evaluations before giving up
    reaction_cas_attempts: int = Field(default=3, ge=1)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()

if settings.secret_key == DEFAULT_SECRET_KEY:
    logger.warning("Using default SECRET_KEY. This is insecure and should be changed in production!")
