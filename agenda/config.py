"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    # Application
    app_name: str = Field(default="Agenda Nail Studio", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")

    # Server
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    # Database (single local SQLite file)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./appointments.db",
        alias="DATABASE_URL",
    )

    # Firebase
    firebase_credentials_path: str | None = Field(
        default=None,
        alias="FIREBASE_CREDENTIALS_PATH",
        description="Path to Firebase service account JSON file",
    )

    firebase_config_json: str | None = Field(
        default=None,
        alias="FIREBASE_CONFIG_JSON",
        description="Raw JSON string of the Firebase service account",
    )

    # Devices that receive the studio's reminders
    device_tokens_str: str = Field(default="", alias="FCM_DEVICE_TOKENS")

    @property
    def device_tokens(self) -> list[str]:
        """Get FCM device tokens as a list."""
        return [token.strip() for token in self.device_tokens_str.split(",") if token.strip()]

    # Reminders
    next_day_reminder_hour: int = Field(default=21, ge=0, le=23, alias="NEXT_DAY_REMINDER_HOUR")
    next_day_reminder_minute: int = Field(
        default=0, ge=0, le=59, alias="NEXT_DAY_REMINDER_MINUTE"
    )
    next_day_reminder_dedupe: bool = Field(default=True, alias="NEXT_DAY_REMINDER_DEDUPE")
    daily_reminder_hour: int = Field(default=20, ge=0, le=23, alias="DAILY_REMINDER_HOUR")
    daily_reminder_minute: int = Field(default=0, ge=0, le=59, alias="DAILY_REMINDER_MINUTE")
    follow_up_days: int = Field(default=28, ge=1, alias="FOLLOW_UP_DAYS")
    follow_up_hour: int = Field(default=9, ge=0, le=23, alias="FOLLOW_UP_HOUR")

    # Client messaging
    phone_country_code: str = Field(default="57", alias="PHONE_COUNTRY_CODE")

    # Calendar
    calendar_locale: str = Field(default="es", alias="CALENDAR_LOCALE")

    # CORS
    cors_origins_str: str = Field(
        default="http://localhost:8081",
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        if isinstance(self.cors_origins_str, str):
            return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]
        return [self.cors_origins_str]

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
