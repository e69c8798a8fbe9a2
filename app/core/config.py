from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.validation.messages import SUPPORTED_LOCALES


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")

    # Application
    app_name: str = Field(default="user-service", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Locale used for validation messages ("en" or "id")
    validation_locale: str = Field(default="en", alias="VALIDATION_LOCALE")

    # Frontend URL, enables CORS for its origin when set
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    @field_validator("frontend_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("validation_locale")
    @classmethod
    def check_locale(cls, v: str) -> str:
        locale = v.strip().lower()
        if locale not in SUPPORTED_LOCALES:
            raise ValueError(f"VALIDATION_LOCALE must be one of {sorted(SUPPORTED_LOCALES)}")
        return locale

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def is_development(self) -> bool:
        return self.app_env in ("development", "dev")

    @property
    def is_production(self) -> bool:
        return self.app_env in ("production", "prod")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
