"""
Centralized configuration management.
All environment variables and settings are defined here.
"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = Field(default="Statement CSV Converter", alias="APP_NAME")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Output
    csv_filename: str = Field(default="amazon_visa.csv", alias="CSV_FILENAME")

    # Uploads
    max_upload_mb: int = Field(default=10, alias="MAX_UPLOAD_MB")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("csv_filename")
    @classmethod
    def validate_csv_filename(cls, v):
        """Output name must be a bare .csv filename."""
        if not v.lower().endswith(".csv"):
            raise ValueError("CSV filename must end with .csv")
        if "/" in v or "\\" in v:
            raise ValueError("CSV filename must not contain a path")
        return v

    @field_validator("max_upload_mb")
    @classmethod
    def validate_max_upload(cls, v):
        if v < 1:
            raise ValueError("Max upload size must be at least 1 MB")
        if v > 100:
            raise ValueError("Max upload size should not exceed 100 MB")
        return v

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
