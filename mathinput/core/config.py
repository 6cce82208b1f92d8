"""
Kernel configuration.

Centralized settings for the ambient concerns of the kernel (logging).
Values are passed explicitly; nothing is read from the environment.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, field_validator


class Settings(BaseModel):
    """Kernel settings"""

    model_config = ConfigDict(frozen=True)

    # Logging
    LOGGER_NAME: str = "mathinput"
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text

    @field_validator("LOG_LEVEL")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def _validate_format(cls, value: str) -> str:
        if value not in {"json", "text"}:
            raise ValueError(f"Unknown log format: {value}")
        return value


@lru_cache()
def get_settings() -> Settings:
    """Get cached default settings instance"""
    return Settings()


# Default settings instance
settings = get_settings()
