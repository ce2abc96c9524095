"""
cachebridge Configuration

Configuration management with environment variable support.
Implements secure defaults and validation for all settings.
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Cache bridge settings with validation and secure defaults."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # Environment settings
    ENVIRONMENT: str = Field(
        default="development", description="Application environment"
    )

    # Redis configuration
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )
    REDIS_MAX_CONNECTIONS: int = Field(
        default=10, ge=1, le=50, description="Redis connection pool size"
    )
    REDIS_CONNECTION_TIMEOUT: float = Field(
        default=5.0, gt=0, description="Redis connect timeout in seconds"
    )
    REDIS_OPERATION_TIMEOUT: float = Field(
        default=5.0, gt=0, description="Redis socket timeout in seconds"
    )

    # Cache configuration
    CACHE_PREFIX: str = Field(
        default="cachebridge:", description="Namespace prepended to every store key"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_JSON: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v

    @field_validator("REDIS_URL")
    @classmethod
    def validate_redis_url(cls, v):
        """Validate Redis URL scheme."""
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("REDIS_URL must be a redis://, rediss:// or unix:// URL")
        return v

    @field_validator("CACHE_PREFIX")
    @classmethod
    def validate_cache_prefix(cls, v):
        """Validate cache prefix."""
        if any(char.isspace() for char in v):
            raise ValueError("CACHE_PREFIX cannot contain whitespace")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    # Alias properties for snake_case usage
    @property
    def redis_url(self) -> str:
        """Alias for REDIS_URL."""
        return self.REDIS_URL

    @property
    def redis_max_connections(self) -> int:
        """Alias for REDIS_MAX_CONNECTIONS."""
        return self.REDIS_MAX_CONNECTIONS

    @property
    def cache_prefix(self) -> str:
        """Alias for CACHE_PREFIX."""
        return self.CACHE_PREFIX

    @property
    def log_level(self) -> str:
        """Alias for LOG_LEVEL."""
        return self.LOG_LEVEL


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
