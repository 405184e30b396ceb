"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AuthSettings(BaseSettings):
    """Session token and password hashing configuration"""

    jwt_secret: str = Field(default="dev-jwt-secret-change-me")
    jwt_algorithm: str = Field(default="HS256")
    token_ttl_seconds: int = Field(default=7 * 24 * 3600, ge=60)
    bcrypt_rounds: int = Field(default=10, ge=4, le=16)
    cookie_name: str = Field(default="token")
    id_allocation_attempts: int = Field(default=3, ge=1, le=10)

    model_config = {"env_prefix": "AUTH_"}


class NavigationSettings(BaseSettings):
    """Route calculation and deviation detection configuration"""

    default_walking_speed: float = Field(default=5.0, gt=0, description="Walking speed in km/h")
    deviation_threshold_m: float = Field(default=50.0, gt=0)
    stop_penalty_seconds: int = Field(default=120, ge=0)
    personalized_max_exhibits: int = Field(default=5, ge=1, le=50)
    minutes_per_exhibit: int = Field(default=10, ge=1)
    default_map_url: str = Field(default="/maps/1/route.png")
    personalized_map_url: str = Field(default="/maps/1/personalized_route.png")

    model_config = {"env_prefix": "NAV_"}


class StorageSettings(BaseSettings):
    """Persistence configuration. Without a database URL the in-memory mock store is used."""

    database_url: Optional[str] = Field(default=None, description="SQLAlchemy async URL")
    echo_sql: bool = Field(default=False)
    seed_mock_data: bool = Field(default=True)
    mock_admin_password: str = Field(default="Password123!")

    @property
    def use_mock_data(self) -> bool:
        return not self.database_url

    model_config = {"env_prefix": "STORAGE_"}


class RedisSettings(BaseSettings):
    """Redis configuration (shared token revocation store)"""

    enabled: bool = Field(default=False)
    host: str = Field(default="redis")
    port: int = Field(default=6379, ge=1, le=65535)
    password: Optional[str] = Field(default=None)
    db: int = Field(default=0, ge=0, le=15)
    key_prefix: str = Field(default="museum_nav:revoked:")

    @property
    def url(self) -> str:
        """Generate Redis URL from configuration"""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"

    model_config = {"env_prefix": "REDIS_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Museum Navigation Backend")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)
    api_prefix: str = Field(default="/v1")

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")

    # Nested Settings
    auth: AuthSettings = Field(default_factory=AuthSettings)
    navigation: NavigationSettings = Field(default_factory=NavigationSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
