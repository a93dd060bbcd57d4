"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tenancy.domain.enforcement_mode import resolve_mode
from tenancy.domain.value_objects import EnforcementMode, GuardMode


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Only used when tenancy warnings are persisted (TENANCY_WARN_PERSIST=true).

    Environment variables:
        TENANCY_DB_HOST: Database host (default: localhost)
        TENANCY_DB_PORT: Database port (default: 5432)
        TENANCY_DB_DATABASE: Database name (default: tenancy)
        TENANCY_DB_USERNAME: Database user (default: tenancy)
        TENANCY_DB_PASSWORD: Database password (required in production)
        TENANCY_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        TENANCY_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANCY_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="tenancy", description="Database name")
    username: str = Field(default="tenancy", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class TenancySettings(BaseSettings):
    """Tenancy enforcement settings.

    Environment variables:
        TENANCY_ENFORCEMENT: off | soft | strict (default: off, anything else is off)
        TENANCY_WARN_PERSIST: Persist warnings to the database (default: false)
        TENANCY_GUARD_MODE: warn | throw | off for development guard rails
        TENANCY_WARNING_BUFFER_SIZE: In-memory warning buffer bound (default: 1000)
        TENANCY_STRICT_READINESS_THRESHOLD: Warnings per 24h tolerated before
            strict mode is reported as not ready (default: 5)
        TENANCY_SUPER_USER_ROLE: Role granting cross-tenant access (default: super_user)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enforcement: str = Field(
        default="off",
        description="Raw tenancy enforcement mode",
    )
    warn_persist: bool = Field(
        default=False,
        description="Persist tenancy warnings to the database",
    )
    guard_mode: GuardMode = Field(
        default=GuardMode.WARN,
        description="Behaviour of the development guard rails",
    )
    warning_buffer_size: int = Field(
        default=1000,
        description="Capacity of the in-memory warning buffer",
        ge=1,
        le=100_000,
    )
    strict_readiness_threshold: int = Field(
        default=5,
        description="Maximum warnings in the last 24 hours before strict is blocked",
        ge=0,
    )
    super_user_role: str = Field(
        default="super_user",
        description="Role that bypasses tenant scoping",
    )

    @property
    def enforcement_mode(self) -> EnforcementMode:
        """Resolve the raw enforcement value into a mode."""
        return resolve_mode(self.enforcement)

    @property
    def enforcement_recognized(self) -> bool:
        """Whether the raw enforcement value names a known mode."""
        return self.enforcement.lower() in {mode.value for mode in EnforcementMode}


class Settings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Tenancy Gate API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings.

    The enforcement mode is therefore resolved once per process.
    """
    return TenancySettings()
