"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = Field(default="Todos API", validation_alias="APP_NAME")
    env: str = Field(default="development", validation_alias="ENV")

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Redis - read-through cache for users, roles and todos
    redis_url: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
    redis_pool_size: int = Field(default=20, validation_alias="REDIS_POOL_SIZE")
    cache_ttl_seconds: int = Field(default=300, validation_alias="CACHE_TTL_SECONDS")

    # Tokens - JWT_SECRET falls back to APP_KEY when unset
    app_key: str = Field(default="", validation_alias="APP_KEY")
    jwt_secret: str = Field(default="", validation_alias="JWT_SECRET")
    jwt_algorithm: str = "HS256"
    access_token_expire_hours: int = Field(
        default=24, validation_alias="ACCESS_TOKEN_EXPIRE_HOURS",
    )

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @model_validator(mode="after")
    def resolve_jwt_secret(self) -> "Settings":
        """Fall back to APP_KEY for signing tokens; refuse to run with no key at all."""
        if not self.jwt_secret:
            self.jwt_secret = self.app_key
        if not self.jwt_secret:
            raise ValueError("JWT_SECRET or APP_KEY must be set to sign access tokens.")
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
