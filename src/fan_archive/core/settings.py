"""Application settings and configuration.

This module defines all configuration options for the Fan Archive application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a `.env` file.
    """

    # Application metadata
    app_name: str = Field(default="Fan Archive", alias="APP_NAME")
    environment: str = Field(default="development", alias="NODE_ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # HTTP server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5000, alias="PORT")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # Database configuration
    database_url: str = Field(default="sqlite:///./fan_archive.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=False, alias="AUTO_CREATE_TABLES")

    # Media uploads and the built frontend
    upload_dir: str = Field(default="uploads", alias="UPLOAD_DIR")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")
    static_dir: str = Field(default="dist/public", alias="STATIC_DIR")

    # Catalog paging
    fanworks_default_limit: int = Field(default=20, alias="FANWORKS_DEFAULT_LIMIT")
    fanworks_max_limit: int = Field(default=100, alias="FANWORKS_MAX_LIMIT")

    # Keep-alive ping (keeps free-tier hosts from idling the process)
    keepalive_enabled: bool = Field(default=False, alias="KEEPALIVE_ENABLED")
    keepalive_url: str | None = Field(default=None, alias="KEEPALIVE_URL")
    external_url: str | None = Field(default=None, alias="RENDER_EXTERNAL_URL")
    keepalive_interval_seconds: float = Field(
        default=14 * 60,
        alias="KEEPALIVE_INTERVAL_SECONDS",
    )
    keepalive_timeout_seconds: float = Field(default=10.0, alias="KEEPALIVE_TIMEOUT_SECONDS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs and driverless Postgres URLs to psycopg, the
        only Postgres driver installed, for the engine and Alembic.
        """
        url = self.database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+psycopg://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+psycopg://", 1)
        return url

    @property
    def keepalive_target(self) -> str:
        """Return the URL pinged by the keep-alive worker."""
        if self.keepalive_url:
            return self.keepalive_url
        base = self.external_url or f"http://localhost:{self.port}"
        return f"{base.rstrip('/')}/health"


settings = Settings()  # type: ignore[call-arg]
