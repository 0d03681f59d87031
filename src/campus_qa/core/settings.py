"""Application settings and configuration.

This module defines all configuration options for the Campus Q&A service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    The auto-approve flag is deliberately absent: it lives in the
    ``global_settings`` table and is toggled by moderators at runtime.
    """

    # Application metadata
    app_name: str = Field(default="Campus Q&A", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./campus_qa.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Identity provider tokens (HS256 JWTs signed with the provider's secret)
    auth_jwt_secret: str = Field(default="change-me", alias="AUTH_JWT_SECRET")
    auth_jwt_algorithm: str = Field(default="HS256", alias="AUTH_JWT_ALGORITHM")
    auth_jwt_audience: str | None = Field(default=None, alias="AUTH_JWT_AUDIENCE")
    allowed_email_domain: str | None = Field(default=None, alias="ALLOWED_EMAIL_DOMAIN")

    # LLM used by the FAQ generation job
    groq_api_key: str | None = Field(default=None, alias="GROQ_API_KEY")
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        alias="GROQ_BASE_URL",
    )
    groq_model: str = Field(default="llama3-70b-8192", alias="GROQ_MODEL")
    groq_timeout_seconds: float = Field(default=30.0, alias="GROQ_TIMEOUT_SECONDS")

    # Shared secret gating the scheduled FAQ job
    cron_secret: str | None = Field(default=None, alias="CRON_SECRET")
    faq_batch_size: int = Field(default=10, alias="FAQ_BATCH_SIZE")
    faq_lookback_hours: int = Field(default=24, alias="FAQ_LOOKBACK_HOURS")

    # Ranking and moderation queue tuning
    hot_cache_ttl_seconds: float = Field(default=300.0, alias="HOT_CACHE_TTL_SECONDS")
    hot_window_days: int = Field(default=7, alias="HOT_WINDOW_DAYS")
    hot_fetch_limit: int = Field(default=100, alias="HOT_FETCH_LIMIT")
    search_fetch_limit: int = Field(default=100, alias="SEARCH_FETCH_LIMIT")
    stale_pending_hours: float = Field(default=2.0, alias="STALE_PENDING_HOURS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
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

        Strips async driver suffixes so Alembic migrations run against the
        same database as the application.
        """
        url = self.effective_database_url
        for async_driver in ("+asyncpg", "+aiosqlite"):
            url = url.replace(async_driver, "", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def faq_enabled(self) -> bool:
        """Return True when an LLM API key is configured."""
        return bool(self.groq_api_key)


settings = Settings()
