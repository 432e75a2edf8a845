"""Application settings and configuration.

This module defines all configuration options for the Townhall application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Townhall", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./townhall.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_schema: bool = Field(default=True, alias="AUTO_CREATE_SCHEMA")

    # Public addresses used to build OAuth redirects
    api_url: str = Field(default="http://localhost:8080", alias="API_URL")
    frontend_origin: str = Field(default="http://localhost:1313", alias="FRONTEND_ORIGIN")

    # GitHub OAuth application
    github_client_id: str = Field(default="", alias="GITHUB_CLIENT_ID")
    github_client_secret: str = Field(default="", alias="GITHUB_CLIENT_SECRET")
    github_oauth_base_url: str = Field(
        default="https://github.com",
        alias="GITHUB_OAUTH_BASE_URL",
    )
    github_api_base_url: str = Field(
        default="https://api.github.com",
        alias="GITHUB_API_BASE_URL",
    )
    github_http_timeout_seconds: float = Field(
        default=10.0,
        alias="GITHUB_HTTP_TIMEOUT_SECONDS",
    )
    github_user_agent: str = Field(default="townhall-api", alias="GITHUB_USER_AGENT")

    # Repository statistics shown by the widget
    github_stats_ttl_seconds: float = Field(default=3600.0, alias="GITHUB_STATS_TTL_SECONDS")
    github_stats_language: str = Field(default="Rust", alias="GITHUB_STATS_LANGUAGE")
    # Roughly 53 bytes per line of Rust, measured against real line counts.
    github_stats_bytes_per_line: int = Field(default=53, alias="GITHUB_STATS_BYTES_PER_LINE")
    github_stats_packages_dir: str = Field(default="crates", alias="GITHUB_STATS_PACKAGES_DIR")
    github_stats_extra_packages: int = Field(default=2, alias="GITHUB_STATS_EXTRA_PACKAGES")

    # CORS configuration for the comment widget
    cors_origins: list[str] = Field(
        default=["http://localhost:1313"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
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
    def github_callback_url(self) -> str:
        """Return the OAuth callback address registered with GitHub."""
        return f"{self.api_url.rstrip('/')}{self.api_prefix}/auth/callback"

    @property
    def allowed_redirect_origins(self) -> set[str]:
        """Return the origins a login flow may redirect back to."""
        origins = {self.frontend_origin.rstrip("/")}
        origins.update(origin.rstrip("/") for origin in self.cors_origins if origin != "*")
        return origins


settings = Settings()  # type: ignore[call-arg]
