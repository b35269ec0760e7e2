"""Configuration management utilities for the advocate directory.

All settings come from environment variables with sensible defaults so the
tools work out of the box.  The one exception is ``DATABASE_URL``: the API
cannot serve anything without it, so a missing value is reported as a
``ConfigurationError`` at startup rather than on the first request.
"""

import os as _os


class ConfigurationError(RuntimeError):
    """Fatal misconfiguration detected at process start."""


class AppConfig:
    """Application-level configuration loaded from environment variables.

    Environment variables:
        DATABASE_URL: Connection string for the advocates database (required by the API)
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_LOG_LEVEL: Root log level (default: INFO)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
        ADVOCATES_URL: Records endpoint used by the terminal front end
        ADVOCATES_TIMEOUT: Request timeout in seconds for that endpoint (default: 30)
    """

    def __init__(self) -> None:
        self.database_url: str | None = _os.getenv("DATABASE_URL") or None
        self.api_port = int(_os.getenv("APP_PORT", "8000"))
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        self.log_level = _os.getenv("APP_LOG_LEVEL", "INFO").upper()
        raw_origins = _os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )
        self.advocates_url = _os.getenv(
            "ADVOCATES_URL", f"http://{self.api_host}:{self.api_port}/api/advocates"
        )
        self.request_timeout = float(_os.getenv("ADVOCATES_TIMEOUT", "30"))

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()

    def require_database_url(self) -> str:
        """Return DATABASE_URL or raise ConfigurationError if it is unset."""
        if not self.database_url:
            raise ConfigurationError(
                "DATABASE_URL is not set. Please configure your environment variables."
            )
        return self.database_url
