"""Pydantic Settings — loads configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    log_level: str = "INFO"
    log_format: str = "json"

    fetch_timeout_seconds: float = 12.0
    max_html_bytes: int = 1024 * 1024
    max_redirects: int = 5
    user_agent: str = "site-audit-scanner/0.1 (+https://example.com/scanner)"
    accept_header: str = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

    cors_allow_origins: str = ""

    def cors_origins(self) -> list[str]:
        """Split the comma-separated CORS origin list."""
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
