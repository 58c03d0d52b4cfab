"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

LOCAL_ORIGIN_REGEX = (
    r"^https?://("
    r"localhost|127\.0\.0\.1|\[::1\]"
    r"|172\.\d{1,3}\.\d{1,3}\.\d{1,3}"
    r"|192\.168\.\d{1,3}\.\d{1,3}"
    r")(:\d+)?$"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Taskboard"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # API
    api_prefix: str = ""
    cors_origin_regex: str = LOCAL_ORIGIN_REGEX

    # Database
    # Unset means a local SQLite file under data_dir
    database_url: str | None = None
    data_dir: Path = Path("data")
    database_pool_size: int = 5
    database_max_overflow: int = 0
    database_pool_timeout: int = 30
    database_busy_timeout_ms: int = 5000

    # AI extraction (xAI, OpenAI-compatible chat completions)
    xai_api_key: SecretStr = SecretStr("")
    xai_base_url: str = "https://api.x.ai/v1"
    xai_model: str = "grok-3-mini"
    xai_timeout: float | None = Field(default=None, gt=0)

    @property
    def resolved_database_url(self) -> str:
        """Database URL with the async driver filled in."""
        if not self.database_url:
            return f"sqlite+aiosqlite:///{self.data_dir / 'tasks.db'}"
        return normalize_database_url(self.database_url)


def normalize_database_url(url: str) -> str:
    """Map plain driver URLs (sqlite:, postgres://) onto their async drivers."""
    if url.startswith("sqlite:"):
        return _normalize_sqlite_url(url)
    scheme, sep, rest = url.partition("://")
    if not sep:
        # Bare path, treat as a SQLite file
        return f"sqlite+aiosqlite:///{url}"
    if scheme in ("postgres", "postgresql"):
        return f"postgresql+asyncpg://{rest}"
    return url


def _normalize_sqlite_url(url: str) -> str:
    """Accept sqlx-style SQLite URLs as well as SQLAlchemy ones.

    ``sqlite:tasks.db``, ``sqlite://tasks.db`` and ``sqlite::memory:`` are all
    valid sqlx URLs. ``sqlite:///x`` keeps its SQLAlchemy meaning (relative
    path ``x``). sqlx query options such as ``mode=rwc`` have no SQLAlchemy
    counterpart and are dropped.
    """
    target, _, query = url[len("sqlite:"):].partition("?")
    has_authority = target.startswith("//")
    if has_authority:
        target = target[2:]

    if target in ("", ":memory:") or "mode=memory" in query.split("&"):
        return "sqlite+aiosqlite://"
    if has_authority and target.startswith("/"):
        return f"sqlite+aiosqlite://{target}"
    # Relative path, or an absolute one written as sqlite:/abs/path
    return f"sqlite+aiosqlite:///{target}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
