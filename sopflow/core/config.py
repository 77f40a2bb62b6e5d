"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend-specific requirements (e.g. DATABASE_URL for
postgres) are validated at load time.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; validate_backend_and_security enforces the
    combinations that need extra values.
    """

    # App
    app_name: str = "sopflow"
    app_version: str = "1.0.0"
    debug: bool = False

    # Storage: "memory" (process-local, default) or "postgres" (SQLAlchemy + Alembic)
    database_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Security (JWT carrying the actor context)
    secret_key: SecretStr = SecretStr("dev-secret-change-me")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    rate_limit_enabled: bool = True

    # Templates
    seed_builtin_templates: bool = True
    # Apply variant exclusion rules (gbp_only: no website tasks; rank_rent: no owner approval)
    enforce_variant_exclusions: bool = True

    # Default due dates when a workflow is created without one
    default_due_days: int = Field(default=7, gt=0)
    suspension_recovery_due_days: int = Field(default=3, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backend_and_security(self) -> "Settings":
        """Validate storage backend and secret.

        - Postgres: DATABASE_URL required.
        - Any backend: SECRET_KEY must be non-empty.
        """
        if self.database_backend == "postgres":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when database_backend is 'postgres'. "
                    "Set in environment or .env file."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'memory' or 'postgres', got: {self.database_backend!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
