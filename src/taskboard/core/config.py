from datetime import timedelta
from functools import lru_cache

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Taskboard API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Logging
    log_user_emails: bool = False  # Keep off in production (GDPR)

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full
    database_command_timeout: float = 5.0

    # Requests
    request_timeout_seconds: float = 5.0
    shutdown_grace_period: int = 30

    # JWT
    jwt_access_secret: str
    jwt_refresh_secret: str
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "taskboard"
    jwt_audience: str = "taskboard-frontend"
    jwt_leeway_seconds: int = 30
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7

    # Auth
    single_session_login: bool = True  # Revoke earlier refresh tokens on every login
    bootstrap_admin_emails: list[str] = []  # Registered as admin instead of employee
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Temporal
    temporal_host: str = "localhost:7233"
    temporal_namespace: str = "default"
    temporal_task_queue: str = "taskboard-jobs"

    # Maintenance (Temporal scheduled workflows)
    refresh_token_retention_hours: int = 24  # Purge ledger rows expired longer than this
    reminder_lead_hours: int = 24  # Remind assignees of tasks due within this window

    # Email (Resend)
    resend_api_key: str | None = None  # If not set, emails are logged but not sent
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10
    app_url: str = "http://localhost:5173"

    @field_validator("jwt_access_secret", "jwt_refresh_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str, info: ValidationInfo) -> str:
        name = info.field_name.upper() if info.field_name else "JWT secret"
        if len(v) < 32:
            raise ValueError(
                f"{name} must be at least 32 characters. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        return v

    @field_validator("jwt_refresh_secret")
    @classmethod
    def validate_distinct_secrets(cls, v: str, info: ValidationInfo) -> str:
        if v == info.data.get("jwt_access_secret"):
            raise ValueError("JWT_REFRESH_SECRET must differ from JWT_ACCESS_SECRET")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards, credentials (the refresh cookie) are always allowed."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("bootstrap_admin_emails")
    @classmethod
    def normalize_bootstrap_admins(cls, v: list[str]) -> list[str]:
        return [email.strip().lower() for email in v if email.strip()]

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def access_token_ttl(self) -> timedelta:
        return timedelta(minutes=self.access_token_expire_minutes)

    @property
    def refresh_token_ttl(self) -> timedelta:
        return timedelta(days=self.refresh_token_expire_days)


@lru_cache
def get_settings() -> Settings:
    return Settings()
