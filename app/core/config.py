"""Application configuration from environment."""
import enum

from pydantic_settings import BaseSettings


class AuthPolicy(str, enum.Enum):
    """Whether a caller without identity may play."""

    ANONYMOUS = "anonymous"
    REQUIRED = "required"


class ExclusionScope(str, enum.Enum):
    """Whose guess history removes passages from the next-question pool."""

    SESSION = "session"
    USER = "user"


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Human or AI?"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./human_or_ai.db"
    db_retry_attempts: int = 3
    db_retry_base_delay: float = 0.1  # seconds
    db_retry_max_delay: float = 2.0

    # JWT issued by the identity provider; only `sub` is read
    secret_key: str = "change-me-in-production-use-env"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Game rules
    auth_policy: AuthPolicy = AuthPolicy.ANONYMOUS
    exclusion_scope: ExclusionScope = ExclusionScope.SESSION

    seed_on_startup: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
