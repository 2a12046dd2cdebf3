import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_DELETE_POLICIES = frozenset({"block", "cascade"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Milk Collection API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./milk_collection.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Bearer tokens (JWT)
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Password hashing
    bcrypt_rounds: int = 12

    # Initial administrator, created at startup when missing
    bootstrap_admin_username: str = ""
    bootstrap_admin_email: str = ""
    bootstrap_admin_password: str = ""

    # Sign-up may request the ADMIN role (the very first account always may)
    allow_admin_signup: bool = False

    # What happens to a user's milk records when the user is deleted:
    # "block" refuses the delete, "cascade" removes the records first
    user_delete_policy: str = "block"

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_auth: str = "INFO"             # sign-in, tokens, password changes

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Fall back to the safe delete policy when an unknown one is configured."""
        if self.user_delete_policy not in _DELETE_POLICIES:
            _config_logger.warning(
                "Unknown user_delete_policy '%s', using 'block'", self.user_delete_policy
            )
            object.__setattr__(self, "user_delete_policy", "block")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
