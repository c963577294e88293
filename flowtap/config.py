import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "FlowTap Back Office"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Remote business API (the transport collaborator)
    api_base_url: str = "http://localhost:5113/api"
    api_token: str = ""
    api_timeout: float = 30.0  # enforced by the transport only

    # Pagination defaults applied when a list response carries none
    default_page: int = 1
    default_page_limit: int = 10

    # One-shot notifications
    notification_success_title: str = "Success"
    notification_error_title: str = "Error"
    notification_auto_clear: bool = True
    notification_queue_size: int = 100

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_lifecycle: str = "INFO"        # request lifecycle controller
    log_level_notifications: str = "INFO"    # notification bridge / notifiers

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Normalise the API base URL so paths can be appended directly."""
        if self.api_base_url.endswith("/"):
            object.__setattr__(self, "api_base_url", self.api_base_url.rstrip("/"))
            _config_logger.debug("Trimmed trailing slash from api_base_url")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
