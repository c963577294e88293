"""Logging setup for the back office.

Each ``log_level_*`` setting governs a group of loggers, so outbound HTTP
chatter can be turned down while request lifecycle and notification
traces stay visible. ``setup_logging()`` runs once from the app lifespan.
"""

import logging
import sys

from flowtap.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"

# Settings field → logger names it governs
LOGGER_GROUPS: dict[str, tuple[str, ...]] = {
    "log_level_http": ("httpx", "httpcore", "flowtap.infrastructure.http"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_lifecycle": (
        "flowtap.application.services.request_lifecycle",
        "flowtap.application.services.mutation_rules",
        "flowtap.application.services.entity_store",
    ),
    "log_level_notifications": (
        "flowtap.application.services.notification_bridge",
        "flowtap.infrastructure.notifications",
    ),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply root and per-group levels; returns the level set for each group."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for field_name, logger_names in LOGGER_GROUPS.items():
        level = _parse_level(getattr(settings, field_name))
        applied[field_name] = level
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Log levels: root=%s %s",
        settings.log_level,
        " ".join(f"{k.removeprefix('log_level_')}={logging.getLevelName(v)}" for k, v in applied.items()),
    )
    return applied


def _parse_level(raw: str) -> int:
    """Level name → logging constant; unknown names fall back to INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
