"""Per-category logging for the structure service.

Each category is one ``log_level_*`` setting covering a group of loggers.
The hierarchy category is nested inside the services one, so
``LOG_LEVEL_SERVICES=WARNING`` with ``LOG_LEVEL_HIERARCHY=DEBUG`` keeps the
depth-guard and cycle traces while muting routine CRUD messages.

Usage:
    from orgstructure.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from orgstructure.config import Settings, get_settings

_PACKAGE = "orgstructure"

LOG_CATEGORIES: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_services": (f"{_PACKAGE}.application.services",),
    "log_level_hierarchy": (f"{_PACKAGE}.application.services.hierarchy_manager",),
    "log_level_seeder": (
        f"{_PACKAGE}.application.services.structure_type_seeder",
        f"{_PACKAGE}.main",
    ),
    "log_level_api": (f"{_PACKAGE}.presentation",),
}

_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the configured levels and return them keyed by logger name.

    The root logger gets ``log_level``. A stderr handler is installed only
    when nothing (uvicorn, pytest) has attached one yet.
    """
    settings = settings or get_settings()
    unknown: list[str] = []

    def level_of(field: str) -> int:
        raw = getattr(settings, field)
        level = logging.getLevelName(raw.strip().upper())
        if isinstance(level, int):
            return level
        unknown.append(f"{field}={raw!r}")
        return logging.INFO

    root = logging.getLogger()
    root.setLevel(level_of("log_level"))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for field, logger_names in LOG_CATEGORIES.items():
        level = level_of(field)
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    log = logging.getLogger(__name__)
    if unknown:
        log.warning("Unknown log levels, using INFO: %s", ", ".join(unknown))
    log.debug(
        "Logging configured: %s",
        ", ".join(f"{field}={getattr(settings, field)}" for field in LOG_CATEGORIES),
    )
    return applied
