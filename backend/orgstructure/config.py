from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Organizational Structure API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./data/orgstructure.db"
    cors_origins: list[str] = ["http://localhost:4200"]

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 500

    # Hierarchy walks stop after this many levels (guards against corrupted parent links)
    hierarchy_max_depth: int = 64

    # Reference data loaded at startup
    seed_structure_types: bool = True
    structure_types_file: str = str(_BACKEND_DIR / "data" / "structure-types.yaml")

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_services: str = "INFO"         # structure and structure type use cases
    log_level_hierarchy: str = "INFO"        # parent validation and hierarchy walks
    log_level_seeder: str = "INFO"           # startup catalogue loading
    log_level_api: str = "INFO"              # endpoint-level messages (readiness failures)

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
