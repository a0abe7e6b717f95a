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


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Static CMS API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./static_cms.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Static generation (paths relative to the working directory)
    static_output_dir: str = "html"
    themes_dir: str = str(_BACKEND_DIR / "templates")
    static_url_segment: str = "html"
    mount_static_output: bool = True

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_build: str = "INFO"            # StaticBuildService pipeline
    log_level_templates: str = "WARNING"     # Jinja rendering / theme lookup

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Normalise the static URL segment so it never carries slashes."""
        segment = self.static_url_segment.strip("/")
        if segment != self.static_url_segment:
            _config_logger.debug("Normalised static_url_segment to '%s'", segment)
            object.__setattr__(self, "static_url_segment", segment)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
