"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables from .env (for local development)
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Runtime configuration for the API process."""

    project_name: str = field(
        default_factory=lambda: os.getenv("PROJECT_NAME", "Garage Maintenance API")
    )
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "0.1.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Any SQLAlchemy URL. Relative SQLite paths resolve against the working directory.
    database_url: str = field(
        default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///./garage.db")
    )
    sql_echo: bool = field(default_factory=lambda: _env_flag("SQL_ECHO"))


def get_settings() -> Settings:
    return Settings()
