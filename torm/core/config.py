# torm/core/config.py
"""Runtime settings loaded from the environment (and an optional .env file)."""

import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

_TRUE_VALUES = {"1", "true", "yes", "on"}
HANDLER_NAME = "torm"


class Settings(BaseModel):
    """Settings for the database connection and logging."""

    database_url: str = "sqlite:///./torm.db"
    echo_sql: bool = False
    log_level: str = "WARNING"

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Database URL cannot be empty")
        return v.strip()

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """Build settings from TORM_* environment variables."""
        load_dotenv(dotenv_path)
        return cls(
            database_url=os.getenv("TORM_DATABASE_URL", "sqlite:///./torm.db"),
            echo_sql=os.getenv("TORM_ECHO_SQL", "false").lower() in _TRUE_VALUES,
            log_level=os.getenv("TORM_LOG_LEVEL", "WARNING"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Attach a stream handler to the ``torm`` logger at the configured level."""
    settings = settings or get_settings()
    logger = logging.getLogger("torm")
    logger.setLevel(settings.log_level)

    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)

    return logger
