import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator
from rich.console import Console
from rich.logging import RichHandler

from .core import DEFAULT_DOWNLOAD_BASE_URL

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class StoreSettings(BaseModel):
    currency: str = "$"
    download_base_url: str = DEFAULT_DOWNLOAD_BASE_URL
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {v}")
        return level


def load_settings(env_file: Optional[str] = None) -> StoreSettings:
    """Read settings from the environment, after loading a .env file if present."""
    load_dotenv(env_file)
    values = {
        "currency": os.getenv("PYSTORE_CURRENCY"),
        "download_base_url": os.getenv("PYSTORE_DOWNLOAD_BASE_URL"),
        "log_level": os.getenv("PYSTORE_LOG_LEVEL"),
    }
    return StoreSettings(**{k: v for k, v in values.items() if v})


def configure_logging(level: str = "WARNING") -> None:
    # log to stderr so records never interleave with the menu on stdout
    logging.basicConfig(
        level=level,
        format="%(name)s - %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
