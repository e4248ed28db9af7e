"""Environment configuration for Spotify Cleaner.

Values are read once at startup from the process environment (and a local
``.env`` file, if present) and never mutated afterwards.
"""

import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv
from loguru import logger

from spotifycleaner.errors import ConfigurationError

REQUIRED_ENV_VARS = ["SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET", "BASE_URL"]

CALLBACK_PATH = "/callback"


@dataclass(frozen=True)
class Settings:
    """Client configuration shared read-only by every request."""

    client_id: str
    client_secret: str
    base_url: str
    log_level: str = "INFO"

    @property
    def redirect_uri(self) -> str:
        return f"{self.base_url}{CALLBACK_PATH}"

    def __repr__(self) -> str:
        return f"Settings(client_id={self.client_id!r}, client_secret='***', base_url={self.base_url!r})"


def load_settings(dotenv: bool = True) -> Settings:
    """Load settings from the environment.

    Args:
        dotenv: Whether to read a ``.env`` file first (existing env vars win)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If any required variable is unset or empty
    """
    if dotenv:
        load_dotenv()

    values = {name: os.getenv(name, "").strip() for name in REQUIRED_ENV_VARS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigurationError(missing)

    return Settings(
        client_id=values["SPOTIFY_CLIENT_ID"],
        client_secret=values["SPOTIFY_CLIENT_SECRET"],
        base_url=values["BASE_URL"].rstrip("/"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level)
