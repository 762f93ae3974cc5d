"""
Runtime configuration read from the environment and an optional ``.env`` file.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

import dotenv

# Load environment variables
dotenv.load_dotenv()

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@dataclass(frozen=True)
class Config:
    """
    Settings that are not part of a chat request.

    Attributes:
        openai_base_url: Root of the OpenAI-compatible API.
        timeout: Request timeout in seconds; None waits indefinitely.
        log_level: Level name applied by ``configure_logging``.
    """
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    timeout: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Config":
        timeout = os.getenv("CHATRELAY_TIMEOUT")
        return cls(
            openai_base_url=os.getenv("OPENAI_BASE_URL") or DEFAULT_OPENAI_BASE_URL,
            timeout=float(timeout) if timeout else None,
            log_level=(os.getenv("CHATRELAY_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Calling it again only updates the level.

    Args:
        level: Level name; defaults to ``CHATRELAY_LOG_LEVEL``.

    Returns:
        logging.Logger: The ``chatrelay`` logger.
    """
    level = (level or Config.from_env().log_level).upper()
    logger = logging.getLogger("chatrelay")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
