"""
Configuration settings for the script visualization client.
"""

import os
import logging.config
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from rich.console import Console

from scriptvision.errors import ConfigurationError

# Model defaults
PROMPT_GENERATION_MODEL = "gemini-2.5-flash"
IMAGE_GENERATION_MODEL = "imagen-3.0-generate-002"

# Image Generation Settings
IMAGE_GENERATION = {
    "number_of_images": 1,
    "output_mime_type": "image/jpeg",
    "include_rai_reason": True,
}


@dataclass(frozen=True)
class GeminiConfig:
    """Credentials and model selection for the Gemini API."""

    api_key: str
    prompt_model: str = PROMPT_GENERATION_MODEL
    image_model: str = IMAGE_GENERATION_MODEL

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("API_KEY environment variable not set")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "GeminiConfig":
        """Build a config from the process environment.

        Args:
            env_file: Optional .env path; defaults to the nearest .env at or
                above the working directory

        Returns:
            GeminiConfig: Validated configuration

        Raises:
            ConfigurationError: If neither API_KEY nor GEMINI_API_KEY is set
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))
        api_key = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise ConfigurationError("API_KEY environment variable not set")

        return cls(
            api_key=api_key,
            prompt_model=os.getenv("PROMPT_GENERATION_MODEL", PROMPT_GENERATION_MODEL),
            image_model=os.getenv("IMAGE_GENERATION_MODEL", IMAGE_GENERATION_MODEL),
        )

    def __repr__(self) -> str:
        return (
            f"GeminiConfig(api_key='***', prompt_model={self.prompt_model!r}, "
            f"image_model={self.image_model!r})"
        )


def build_logging_config(level: Optional[str] = None,
                         log_file: Optional[str] = None,
                         console: Optional[Console] = None) -> Dict[str, Any]:
    """
    Build the dictConfig used by the command line entry point.

    Args:
        level: Root log level, defaults to LOG_LEVEL or INFO
        log_file: Optional log file, defaults to LOG_FILE
        console: Rich console to log through, so records render above live
            progress displays on the same console
    """
    level = level or os.getenv("LOG_LEVEL", "INFO")
    log_file = log_file or os.getenv("LOG_FILE")

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
            },
            "rich": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "console": {
                "class": "rich.logging.RichHandler",
                "formatter": "rich",
                "rich_tracebacks": True,
            }
        },
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": level,
                "propagate": True
            },
            # SDK transport chatter
            "httpx": {
                "level": "WARNING"
            }
        }
    }

    if console is not None:
        config["handlers"]["console"]["console"] = console

    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "filename": log_file,
            "formatter": "standard",
        }
        config["loggers"][""]["handlers"].append("file")

    return config


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None,
                      console: Optional[Console] = None) -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(build_logging_config(level, log_file, console))
