import logging
import logging.config
from abc import ABC
from pathlib import Path
from typing import Any

import orjson
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class BaseSettingsLS(BaseSettings, ABC):
    # Set prefix
    model_config = SettingsConfigDict(env_prefix='ls_')


class ReaderConfig(BaseSettingsLS):
    # Number of characters fetched from the source stream per fill
    buffer_size: int = 8192

    logging_config: Path | None = Field(default=None,
                                        description="Path to the logging configuration file")

    @field_validator("buffer_size")
    @classmethod
    def check_buffer_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"Buffer size must be strictly positive, got {value}")
        return value


# logging
DEFAULT_LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)8s] - %(name)s@%(funcName)s: %(message)s"
        }
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": "ext://sys.stderr"
        },
    },
    "loggers": {
        "line_sequence": {
            "handlers": ["console"],
            "level": "INFO"
        }
    }
}


def configure_logging(config: ReaderConfig | None = None) -> None:
    """
    Apply the logging configuration named by `config.logging_config`, a JSON `dictConfig` file,
    or `DEFAULT_LOGGING_CONFIG` when none is set.

    The readers never configure logging themselves; this is meant to be called once by the
    application embedding them, before any reader is created.
    """
    config = config or ReaderConfig()

    if config.logging_config:
        with config.logging_config.open() as f:
            json_config = orjson.loads(f.read())
            logging.config.dictConfig(json_config)
    else:
        logging.config.dictConfig(DEFAULT_LOGGING_CONFIG)
        logger.info("Default logging configuration used")
