"""
Logging setup shared by the RagRouter entry points.
"""

import logging
from typing import Union

from langchain_core.globals import set_debug

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers of the libraries that talk to the model provider
REQUEST_LOGGERS = ("langchain_google_genai", "google_genai", "httpx")


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Configure the root logger and return the package logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger().setLevel(level)
    return logging.getLogger("ragrouter")


def enable_request_logging() -> None:
    """Log every request sent to and response received from the chat model."""
    set_debug(True)
    for name in REQUEST_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG)
    logging.getLogger("ragrouter").debug("Model request logging enabled")
