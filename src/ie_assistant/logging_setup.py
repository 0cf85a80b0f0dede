"""
Logging configuration.

The terminal belongs to the UI, so records only go to a file. Without a log
file they are discarded.
"""
import logging

from ie_assistant.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    if settings.log_file:
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    else:
        handler = logging.NullHandler()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )
