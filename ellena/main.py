"""Console entry point: logging bootstrap, then the Typer app."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .cli import app
from .config import Settings, get_settings

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

# Client libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "neo4j", "openai", "google_genai")

_HANDLER_NAME = "ellena"


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.setLevel(logging.DEBUG)
    return handler


def _console_handler() -> logging.Handler:
    """stderr gets WARNING+ only, so command output stays clean."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handler.setLevel(logging.WARNING)
    return handler


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Attach the rotating file and stderr handlers to the root logger.

    Level and file come from ELLENA_LOG_LEVEL / ELLENA_LOG_FILE. Settings that
    fail to load fall back to INFO and ./data/ellena.log. Calling this again
    replaces the handlers it installed earlier instead of stacking them.
    """
    if settings is None:
        try:
            settings = get_settings()
        except Exception as e:
            print(f"Warning: Failed to load settings for logging: {e}", file=sys.stderr)
    log_file = settings.log_file if settings else Path("data/ellena.log")
    log_level = settings.log_level if settings else "INFO"

    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(handler)
        handler.close()

    for handler in (_file_handler(log_file), _console_handler()):
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)
    root.setLevel(getattr(logging, log_level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def main() -> None:
    """Main entry point for the ellena command."""
    setup_logging()
    app()


if __name__ == "__main__":
    main()
