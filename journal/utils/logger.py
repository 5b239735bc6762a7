"""
Logging configuration

All journal modules log under the "journal" logger namespace, so one stdout
handler on that logger formats everything the package emits.
"""
import logging
import sys
from journal.config import get_settings

ROOT_LOGGER = "journal"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root() -> logging.Logger:
    settings = get_settings()
    root = logging.getLogger(ROOT_LOGGER)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    level = settings.LOG_LEVEL.upper() if settings.LOG_LEVEL else None
    root.setLevel(level or (logging.DEBUG if settings.DEBUG else logging.INFO))
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the journal namespace"""
    _configure_root()
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
