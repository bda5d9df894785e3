import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Prevent multiple configurations
_CONFIGURED = False

_LEVELS = {"DEBUG": logging.DEBUG, "INFO": logging.INFO, "WARN": logging.WARNING, "ERROR": logging.ERROR}


def configure_logging(home: Path | None = None, level: str = "INFO") -> None:
    """Configure unified rtlfix logging.

    Args:
        home: Path to the rtlfix home directory. If None, derived from environment.
        level: One of DEBUG, INFO, WARN, ERROR.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    if home is None:
        from ..api.config.get_home_dir import get_home_dir

        home = get_home_dir()

    home.mkdir(parents=True, exist_ok=True)
    log_file = home / "rtlfix.log"

    root_logger = logging.getLogger("rtlfix")
    root_logger.setLevel(_LEVELS.get(level.upper(), logging.INFO))

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,  # 5MB * 3
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    _CONFIGURED = True


def reset_logging() -> None:
    """Drop the handlers installed by configure_logging (used when RTLFIX_HOME changes)."""
    global _CONFIGURED
    root_logger = logging.getLogger("rtlfix")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    _CONFIGURED = False

