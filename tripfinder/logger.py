"""
Logging configuration for the trip finder.
"""
import logging
from colorama import init, Fore, Style

# Initialize Colorama (required on Windows)
init(autoreset=True)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLOURS = {
    logging.DEBUG: Style.DIM + Fore.WHITE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Style.BRIGHT + Fore.RED,
}

_default_level = logging.INFO


class ColorFormatter(logging.Formatter):
    """Colours the whole log line according to the record level."""

    def format(self, record: logging.LogRecord) -> str:
        prefix = _LEVEL_COLOURS.get(record.levelno, "")
        formatter = logging.Formatter(prefix + LOG_FORMAT + Style.RESET_ALL, DATE_FORMAT)
        return formatter.format(record)


def get_logger(name: str) -> logging.Logger:
    """
    Create and return a logger with the given name.

    Args:
        name (str): The name of the logger.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(f"tripfinder.{name}")
    logger.setLevel(_default_level)

    # Only add handler if it doesn't already have one
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(ColorFormatter())
        logger.addHandler(console_handler)

    return logger


def set_verbosity(verbose: bool) -> None:
    """Switch every trip finder logger between INFO and DEBUG."""
    global _default_level
    _default_level = logging.DEBUG if verbose else logging.INFO

    for name, candidate in logging.Logger.manager.loggerDict.items():
        if name.startswith("tripfinder.") and isinstance(candidate, logging.Logger):
            candidate.setLevel(_default_level)
