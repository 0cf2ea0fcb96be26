"""Centralized logging configuration for live_tuner.

Every module obtains its logger through :func:`get_logger`; the command line
entry point calls :func:`setup_logging` once to attach the shared console
handler and apply per-module levels.
"""

import logging
import sys
from typing import Dict, Optional

# Log levels for different modules. Lookup is by longest matching prefix.
MODULE_LOG_LEVELS = {
    "live_tuner": logging.INFO,
    "live_tuner.detection": logging.INFO,  # Set to DEBUG for per-window gate/peak info
    "live_tuner.note_utils": logging.INFO,
    "live_tuner.session": logging.INFO,
    "live_tuner.core": logging.INFO,
    "live_tuner.audio": logging.INFO,
    "live_tuner.cli": logging.WARNING,
    # Libraries/third-party
    "soundfile": logging.ERROR,
    "numpy": logging.ERROR,
    # Root logger
    "": logging.ERROR,
}

# Shared console handler
_console_handler: Optional[logging.Handler] = None

# Cache for loggers to avoid duplicate setup
_logger_cache: Dict[str, logging.Logger] = {}


def _level_for(name: str, levels: Dict[str, int]) -> int:
    best = ""
    for module_name in levels:
        if module_name and (name == module_name or name.startswith(module_name + ".")):
            if len(module_name) > len(best):
                best = module_name
    return levels[best]


def setup_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        level: If provided, override all 'live_tuner' log levels with this level (e.g., "DEBUG").
    """
    global _console_handler

    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _console_handler.setFormatter(formatter)

    log_levels = MODULE_LOG_LEVELS.copy()
    if level:
        numeric_level = logging.getLevelName(level.upper())
        if isinstance(numeric_level, int):
            for module_name in log_levels:
                if module_name.startswith("live_tuner"):
                    log_levels[module_name] = numeric_level
        else:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")

    for module_name, module_level in log_levels.items():
        logger = logging.getLogger(module_name)
        logger.setLevel(module_level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_console_handler)
        logger.propagate = False

    # Loggers handed out before setup inherit from their configured parent
    for name, logger in _logger_cache.items():
        if name not in log_levels:
            logger.setLevel(_level_for(name, log_levels))
            logger.propagate = True

    logging.getLogger("live_tuner").debug("Logging configuration complete")


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: The full module name (e.g., 'live_tuner.detection.yin')

    Returns:
        A logger whose level follows the closest entry in MODULE_LOG_LEVELS
    """
    if name in _logger_cache:
        return _logger_cache[name]

    logger = logging.getLogger(name)
    if name not in MODULE_LOG_LEVELS:
        logger.setLevel(_level_for(name, MODULE_LOG_LEVELS))
    _logger_cache[name] = logger
    return logger
