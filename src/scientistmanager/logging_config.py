"""
Logging Configuration
=====================
Sets up the 'scientistmanager' logger tree.

Why is this file needed?
------------------------
1. One place for the format and handlers used by every module logger.
2. Console output goes to stderr; the GUI has no stdout of its own.
3. Levels can be tuned per module (e.g. 'model.store' at DEBUG while the
   rest of the app stays at INFO), see config.get_module_log_levels().
"""
import logging
import sys
from typing import Mapping, Optional

ROOT_LOGGER = "scientistmanager"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def qualified_logger_name(name: str) -> str:
    """'model.store' -> 'scientistmanager.model.store'."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return name
    return f"{ROOT_LOGGER}.{name}"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    module_levels: Optional[Mapping[str, int]] = None,
) -> logging.Logger:
    """
    Configures the 'scientistmanager' logger and returns it.

    Args:
        level: Level of the application logger (e.g. logging.DEBUG).
        log_file: Optional path; log lines are appended to it.
        module_levels: Overrides keyed by module path relative to the package.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate handlers when called twice
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Handlers pass everything; the loggers decide what is emitted
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name, module_level in (module_levels or {}).items():
        logging.getLogger(qualified_logger_name(name)).setLevel(module_level)

    logger.debug(f"Logging initialized (level={logging.getLevelName(level)}, file={log_file}).")
    return logger
