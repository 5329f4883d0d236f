"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find the bundled dataset when the app is frozen into an .exe.
3. Overrides: The data directory and logging can be redirected with
   environment variables (handy for tests and portable installs).

Exports:
    RESOURCES_PATH (str): Absolute path to the bundled resources directory.
    DEFAULT_DATASET_PATH (str): Absolute path to the bundled scientist.json.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Dict, Optional, Union

ORG_ID = "knu-csc"
APP_ID = "scientist-manager"
VISIBLE_APP_NAME = "Науковці"

# Name of the data file, both bundled and in local storage
DATA_FILENAME = "scientist.json"

# Qt display format for rank dates (grid and date editor)
DATE_DISPLAY_FORMAT = "yyyy-MM-dd"

# Mutations are written to the data file immediately
AUTOSAVE = True

DATA_DIR_ENV = "SCIENTISTMANAGER_DATA_DIR"
LOG_LEVEL_ENV = "SCIENTISTMANAGER_LOG_LEVEL"
LOG_FILE_ENV = "SCIENTISTMANAGER_LOG_FILE"
# e.g. "model.store=DEBUG,view=WARNING"
LOG_MODULES_ENV = "SCIENTISTMANAGER_LOG_MODULES"


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/scientistmanager/
    package_root: Path = Path(__file__).parent
    return os.path.join(str(package_root), relative_path)


def get_data_dir(default: Union[str, Path, None] = None) -> Path:
    """
    Directory of the local data file.

    The environment variable wins over the default (normally the Qt
    AppDataLocation passed in by main).
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    if default:
        return Path(default)
    return Path.home() / f".{APP_ID}"


def get_data_file_path(default_dir: Union[str, Path, None] = None) -> Path:
    return get_data_dir(default_dir) / DATA_FILENAME


def parse_log_level(value: Optional[str], default: int = logging.INFO) -> int:
    """Accepts 'DEBUG', 'info', '10', ...; anything else gives the default."""
    value = (value or "").strip()
    if not value:
        return default
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def get_log_level(default: int = logging.INFO) -> int:
    """Reads the application log level from the environment."""
    return parse_log_level(os.environ.get(LOG_LEVEL_ENV), default)


def get_module_log_levels() -> Dict[str, int]:
    """Reads per-module overrides; malformed entries are skipped."""
    levels: Dict[str, int] = {}
    for entry in os.environ.get(LOG_MODULES_ENV, "").split(","):
        name, sep, value = entry.partition("=")
        name = name.strip()
        if not sep or not name:
            continue
        level = parse_log_level(value, default=-1)
        if level >= 0:
            levels[name] = level
    return levels


def get_log_file() -> Optional[str]:
    return os.environ.get(LOG_FILE_ENV) or None


# Global Constants
RESOURCES_PATH: str = get_resource_path("resources")
DEFAULT_DATASET_PATH: str = os.path.join(RESOURCES_PATH, DATA_FILENAME)

if not os.path.exists(RESOURCES_PATH):
    print(f"WARNING: Resources path not found at {RESOURCES_PATH}")
