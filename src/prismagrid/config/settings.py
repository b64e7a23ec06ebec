"""
Settings - Load application settings from YAML.

Settings live in <app data dir>/settings.yaml. A missing file yields the
defaults; a present file is merged over the defaults section by section.
Secrets (API keys) are never stored here, see utils.credential_manager.
"""
import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

APP_HOME_ENV = "PRISMAGRID_HOME"
SETTINGS_FILENAME = "settings.yaml"

_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "generation": {
        "model": "gemini-2.5-flash",
        "api_base": "https://generativelanguage.googleapis.com/v1beta",
        "temperature": 0.7,
        "timeout": 60,
    },
    "library": {
        "db_filename": "themes.db",
    },
    "logging": {
        "level": "INFO",
    },
}


def get_app_dir() -> Path:
    """
    Resolve the application data directory, creating it if needed.

    Uses $PRISMAGRID_HOME when set, otherwise ~/.prismagrid.
    """
    env_dir = os.environ.get(APP_HOME_ENV)
    app_dir = Path(env_dir) if env_dir else Path.home() / ".prismagrid"
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def default_settings() -> Dict[str, Dict[str, Any]]:
    """Fresh copy of the default settings."""
    return copy.deepcopy(_DEFAULTS)


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load settings from YAML, merged over the defaults.

    Args:
        settings_path: Optional path; defaults to <app dir>/settings.yaml

    Returns:
        Settings dictionary with every default section present
    """
    if settings_path is None:
        settings_path = get_app_dir() / SETTINGS_FILENAME
    path = Path(settings_path)

    settings = default_settings()
    if not path.exists():
        return settings

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring {path}: expected a mapping of sections")
        return settings

    for section, values in data.items():
        if section not in settings:
            settings[section] = values
        elif isinstance(values, dict):
            settings[section].update(values)
        elif values is not None:
            logger.warning(f"Ignoring settings section '{section}': expected a mapping")

    logger.debug(f"Settings loaded from {path}")
    return settings


def get_db_path(settings: Dict[str, Dict[str, Any]]) -> Path:
    """Resolve the theme library database path (relative to the app dir)."""
    filename = settings.get("library", {}).get("db_filename", "themes.db")
    path = Path(filename)
    if not path.is_absolute():
        path = get_app_dir() / path
    return path
