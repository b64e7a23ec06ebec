"""
Configuration - YAML settings and application data directory.
"""

from .settings import load_settings, default_settings, get_app_dir, get_db_path

__all__ = ["load_settings", "default_settings", "get_app_dir", "get_db_path"]
