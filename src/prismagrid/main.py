"""
PrismaGrid - Main entry point
"""

import logging
import sys

from PySide6.QtWidgets import QApplication

from . import __version__
from .config.settings import load_settings, get_db_path
from .database.theme_library import get_theme_library
from .services.theme_prompt import ThemePromptAdapter
from .ui.main_window import PrismaGridWindow


def main():
    """Main entry point for PrismaGrid."""
    settings = load_settings()

    level = str(settings.get("logging", {}).get("level", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO),
                        format="%(levelname)s: %(message)s")
    logger = logging.getLogger(__name__)

    app = QApplication(sys.argv)
    app.setApplicationName("PrismaGrid")
    app.setApplicationVersion(__version__)

    library = get_theme_library(get_db_path(settings))
    adapter = ThemePromptAdapter.from_settings(settings)
    logger.info(f"PrismaGrid {__version__} started (library: {library.db_path})")

    window = PrismaGridWindow(library, adapter)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
