"""
UI Workers - Background workers for async operations.
"""

from .theme_workers import ThemeGenerationWorker

__all__ = [
    "ThemeGenerationWorker",
]
