"""
Theme Workers - Background worker for theme generation.

Runs the prompt request in a background thread to keep the UI responsive.
"""

import logging

from PySide6.QtCore import QThread, Signal

from ...services.theme_prompt import ThemePromptAdapter, GenerationError

logger = logging.getLogger(__name__)


class ThemeGenerationWorker(QThread):
    """
    Worker for a single prompt-to-theme request.

    Signals:
        generation_success: Emitted with the ThemeSuggestion on success
        generation_error: Emitted with an error message on failure
    """

    generation_success = Signal(object)  # ThemeSuggestion
    generation_error = Signal(str)

    def __init__(self, adapter: ThemePromptAdapter, prompt_text: str, parent=None):
        super().__init__(parent)
        self.adapter = adapter
        self.prompt_text = prompt_text

    def run(self):
        try:
            suggestion = self.adapter.generate(self.prompt_text)
        except GenerationError as e:
            self.generation_error.emit(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected theme generation failure")
            self.generation_error.emit(f"Unexpected error: {e}")
            return
        self.generation_success.emit(suggestion)
