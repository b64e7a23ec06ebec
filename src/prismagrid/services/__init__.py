"""
Services - External collaborators (theme generation from text).
"""

from .theme_prompt import (
    ThemePromptAdapter,
    GenerationError,
    build_prompt,
    parse_theme_response,
    resolve_api_key,
)

__all__ = [
    "ThemePromptAdapter",
    "GenerationError",
    "build_prompt",
    "parse_theme_response",
    "resolve_api_key",
]
