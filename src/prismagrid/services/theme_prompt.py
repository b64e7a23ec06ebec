"""
Theme Prompt Service - Turn a free-text mood into a grid configuration.

Sends one structured-output request to the Gemini generateContent REST
endpoint and decodes the JSON answer into a ThemeSuggestion. Every failure
(network, HTTP status, malformed or incomplete answer) surfaces as a single
GenerationError; there are no retries.
"""
import json
import logging
import math
import os
import urllib.error
import urllib.request
from numbers import Real
from typing import Any, Dict, Optional

from ..core.color import ColumnMode, GridConfig, ThemeSuggestion
from ..utils.credential_manager import CredentialManager

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 60

# Grid size is not generated, generated themes always use the default grid
GENERATED_GRID_SIZE = 8

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")

_NUMERIC_FIELDS = {
    "baseHue": "base_hue",
    "baseSat": "base_sat",
    "baseLight": "base_light",
    "hueStep": "hue_step",
    "satStep": "sat_step",
    "lightStep": "light_step",
}

THEME_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "baseHue": {"type": "NUMBER", "description": "Starting Hue (0-360)"},
        "baseSat": {"type": "NUMBER", "description": "Starting Saturation (0-100)"},
        "baseLight": {"type": "NUMBER", "description": "Starting Lightness (0-100)"},
        "hueStep": {"type": "NUMBER", "description": "Step size for Hue change per row"},
        "satStep": {"type": "NUMBER", "description": "Step size for Saturation change (can be negative)"},
        "lightStep": {"type": "NUMBER", "description": "Step size for Lightness change (can be negative)"},
        "columnMode": {
            "type": "STRING",
            "enum": [mode.value for mode in ColumnMode],
            "description": "Whether columns vary lightness or saturation",
        },
        "name": {"type": "STRING", "description": "A creative name for this theme"},
        "description": {"type": "STRING", "description": "Short explanation of the theme choice"},
    },
    "required": list(_NUMERIC_FIELDS) + ["columnMode", "name", "description"],
}


class GenerationError(Exception):
    """Theme generation failed (network, API or response error)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def build_prompt(prompt_text: str) -> str:
    """Instruction sent to the model for a mood or concept."""
    return (
        f'Create a color grid configuration based on the concept: "{prompt_text}".\n'
        "The grid has rows that vary by Hue, and columns that vary by either Lightness or Saturation.\n"
        "Ensure the steps create a visually pleasing and coherent palette.\n"
        "For 'baseLight' or 'baseSat', try to pick values that allow the steps to not clip immediately.\n"
        "If columnMode is 'lightness', lightStep is used. If 'saturation', satStep is used.\n"
    )


def resolve_api_key(api_key: Optional[str] = None) -> str:
    """
    Find the API key: explicit value, then environment, then system keyring.

    Returns:
        The key, or "" if none is configured
    """
    if api_key:
        return api_key
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return CredentialManager.get_api_key()


def _candidate_text(payload: Dict[str, Any]) -> str:
    """Concatenated text parts of the first candidate."""
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        raise GenerationError("No response from model") from e
    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
    if not text.strip():
        raise GenerationError("No response from model")
    return text


def parse_theme_response(payload: Dict[str, Any]) -> ThemeSuggestion:
    """
    Decode a generateContent response into a ThemeSuggestion.

    Values are not range-checked here; callers accepting the result clamp it
    (see GridConfig.clamped).

    Raises:
        GenerationError: If the answer is missing, not JSON, or incomplete
    """
    text = _candidate_text(payload)
    try:
        result = json.loads(text)
    except json.JSONDecodeError as e:
        raise GenerationError(f"Model answer is not valid JSON: {e}", body=text[:500]) from e
    if not isinstance(result, dict):
        raise GenerationError("Model answer is not a JSON object", body=text[:500])

    values = {}
    for wire, attr in _NUMERIC_FIELDS.items():
        value = result.get(wire)
        if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
            raise GenerationError(f"Missing or invalid field '{wire}'", body=text[:500])
        values[attr] = value

    try:
        column_mode = ColumnMode(result.get("columnMode"))
    except ValueError as e:
        raise GenerationError(f"Invalid columnMode: {result.get('columnMode')!r}", body=text[:500]) from e

    name = result.get("name")
    description = result.get("description")
    if not isinstance(name, str) or not isinstance(description, str):
        raise GenerationError("Missing theme name or description", body=text[:500])

    config = GridConfig(
        rows=GENERATED_GRID_SIZE,
        cols=GENERATED_GRID_SIZE,
        column_mode=column_mode,
        **values,
    )
    return ThemeSuggestion(name=name, description=description, config=config)


class ThemePromptAdapter:
    """
    Generates themes from free text with a Gemini model.

    Usage:
        adapter = ThemePromptAdapter.from_settings(settings)
        suggestion = adapter.generate("Cyberpunk neon")
    """

    def __init__(self, api_key: Optional[str] = None,
                 model: str = DEFAULT_MODEL,
                 api_base: str = DEFAULT_API_BASE,
                 temperature: float = DEFAULT_TEMPERATURE,
                 timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize the adapter.

        Args:
            api_key: API key; resolved lazily from env/keyring when omitted
            model: Model name
            api_base: REST API base URL
            temperature: Sampling temperature
            timeout: Request timeout in seconds
        """
        self._api_key = api_key
        self.model = model
        self.api_base = api_base
        self.temperature = temperature
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "ThemePromptAdapter":
        """Build an adapter from the 'generation' settings section."""
        gen = settings.get("generation", {})
        return cls(
            model=gen.get("model", DEFAULT_MODEL),
            api_base=gen.get("api_base", DEFAULT_API_BASE),
            temperature=gen.get("temperature", DEFAULT_TEMPERATURE),
            timeout=gen.get("timeout", DEFAULT_TIMEOUT),
        )

    @property
    def endpoint(self) -> str:
        return f"{self.api_base.rstrip('/')}/models/{self.model}:generateContent"

    def _build_request_body(self, prompt_text: str) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": build_prompt(prompt_text)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": THEME_RESPONSE_SCHEMA,
                "temperature": self.temperature,
            },
        }

    def _post(self, body: Dict[str, Any], api_key: str) -> Dict[str, Any]:
        req = urllib.request.Request(
            self.endpoint,
            data=json.dumps(body).encode("utf-8"),
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": api_key,
                "User-Agent": "PrismaGrid",
            },
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                raw = response.read()
        except urllib.error.HTTPError as e:
            err_body = e.read().decode("utf-8", errors="replace")[:500]
            raise GenerationError(f"Generation request failed: HTTP {e.code}",
                                  status_code=e.code, body=err_body) from e
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            raise GenerationError(f"Generation request failed: {e}") from e

        try:
            return json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise GenerationError(f"Response is not valid UTF-8: {e}",
                                  body=raw[:500].decode("utf-8", errors="replace")) from e
        except json.JSONDecodeError as e:
            raise GenerationError(f"Invalid JSON response: {e}",
                                  body=raw[:500].decode("utf-8", errors="replace")) from e

    def generate(self, prompt_text: str) -> ThemeSuggestion:
        """
        Generate a theme from a mood or concept description.

        Args:
            prompt_text: Free-text description (e.g., "Pastel spring")

        Returns:
            ThemeSuggestion with an 8x8 config, name and description

        Raises:
            GenerationError: On any failure
        """
        if not prompt_text or not prompt_text.strip():
            raise GenerationError("Prompt is empty")

        api_key = resolve_api_key(self._api_key)
        if not api_key:
            raise GenerationError("No API key configured (set GEMINI_API_KEY or store one in the keyring)")

        logger.info(f"Generating theme for prompt: {prompt_text!r}")
        try:
            payload = self._post(self._build_request_body(prompt_text.strip()), api_key)
            suggestion = parse_theme_response(payload)
        except GenerationError as e:
            logger.error(f"Error generating theme: {e}")
            raise

        logger.info(f"Generated theme: {suggestion.name}")
        return suggestion
