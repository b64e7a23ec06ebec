"""
SavedTheme model - A named grid configuration in the theme library
"""
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Dict, Optional
import time
import uuid

from ...core.color import GridConfig


def now_millis() -> int:
    """Current time as integer epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class SavedTheme:
    """Saved palette configuration"""
    id: str
    name: str
    config: GridConfig
    description: str = ""
    created_at: Optional[int] = None  # epoch ms, now when omitted

    def __post_init__(self):
        if not self.id:
            self.id = str(uuid.uuid4())
        if self.created_at is None:
            self.created_at = now_millis()
        if self.description is None:
            self.description = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted record shape (camelCase)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "config": self.config.to_dict(),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedTheme":
        """
        Create from a persisted record.

        Raises:
            KeyError: If name or config is missing
            ValueError: If the config is invalid, or createdAt is not an integer
        """
        created_at = data.get("createdAt")
        if created_at is not None and (isinstance(created_at, bool) or not isinstance(created_at, Integral)):
            raise ValueError(f"Invalid createdAt: {created_at!r}")
        name = data["name"]
        description = data.get("description") or ""
        if not isinstance(name, str) or not isinstance(description, str):
            raise ValueError("Theme name and description must be strings")
        return cls(
            id=str(data.get("id") or ""),
            name=name,
            description=description,
            config=GridConfig.from_dict(data["config"]),
            created_at=created_at,
        )
