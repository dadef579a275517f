"""Descriptive metadata attached to tactics, actions, goals and goal structures."""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Metadata(BaseModel):
    """Identity and documentation for a node, used in logs and debug output.

    Attributes:
        id: Unique identifier, generated when not supplied.
        name: Short human-readable name.
        description: Longer free-form description.
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: Optional[str] = None
    description: Optional[str] = None

    def display_name(self, fallback: str) -> str:
        """Name to show in logs, or ``fallback`` plus a short id when unnamed."""
        if self.name:
            return self.name
        return f"{fallback}-{str(self.id)[:8]}"


__all__ = ["Metadata"]
