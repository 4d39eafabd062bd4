"""Interaction mode variant threaded through every placement decision."""
from __future__ import annotations

from enum import Enum
from typing import Any


class InteractionMode(str, Enum):
    POINTER = "pointer"
    TOUCH = "touch"

    @property
    def is_touch(self) -> bool:
        return self is InteractionMode.TOUCH

    @classmethod
    def from_flag(cls, use_touch_interactions: Any) -> "InteractionMode":
        """Map the host's boolean touch-session flag onto a mode."""
        return cls.TOUCH if bool(use_touch_interactions) else cls.POINTER
