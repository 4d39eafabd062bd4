"""Viewport-aware tooltip placement and touch-zoom adaptation helpers."""
from __future__ import annotations

from tooltip_placement.interaction_mode import InteractionMode
from tooltip_placement.positioning import layout_tooltip, position_tooltip
from tooltip_placement.tooltip_config import TooltipSettings

__all__ = ["InteractionMode", "TooltipSettings", "layout_tooltip", "position_tooltip"]
