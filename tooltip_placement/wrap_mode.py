"""Size budget and wrap/scroll decisions for touch tooltips."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from tooltip_placement.interaction_mode import InteractionMode
from tooltip_placement.touch_scale import get_touch_tooltip_scale
from tooltip_placement.tooltip_config import DEFAULT_SETTINGS, TooltipSettings
from tooltip_placement.viewport_metrics import ViewportMetrics, _safe_float

_LOGGER = logging.getLogger("TooltipPlacement")

OVERFLOW_AUTO = "auto"
OVERFLOW_HIDDEN = "hidden"


@dataclass(frozen=True)
class WrapBudget:
    """Resolved size limits, overflow axes and provisional offset."""

    max_width: int
    max_height: int
    nowrap: bool
    overflow_x: str
    overflow_y: str
    fixed_width: Optional[int]
    left: float
    top: float
    scale: float


def viewport_anchor_offset(metrics: ViewportMetrics, mode: InteractionMode) -> tuple[float, float]:
    """Origin of the visible viewport in layout coordinates for the given mode."""
    if not mode.is_touch:
        return 0.0, 0.0
    return metrics.offset_x, metrics.offset_y


def _budget(extent: float, scale: float) -> int:
    if not (math.isfinite(extent) and math.isfinite(scale)) or extent <= 0.0 or scale <= 0.0:
        return 0
    budget = extent / scale
    if not math.isfinite(budget):
        return 0
    return max(0, int(round(budget)))


def update_touch_wrap_mode(
    metrics: ViewportMetrics,
    content_width: float,
    mode: InteractionMode,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> Optional[WrapBudget]:
    """Compute the touch tooltip budget for the current visual viewport.

    Returns ``None`` outside touch mode. Budgets are expressed in unscaled CSS
    pixels, so dividing by the touch scale keeps the rendered (scaled) box
    inside the visual viewport. Zoomed tooltips keep their lines intact and
    scroll horizontally instead of re-flowing; unzoomed ones wrap normally.
    """
    if not mode.is_touch:
        return None
    scale = get_touch_tooltip_scale(metrics, mode, settings)
    inset = settings.inset_px
    max_width = _budget(metrics.width - 2.0 * inset, scale)
    max_height = _budget(metrics.height * settings.max_height_ratio, scale)

    natural_width = max(0.0, _safe_float(content_width, 0.0))
    zoomed = scale < 1.0
    fixed_width: Optional[int] = None
    if zoomed:
        nowrap = True
        if natural_width > max_width:
            fixed_width = max_width
            overflow_x = OVERFLOW_AUTO
        else:
            overflow_x = OVERFLOW_HIDDEN
    else:
        nowrap = False
        overflow_x = OVERFLOW_HIDDEN

    offset_x, offset_y = viewport_anchor_offset(metrics, mode)
    budget = WrapBudget(
        max_width=max_width,
        max_height=max_height,
        nowrap=nowrap,
        overflow_x=overflow_x,
        overflow_y=OVERFLOW_AUTO,
        fixed_width=fixed_width,
        left=offset_x + inset,
        top=offset_y + inset,
        scale=scale,
    )
    if zoomed:
        _LOGGER.debug(
            "Touch tooltip nowrap: zoom=%.3f scale=%.3f content=%.0f budget=%dx%d fixed_width=%s",
            metrics.scale,
            scale,
            natural_width,
            max_width,
            max_height,
            fixed_width,
        )
    return budget
