"""Touch tooltip scale compensation for pinch-zoomed viewports."""
from __future__ import annotations

from tooltip_placement.coordinate_helpers import clamp
from tooltip_placement.interaction_mode import InteractionMode
from tooltip_placement.tooltip_config import DEFAULT_SETTINGS, TooltipSettings
from tooltip_placement.viewport_metrics import ViewportMetrics


def get_touch_tooltip_scale(
    metrics: ViewportMetrics,
    mode: InteractionMode,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> float:
    """Return the rendering factor that offsets pinch-zoom magnification.

    Neutral (1.0) outside touch mode and up to ``max_effective_zoom``. Beyond
    that the tooltip shrinks so its apparent size stays near the effective zoom
    ceiling, never dropping below ``min_scale``.
    """
    if not mode.is_touch:
        return 1.0
    zoom = metrics.scale
    if zoom <= settings.max_effective_zoom:
        return 1.0
    return clamp(settings.max_effective_zoom / zoom, settings.min_scale, 1.0)
