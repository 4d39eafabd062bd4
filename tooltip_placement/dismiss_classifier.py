"""Classify passive viewport events while a touch tooltip is open.

Pinch-zoom fires the same scroll/resize notifications as a user scrolling the
page, and it jitters scroll position by an amount that grows with the zoom
factor. The helpers here decide when such an event should leave the tooltip
alone.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from tooltip_placement.interaction_mode import InteractionMode
from tooltip_placement.tooltip_config import DEFAULT_SETTINGS, TooltipSettings
from tooltip_placement.viewport_metrics import (
    ViewportMetrics,
    ViewportMetricsProvider,
    _safe_float,
    get_viewport_metrics,
)

_LOGGER = logging.getLogger("TooltipPlacement")


@dataclass(frozen=True)
class PassiveEventDecision:
    preserve: bool
    viewport_moved: bool
    threshold_px: float
    metrics: ViewportMetrics


def is_touch_viewport_zoomed(
    metrics: ViewportMetrics,
    mode: InteractionMode,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> bool:
    if not mode.is_touch:
        return False
    return metrics.scale >= settings.zoomed_scale_min


def get_scroll_dismiss_threshold(
    metrics: ViewportMetrics,
    mode: InteractionMode,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> float:
    """Scroll distance (px) a touch tooltip tolerates before dismissing."""
    base = settings.tap_max_scroll_px
    if not is_touch_viewport_zoomed(metrics, mode, settings):
        return base
    scaled = math.ceil(base * metrics.scale)
    return float(min(settings.dismiss_max_scroll_px, max(base, scaled)))


def should_preserve_on_passive_event(
    card_scroll_event: bool,
    viewport_moved: bool,
    metrics: ViewportMetrics,
    mode: InteractionMode,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> bool:
    """Return True when a passive event should not dismiss the tooltip.

    Only a touch tooltip on a zoomed viewport that neither panned nor had its
    scrollable card move is preserved.
    """
    if not mode.is_touch:
        return False
    if card_scroll_event or viewport_moved:
        return False
    return is_touch_viewport_zoomed(metrics, mode, settings)


def should_dismiss_for_scroll(
    distance_px: float,
    metrics: ViewportMetrics,
    mode: InteractionMode,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> bool:
    distance = abs(_safe_float(distance_px, 0.0))
    return distance > get_scroll_dismiss_threshold(metrics, mode, settings)


def has_viewport_moved(
    previous: Optional[ViewportMetrics],
    current: ViewportMetrics,
    tolerance_px: float = DEFAULT_SETTINGS.viewport_move_tolerance_px,
) -> bool:
    """True when the visual viewport panned or changed zoom between samples."""
    if previous is None:
        return False
    if abs(current.offset_x - previous.offset_x) > tolerance_px:
        return True
    if abs(current.offset_y - previous.offset_y) > tolerance_px:
        return True
    return not math.isclose(current.scale, previous.scale, rel_tol=1e-6, abs_tol=1e-6)


def classify_passive_event(
    provider: ViewportMetricsProvider,
    card_scroll_event: bool,
    previous: Optional[ViewportMetrics],
    mode: InteractionMode,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> PassiveEventDecision:
    """Sample the viewport once and decide whether the open tooltip survives."""
    metrics = get_viewport_metrics(provider.snapshot())
    moved = has_viewport_moved(previous, metrics, settings.viewport_move_tolerance_px)
    preserve = should_preserve_on_passive_event(card_scroll_event, moved, metrics, mode, settings)
    threshold = get_scroll_dismiss_threshold(metrics, mode, settings)
    if preserve:
        _LOGGER.debug(
            "Preserving touch tooltip on passive viewport event: zoom=%.3f threshold=%.0fpx",
            metrics.scale,
            threshold,
        )
    return PassiveEventDecision(
        preserve=preserve,
        viewport_moved=moved,
        threshold_px=threshold,
        metrics=metrics,
    )
