"""Tooltip positioning orchestration (pure, host access injected).

Pointer tooltips live in the layout viewport and stay attached to the cursor.
Touch tooltips track the visual viewport so a pinch-zoomed, panned page still
shows them, and prefer sitting above the finger so the contact point does not
cover them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from tooltip_placement.coordinate_helpers import clamp, pick_coordinate
from tooltip_placement.interaction_mode import InteractionMode
from tooltip_placement.tooltip_config import DEFAULT_SETTINGS, TooltipSettings
from tooltip_placement.tooltip_style import TooltipStyle
from tooltip_placement.viewport_metrics import (
    HostViewport,
    ViewportMetrics,
    ViewportMetricsProvider,
    _safe_float,
    get_layout_metrics,
    get_viewport_metrics,
)
from tooltip_placement.wrap_mode import WrapBudget, update_touch_wrap_mode, viewport_anchor_offset

_LOGGER = logging.getLogger("TooltipPlacement")


@dataclass(frozen=True)
class AnchorPoint:
    x: float
    y: float


@dataclass(frozen=True)
class TooltipBox:
    width: float
    height: float


@dataclass(frozen=True)
class PlacementResult:
    left: float
    top: float
    uses_bottom_anchor: bool = False


def _sanitise_anchor(anchor: AnchorPoint) -> AnchorPoint:
    return AnchorPoint(_safe_float(anchor.x, 0.0), _safe_float(anchor.y, 0.0))


def _sanitise_box(box: TooltipBox) -> TooltipBox:
    return TooltipBox(max(0.0, _safe_float(box.width, 0.0)), max(0.0, _safe_float(box.height, 0.0)))


def _unbounded_placement(anchor: AnchorPoint, gap: float, origin: tuple[float, float]) -> PlacementResult:
    left = max(0.0, origin[0] + anchor.x + gap)
    top = max(0.0, origin[1] + anchor.y + gap)
    return PlacementResult(left=left, top=top)


def _pick_pointer_axis(preferred: float, alternate: float, extent: float, size: float) -> float:
    # The cursor-side corner staying on screen is enough to keep the preferred side.
    if 0.0 <= preferred <= extent:
        return preferred
    return pick_coordinate(preferred, alternate, 0.0, max(0.0, extent - size))


def _position_pointer(
    anchor: AnchorPoint,
    box: TooltipBox,
    metrics: ViewportMetrics,
    gap: float,
) -> PlacementResult:
    if not metrics.has_area:
        _LOGGER.debug("Layout viewport has no area (%sx%s); anchoring at cursor", metrics.width, metrics.height)
        return _unbounded_placement(anchor, gap, (0.0, 0.0))

    left = _pick_pointer_axis(anchor.x + gap, anchor.x - gap - box.width, metrics.width, box.width)
    preferred_top = anchor.y + gap
    if box.height + 2.0 * gap > metrics.height:
        # Viewport can never fit the box with a gap; stay attached to the cursor.
        top = preferred_top
    else:
        top = _pick_pointer_axis(preferred_top, anchor.y - gap - box.height, metrics.height, box.height)
    return PlacementResult(left=left, top=top)


def _position_touch(
    anchor: AnchorPoint,
    box: TooltipBox,
    metrics: ViewportMetrics,
    gap: float,
) -> PlacementResult:
    origin = viewport_anchor_offset(metrics, InteractionMode.TOUCH)
    if not metrics.has_area:
        _LOGGER.debug("Visual viewport has no area (%sx%s); anchoring at touch point", metrics.width, metrics.height)
        return _unbounded_placement(anchor, gap, origin)

    offset_x, offset_y = origin
    min_left = offset_x
    max_left = offset_x + metrics.width - box.width
    min_top = offset_y
    max_top = offset_y + metrics.height - box.height

    left = pick_coordinate(
        offset_x + anchor.x + gap,
        offset_x + anchor.x - gap - box.width,
        min_left,
        max_left,
    )
    top = pick_coordinate(
        offset_y + anchor.y - gap - box.height,
        offset_y + anchor.y + gap,
        min_top,
        max_top,
    )
    return PlacementResult(left=left, top=top)


def position_for_metrics(
    anchor: AnchorPoint,
    box: TooltipBox,
    metrics: ViewportMetrics,
    mode: InteractionMode,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> PlacementResult:
    """Place the tooltip against already-sampled metrics for the given mode."""
    anchor = _sanitise_anchor(anchor)
    box = _sanitise_box(box)
    if mode.is_touch:
        return _position_touch(anchor, box, metrics, settings.gap_px)
    return _position_pointer(anchor, box, metrics, settings.gap_px)


def metrics_for_mode(host: HostViewport, mode: InteractionMode) -> ViewportMetrics:
    """Pointer mode ignores pinch-zoom state entirely; touch mode tracks it."""
    if mode.is_touch:
        return get_viewport_metrics(host)
    return get_layout_metrics(host)


def position_tooltip(
    anchor: AnchorPoint,
    box: TooltipBox,
    host: HostViewport,
    mode: InteractionMode,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> PlacementResult:
    """Return the top-left screen offset for a tooltip opened at anchor."""
    return position_for_metrics(anchor, box, metrics_for_mode(host, mode), mode, settings)


def _constrain_box(box: TooltipBox, budget: Optional[WrapBudget]) -> TooltipBox:
    if budget is None:
        return box
    width_limit = budget.fixed_width if budget.fixed_width is not None else budget.max_width
    return TooltipBox(
        width=clamp(box.width, 0.0, float(width_limit)),
        height=clamp(box.height, 0.0, float(budget.max_height)),
    )


def layout_tooltip(
    anchor: AnchorPoint,
    box: TooltipBox,
    provider: ViewportMetricsProvider,
    mode: InteractionMode,
    *,
    content_width: Optional[float] = None,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> TooltipStyle:
    """Resolve the full style record for one open event.

    The provider is sampled exactly once so the size budget and the placement
    are computed from the same zoom state. ``content_width`` is the tooltip's
    natural (scroll) width; it defaults to the measured box width.
    """
    host = provider.snapshot()
    metrics = metrics_for_mode(host, mode)
    box = _sanitise_box(box)
    natural_width = box.width if content_width is None else content_width

    budget = update_touch_wrap_mode(metrics, natural_width, mode, settings)
    placement = position_for_metrics(anchor, _constrain_box(box, budget), metrics, mode, settings)
    if budget is None:
        return TooltipStyle(left=placement.left, top=placement.top)
    return _style_from_budget(placement.left, placement.top, budget)


def _style_from_budget(left: float, top: float, budget: WrapBudget) -> TooltipStyle:
    return TooltipStyle(
        left=left,
        top=top,
        max_width=budget.max_width,
        max_height=budget.max_height,
        width=budget.fixed_width,
        overflow_x=budget.overflow_x,
        overflow_y=budget.overflow_y,
        nowrap=budget.nowrap,
        scale=budget.scale,
    )


def wrap_mode_style(
    provider: ViewportMetricsProvider,
    content_width: float,
    settings: TooltipSettings = DEFAULT_SETTINGS,
) -> TooltipStyle:
    """Provisional touch style before the tooltip has been measured.

    The tooltip is parked at the visual viewport's inset corner so the host can
    measure it unclipped; ``layout_tooltip`` then produces the final offset.
    """
    metrics = get_viewport_metrics(provider.snapshot())
    budget = update_touch_wrap_mode(metrics, content_width, InteractionMode.TOUCH, settings)
    if budget is None:
        return TooltipStyle(left=settings.inset_px, top=settings.inset_px)
    return _style_from_budget(budget.left, budget.top, budget)
