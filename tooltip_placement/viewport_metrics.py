"""Viewport metric sampling decoupled from any particular host.

Hosts describe themselves with a :class:`HostViewport` snapshot: the layout
viewport size plus, when the host exposes pinch-zoom state, a
:class:`VisualViewportState`. Placement code never reads host state directly;
it asks a :class:`ViewportMetricsProvider` for one snapshot per event and
derives :class:`ViewportMetrics` from it.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol

_LOGGER = logging.getLogger("TooltipPlacement")


@dataclass(frozen=True)
class ViewportMetrics:
    width: float
    height: float
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0

    @property
    def has_area(self) -> bool:
        return self.width > 0.0 and self.height > 0.0


@dataclass(frozen=True)
class VisualViewportState:
    """Pinch-zoom viewport as reported by the host; any field may be missing."""

    width: Optional[float] = None
    height: Optional[float] = None
    offset_left: Optional[float] = None
    offset_top: Optional[float] = None
    scale: Optional[float] = None


@dataclass(frozen=True)
class HostViewport:
    inner_width: float
    inner_height: float
    visual: Optional[VisualViewportState] = None


class ViewportMetricsProvider(Protocol):
    """Source of host viewport snapshots, sampled once per event."""

    def snapshot(self) -> HostViewport:
        ...


class StaticViewportProvider:
    """Provider returning a fixed snapshot; used for replay and tests."""

    def __init__(self, host: HostViewport) -> None:
        self._host = host

    def snapshot(self) -> HostViewport:
        return self._host


class CallableViewportProvider:
    """Provider wrapping a callable that returns a browser-style window mapping."""

    def __init__(self, read_host_fn: Callable[[], Mapping[str, Any]]) -> None:
        self._read_host = read_host_fn

    def snapshot(self) -> HostViewport:
        return host_viewport_from_mapping(self._read_host())


def _safe_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def _safe_dimension(value: Any) -> float:
    return max(0.0, _safe_float(value, 0.0))


def _safe_scale(value: Any) -> float:
    scale = _safe_float(value, 1.0)
    if scale <= 0.0:
        return 1.0
    return scale


def host_viewport_from_mapping(payload: Mapping[str, Any]) -> HostViewport:
    """Parse a mapping shaped like the browser ``window`` object.

    Recognised keys are ``innerWidth``/``innerHeight`` and an optional
    ``visualViewport`` mapping with ``width``, ``height``, ``offsetLeft``,
    ``offsetTop`` and ``scale``. Unknown or malformed values are dropped.
    """
    if not isinstance(payload, Mapping):
        return HostViewport(inner_width=0.0, inner_height=0.0)
    visual_raw = payload.get("visualViewport", payload.get("visual_viewport"))
    visual: Optional[VisualViewportState] = None
    if isinstance(visual_raw, Mapping):
        visual = VisualViewportState(
            width=_optional_float(visual_raw.get("width")),
            height=_optional_float(visual_raw.get("height")),
            offset_left=_optional_float(visual_raw.get("offsetLeft")),
            offset_top=_optional_float(visual_raw.get("offsetTop")),
            scale=_optional_float(visual_raw.get("scale")),
        )
    return HostViewport(
        inner_width=_safe_dimension(payload.get("innerWidth", payload.get("inner_width"))),
        inner_height=_safe_dimension(payload.get("innerHeight", payload.get("inner_height"))),
        visual=visual,
    )


def get_layout_metrics(host: HostViewport) -> ViewportMetrics:
    """Return the unzoomed layout viewport, ignoring any pinch-zoom state."""
    return ViewportMetrics(
        width=_safe_dimension(host.inner_width),
        height=_safe_dimension(host.inner_height),
    )


def get_viewport_metrics(host: HostViewport) -> ViewportMetrics:
    """Return the visible viewport, falling back to the layout viewport."""
    layout = get_layout_metrics(host)
    visual = host.visual
    if visual is None:
        return layout

    visual_width = _optional_float(visual.width)
    visual_height = _optional_float(visual.height)
    width = layout.width if visual_width is None or visual_width <= 0.0 else visual_width
    height = layout.height if visual_height is None or visual_height <= 0.0 else visual_height
    if width != visual_width or height != visual_height:
        _LOGGER.debug(
            "Visual viewport size unavailable (width=%s height=%s); using layout %.0fx%.0f",
            visual.width,
            visual.height,
            layout.width,
            layout.height,
        )
    return ViewportMetrics(
        width=width,
        height=height,
        offset_x=_safe_float(visual.offset_left, 0.0),
        offset_y=_safe_float(visual.offset_top, 0.0),
        scale=_safe_scale(visual.scale),
    )
