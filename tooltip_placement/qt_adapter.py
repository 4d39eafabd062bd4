"""Thin PyQt6 adapters: sample a host widget and apply tooltip styles to Qt widgets.

The placement engine stays free of Qt types; these helpers are the only place
where Qt geometry is read or written.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QAbstractScrollArea, QLabel, QWidget

from tooltip_placement.tooltip_style import TooltipStyle
from tooltip_placement.viewport_metrics import HostViewport, VisualViewportState

_LOGGER = logging.getLogger("TooltipPlacement")

# (scale, offset_x, offset_y) of the zoomed region inside the host widget.
ZoomState = Tuple[float, float, float]

_QT_MAX_SIZE = 16777215


class QtViewportProvider:
    """Samples a host widget as the layout viewport, with optional pinch-zoom state."""

    def __init__(
        self,
        host_widget: QWidget,
        zoom_state_fn: Optional[Callable[[], Optional[ZoomState]]] = None,
    ) -> None:
        self._host = host_widget
        self._zoom_state = zoom_state_fn

    def snapshot(self) -> HostViewport:
        size = self._host.size()
        width = float(max(0, size.width()))
        height = float(max(0, size.height()))
        zoom = self._zoom_state() if self._zoom_state is not None else None
        if zoom is None:
            return HostViewport(inner_width=width, inner_height=height)
        scale, offset_x, offset_y = zoom
        if scale <= 0.0:
            _LOGGER.debug("Ignoring non-positive host zoom scale %.3f", scale)
            return HostViewport(inner_width=width, inner_height=height)
        visual = VisualViewportState(
            width=width / scale,
            height=height / scale,
            offset_left=offset_x,
            offset_top=offset_y,
            scale=scale,
        )
        return HostViewport(inner_width=width, inner_height=height, visual=visual)


def _scroll_policy(overflow: Optional[str]) -> Qt.ScrollBarPolicy:
    if overflow == "auto":
        return Qt.ScrollBarPolicy.ScrollBarAsNeeded
    return Qt.ScrollBarPolicy.ScrollBarAlwaysOff


def apply_tooltip_style(widget: QWidget, style: TooltipStyle) -> None:
    """Move and constrain a tooltip widget according to a resolved style.

    ``style.scale`` is not applied here; callers size the label font from it.
    """
    widget.move(int(round(style.left)), int(round(style.top)))
    max_width = style.max_width if style.max_width is not None else _QT_MAX_SIZE
    max_height = style.max_height if style.max_height is not None else _QT_MAX_SIZE
    widget.setMaximumSize(max(0, max_width), max(0, max_height))
    if style.width is not None:
        widget.setFixedWidth(max(0, style.width))
    else:
        widget.setMinimumWidth(0)

    label = widget if isinstance(widget, QLabel) else widget.findChild(QLabel)
    if label is not None:
        label.setWordWrap(not style.nowrap)
    if isinstance(widget, QAbstractScrollArea):
        widget.setHorizontalScrollBarPolicy(_scroll_policy(style.overflow_x))
        widget.setVerticalScrollBarPolicy(_scroll_policy(style.overflow_y))
