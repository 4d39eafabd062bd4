from __future__ import annotations

import math

import pytest

from tooltip_placement.interaction_mode import InteractionMode
from tooltip_placement.positioning import (
    AnchorPoint,
    PlacementResult,
    TooltipBox,
    layout_tooltip,
    position_tooltip,
)
from tooltip_placement.viewport_metrics import (
    CallableViewportProvider,
    HostViewport,
    StaticViewportProvider,
    VisualViewportState,
    host_viewport_from_mapping,
)


def _host(inner_width, inner_height, *, offset=(0, 0), size=None, scale=None) -> HostViewport:
    width, height = size if size is not None else (inner_width, inner_height)
    visual = {"offsetLeft": offset[0], "offsetTop": offset[1], "width": width, "height": height}
    if scale is not None:
        visual["scale"] = scale
    return host_viewport_from_mapping({"innerWidth": inner_width, "innerHeight": inner_height, "visualViewport": visual})


def _css(anchor, box, host, mode):
    return layout_tooltip(AnchorPoint(*anchor), TooltipBox(*box), StaticViewportProvider(host), mode).as_css()


def test_desktop_positioning_ignores_visual_viewport_offsets():
    style = _css((100, 90), (200, 80), _host(1200, 800, offset=(240, 180), size=(700, 500)), InteractionMode.POINTER)
    assert style["left"] == "112px"
    assert style["top"] == "102px"
    assert style["bottom"] == "auto"
    assert "maxWidth" not in style


def test_desktop_positioning_stays_cursor_anchored_when_viewport_is_small():
    style = _css((300, 150), (200, 80), _host(1200, 180), InteractionMode.POINTER)
    assert style["left"] == "312px"
    assert style["top"] == "162px"


def test_desktop_positioning_does_not_flip_left_when_near_right_edge():
    style = _css((170, 100), (90, 60), _host(200, 300), InteractionMode.POINTER)
    assert style["left"] == "182px"


def test_desktop_positioning_flips_when_cursor_corner_would_leave_viewport():
    placement = position_tooltip(AnchorPoint(1195, 100), TooltipBox(200, 60), _host(1200, 800), InteractionMode.POINTER)
    assert placement.left == 1195 - 12 - 200


def test_desktop_positioning_clamps_when_neither_side_fits():
    placement = position_tooltip(AnchorPoint(195, 100), TooltipBox(300, 60), _host(200, 300), InteractionMode.POINTER)
    assert placement.left == 0.0


def test_desktop_box_taller_than_viewport_anchors_at_cursor():
    placement = position_tooltip(AnchorPoint(50, 70), TooltipBox(100, 90), _host(400, 100), InteractionMode.POINTER)
    assert placement == PlacementResult(left=62.0, top=82.0)


def test_touch_positioning_uses_visual_viewport_offsets():
    style = _css((100, 220), (200, 80), _host(1200, 800, offset=(240, 180), size=(700, 500)), InteractionMode.TOUCH)
    assert style["left"] == "352px"
    assert style["top"] == "308px"
    assert style["bottom"] == "auto"


def test_touch_positioning_drops_below_finger_near_top_edge():
    placement = position_tooltip(
        AnchorPoint(100, 30), TooltipBox(200, 80), _host(1200, 800, offset=(240, 180), size=(700, 500)), InteractionMode.TOUCH
    )
    assert placement.top == 180 + 30 + 12


def test_touch_positioning_flips_left_near_visual_right_edge():
    placement = position_tooltip(
        AnchorPoint(650, 220), TooltipBox(200, 80), _host(1200, 800, offset=(240, 180), size=(700, 500)), InteractionMode.TOUCH
    )
    assert placement.left == 240 + 650 - 12 - 200


def test_touch_box_wider_than_viewport_pins_to_visual_origin():
    placement = position_tooltip(
        AnchorPoint(10, 220), TooltipBox(900, 80), _host(1200, 800, offset=(240, 180), size=(700, 500)), InteractionMode.TOUCH
    )
    assert placement.left == 240.0


def test_touch_layout_caps_box_to_budget_before_placing():
    host = _host(1200, 800, offset=(20, 10), size=(200, 260))
    style = layout_tooltip(
        AnchorPoint(10, 200),
        TooltipBox(250, 300),
        StaticViewportProvider(host),
        InteractionMode.TOUCH,
        content_width=250,
    )
    assert style.max_width == 176
    assert style.max_height == 182
    # Capped box (176x182) fits between the visual origin and its far edge.
    assert 20.0 <= style.left <= 20.0 + 200.0 - 176.0
    assert 10.0 <= style.top <= 10.0 + 260.0 - 182.0


@pytest.mark.parametrize("mode", [InteractionMode.POINTER, InteractionMode.TOUCH])
def test_zero_viewport_anchors_directly_without_nan(mode):
    host = HostViewport(inner_width=0.0, inner_height=-10.0)
    placement = position_tooltip(AnchorPoint(40, 50), TooltipBox(200, 80), host, mode)
    assert placement == PlacementResult(left=52.0, top=62.0)


def test_non_finite_inputs_never_produce_nan():
    placement = position_tooltip(
        AnchorPoint(float("nan"), float("inf")), TooltipBox(float("nan"), -5), _host(800, 600), InteractionMode.POINTER
    )
    assert math.isfinite(placement.left) and math.isfinite(placement.top)
    assert placement.left >= 0.0 and placement.top >= 0.0


def test_result_never_uses_bottom_anchor():
    placement = position_tooltip(AnchorPoint(100, 700), TooltipBox(200, 80), _host(1200, 800), InteractionMode.POINTER)
    assert placement.uses_bottom_anchor is False


@pytest.mark.parametrize("mode", [InteractionMode.POINTER, InteractionMode.TOUCH])
def test_positioning_is_idempotent(mode):
    host = _host(1200, 800, offset=(240, 180), size=(700, 500), scale=2)
    first = position_tooltip(AnchorPoint(100, 220), TooltipBox(200, 80), host, mode)
    second = position_tooltip(AnchorPoint(100, 220), TooltipBox(200, 80), host, mode)
    assert first == second


def test_layout_samples_provider_once_per_event():
    calls = []

    def read_host():
        calls.append(1)
        return {"innerWidth": 400, "innerHeight": 600, "visualViewport": {"scale": 2.0 + len(calls)}}

    layout_tooltip(AnchorPoint(10, 300), TooltipBox(100, 40), CallableViewportProvider(read_host), InteractionMode.TOUCH)
    assert len(calls) == 1


@pytest.mark.parametrize("bad_size", [float("nan"), float("inf"), float("-inf")])
def test_touch_layout_survives_non_finite_visual_size(bad_size):
    host = HostViewport(
        inner_width=800.0,
        inner_height=600.0,
        visual=VisualViewportState(width=bad_size, height=500.0, offset_left=0.0, offset_top=0.0, scale=1.0),
    )
    style = layout_tooltip(AnchorPoint(10, 10), TooltipBox(100, 40), StaticViewportProvider(host), InteractionMode.TOUCH)
    assert style.max_width == 800 - 24
    assert style.max_height == 350
    assert math.isfinite(style.left) and math.isfinite(style.top)


def test_touch_layout_survives_non_finite_visual_height_when_zoomed():
    host = HostViewport(
        inner_width=400.0,
        inner_height=700.0,
        visual=VisualViewportState(width=200.0, height=float("inf"), scale=2.0),
    )
    style = layout_tooltip(AnchorPoint(10, 10), TooltipBox(100, 40), StaticViewportProvider(host), InteractionMode.TOUCH)
    assert style.max_width == 293
    assert style.max_height == round(700 * 0.7 / 0.6)
