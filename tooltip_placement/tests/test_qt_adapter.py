from __future__ import annotations

import pytest

pytestmark = pytest.mark.pyqt_required


@pytest.fixture(scope="module")
def qt_app():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


def test_provider_reports_widget_size_without_zoom(qt_app):
    from PyQt6.QtWidgets import QWidget

    from tooltip_placement.qt_adapter import QtViewportProvider
    from tooltip_placement.viewport_metrics import get_viewport_metrics

    host = QWidget()
    host.resize(640, 480)
    metrics = get_viewport_metrics(QtViewportProvider(host).snapshot())
    assert (metrics.width, metrics.height, metrics.scale) == (640.0, 480.0, 1.0)


def test_provider_maps_zoom_state_to_visual_viewport(qt_app):
    from PyQt6.QtWidgets import QWidget

    from tooltip_placement.qt_adapter import QtViewportProvider
    from tooltip_placement.viewport_metrics import get_viewport_metrics

    host = QWidget()
    host.resize(800, 600)
    provider = QtViewportProvider(host, lambda: (2.0, 100.0, 50.0))
    metrics = get_viewport_metrics(provider.snapshot())
    assert metrics.width == 400.0
    assert metrics.height == 300.0
    assert (metrics.offset_x, metrics.offset_y, metrics.scale) == (100.0, 50.0, 2.0)


def test_apply_style_moves_label_and_disables_wrap(qt_app):
    from PyQt6.QtWidgets import QLabel

    from tooltip_placement.qt_adapter import apply_tooltip_style
    from tooltip_placement.tooltip_style import TooltipStyle

    label = QLabel("Forecast interval band")
    label.setWordWrap(True)
    apply_tooltip_style(label, TooltipStyle(left=32.0, top=22.0, max_width=293, max_height=303, nowrap=True))
    assert (label.x(), label.y()) == (32, 22)
    assert label.maximumWidth() == 293
    assert label.maximumHeight() == 303
    assert label.wordWrap() is False


def test_apply_style_sets_scroll_policies(qt_app):
    from PyQt6.QtCore import Qt
    from PyQt6.QtWidgets import QScrollArea

    from tooltip_placement.qt_adapter import apply_tooltip_style
    from tooltip_placement.tooltip_style import TooltipStyle

    area = QScrollArea()
    apply_tooltip_style(area, TooltipStyle(left=0.0, top=0.0, max_width=176, width=176, overflow_x="auto", overflow_y="hidden"))
    assert area.horizontalScrollBarPolicy() == Qt.ScrollBarPolicy.ScrollBarAsNeeded
    assert area.verticalScrollBarPolicy() == Qt.ScrollBarPolicy.ScrollBarAlwaysOff
    assert area.minimumWidth() == 176
    assert area.maximumWidth() == 176


def test_apply_style_leaves_font_scaling_to_caller(qt_app):
    from PyQt6.QtWidgets import QLabel

    from tooltip_placement.qt_adapter import apply_tooltip_style
    from tooltip_placement.tooltip_style import TooltipStyle

    label = QLabel("Confidence score")
    before = label.font().pointSizeF()
    apply_tooltip_style(label, TooltipStyle(left=10.0, top=10.0, nowrap=True, scale=0.5))
    assert label.font().pointSizeF() == before
