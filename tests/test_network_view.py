"""
Widget tests for the VisPy scene view (offscreen Qt).
"""

import pytest

pytest.importorskip("PyQt6", reason="PyQt6 not installed")
pytest.importorskip("vispy", reason="vispy not installed")

from PyQt6.QtWidgets import QLabel  # noqa: E402

from config.constants import CAMERA_AZIMUTH, CAMERA_ELEVATION  # noqa: E402
from services.layout_service import LayoutService  # noqa: E402
from views.network_view import NetworkView  # noqa: E402


@pytest.fixture()
def view(qapp):
    widget = NetworkView()
    widget.resize(800, 600)
    yield widget
    widget.deleteLater()


def scene_labels(view):
    """Labels laid over the canvas (the legend lives in its own frame)."""
    legend = view.legend_view
    return [label for label in view.findChildren(QLabel) if not legend.isAncestorOf(label)]


def build(view, layers, color_map, settings, **kwargs):
    layout = LayoutService().compute_layout(layers, color_map, settings)
    view.set_layout(layout, **kwargs)
    return layout


class TestCamera:
    def test_focus_on_targets_center(self, view):
        view.focus_on((0.0, 0.0, 12.5))

        assert tuple(view.camera.center) == pytest.approx((0.0, 0.0, 12.5))
        assert view.camera.azimuth == pytest.approx(CAMERA_AZIMUTH)
        assert view.camera.elevation == pytest.approx(CAMERA_ELEVATION)

    def test_eye_sits_on_the_positive_diagonal(self, view):
        view.focus_on((0.0, 0.0, 0.0))

        origin, x_axis, y_axis, z_axis = view.project(
            [(0.0, 0.0, 0.0), (10.0, 0.0, 0.0), (0.0, 10.0, 0.0), (0.0, 0.0, 10.0)]
        )

        # +x to the right, +z to the left, +y up (screen y grows downwards)
        assert x_axis[0] > origin[0]
        assert z_axis[0] < origin[0]
        assert y_axis[1] < origin[1]
        assert y_axis[0] == pytest.approx(origin[0], abs=1.0)


class TestLabels:
    def test_two_labels_per_layer(self, view, three_layers, color_map, settings):
        build(view, three_layers, color_map, settings)

        texts = sorted(label.text() for label in scene_labels(view))
        assert texts == sorted(
            ["180x320x2", "Input (x)", "42x77x8", "self.conv1", "1x1x2448", "Flatten"]
        )

    def test_hidden_name_labels(self, view, three_layers, color_map, settings):
        settings.set_show_name_labels(False)
        build(view, three_layers, color_map, settings)

        assert sorted(label.text() for label in scene_labels(view)) == sorted(
            ["180x320x2", "42x77x8", "1x1x2448"]
        )

    def test_rebuild_replaces_labels(self, view, three_layers, color_map, settings):
        build(view, three_layers, color_map, settings)
        build(view, three_layers[:1], color_map, settings)

        assert len(scene_labels(view)) == 2

    def test_clear_removes_labels(self, view, three_layers, color_map, settings):
        build(view, three_layers, color_map, settings)
        view.clear()
        assert scene_labels(view) == []

    @pytest.mark.parametrize("show_box, border", [(True, "border: 1px"), (False, "border: none")])
    def test_label_border_toggle(self, view, three_layers, color_map, settings, show_box, border):
        build(view, three_layers, color_map, settings, show_label_box=show_box)

        assert all(border in label.styleSheet() for label in scene_labels(view))

    def test_font_size_in_pixels(self, view, three_layers, color_map, settings):
        build(view, three_layers, color_map, settings, font_size=18)

        assert {label.font().pixelSize() for label in scene_labels(view)} == {18}

    def test_font_family_reaches_existing_labels(self, view, three_layers, color_map, settings):
        build(view, three_layers, color_map, settings, font_size=14)
        view.set_label_font("Courier New")

        labels = scene_labels(view)
        assert {label.font().family() for label in labels} == {"Courier New"}
        assert {label.font().pixelSize() for label in labels} == {14}

    def test_new_labels_keep_font_family(self, view, three_layers, color_map, settings):
        view.set_label_font("Georgia")
        build(view, three_layers, color_map, settings)

        assert {label.font().family() for label in scene_labels(view)} == {"Georgia"}
