"""
Tests for the rebuild cycle driven by NetworkController.

Views are replaced by mocks; only the wiring between models, services and
views is exercised here.
"""

import logging
from unittest.mock import MagicMock

import pytest

pytest.importorskip("PyQt6", reason="PyQt6 not installed")
pytest.importorskip("vispy", reason="vispy not installed")

from controllers.network_controller import NetworkController  # noqa: E402
from models.color_map_model import ColorMapModel  # noqa: E402
from models.layer import Layer  # noqa: E402
from models.network_model import NetworkModel  # noqa: E402
from models.panel_snapshot import LayerRow, LegendRow, PanelSnapshot  # noqa: E402
from models.view_settings_model import ViewSettingsModel  # noqa: E402
from services.layout_service import LayoutService  # noqa: E402
from services.panel_service import PanelService  # noqa: E402


@pytest.fixture()
def controller():
    return NetworkController(
        network_model=NetworkModel([Layer("Input (x)", 4, 4, 1), Layer("self.conv1", 2, 2, 8)]),
        color_map_model=ColorMapModel(),
        view_settings_model=ViewSettingsModel(),
        layout_service=LayoutService(),
        panel_service=PanelService(),
        network_view=MagicMock(),
        legend_view=MagicMock(),
        edit_panel_view=MagicMock(),
        logger=logging.getLogger("test"),
    )


class TestRebuild:
    def test_rebuild_draws_layout_and_legend(self, controller):
        layout = controller.rebuild()

        assert len(layout.blocks) == 2
        controller.network_view.set_layout.assert_called_once_with(
            layout, font_size=12, show_label_box=True
        )
        entries = list(controller.legend_view.set_entries.call_args.args[0])
        assert [name for name, _ in entries] == ["Input", "Pool", "Conv", "LIF", "Flatten", "FC"]
        controller.network_view.focus_on.assert_called_once_with(layout.center)
        assert controller.layout is layout

    def test_panel_signals_are_connected(self, controller):
        panel = controller.edit_panel_view
        panel.update_requested.connect.assert_called_once_with(controller.on_update_requested)
        panel.add_layer_requested.connect.assert_called_once_with(controller.on_add_layer_requested)
        panel.add_type_requested.connect.assert_called_once_with(controller.on_add_type_requested)


class TestEditPanel:
    def test_open_seeds_rows_with_resolved_colors(self, controller):
        controller.open_edit_panel()

        panel = controller.edit_panel_view
        rows = list(panel.set_layer_rows.call_args.args[0])
        assert rows == [("Input (x)", 4, 4, 1, "#4285f4"), ("self.conv1", 2, 2, 8, "#f4b400")]
        legend_rows = list(panel.set_legend_rows.call_args.args[0])
        assert legend_rows[0] == ("Input", "#4285f4")
        assert panel.set_settings.call_args.args[0]["gap"] == 2.0
        panel.show.assert_called_once()

    def test_update_replaces_state_and_closes(self, controller):
        snapshot = PanelSnapshot(
            layers=(
                LayerRow("Dense", "16", "", "3", "#101010"),
                LayerRow("Out", "1", "1", "1", "#202020"),
            ),
            legend=(LegendRow("Dense", "#101010"),),
            settings={"gap": "5", "block_opacity": 0.5, "show_label_box": False},
        )

        controller.on_update_requested(snapshot)

        layers = controller.network_model.layers
        assert [(l.name, l.H, l.W, l.C, l.color) for l in layers] == [
            ("Dense", 16, 1, 3, 0x101010),
            ("Out", 1, 1, 1, 0x202020),
        ]
        assert controller.color_map_model.as_dict() == {"Dense": 0x101010}
        assert controller.view_settings_model.gap == 5.0
        assert controller.view_settings_model.show_label_box is False
        assert controller.layout.opacity == pytest.approx(0.5)
        controller.edit_panel_view.hide.assert_called_once()

    def test_add_layer_row_uses_legend_color(self, controller):
        controller.color_map_model.set_entries([("Layer", 0x00AA00)])
        controller.on_add_layer_requested()
        controller.edit_panel_view.add_layer_row.assert_called_once_with("New Layer", 1, 1, 1, "#00aa00")

    def test_add_type_row(self, controller):
        controller.on_add_type_requested()
        controller.edit_panel_view.add_legend_row.assert_called_once_with("NewType", "#aaaaaa")


class TestFonts:
    def test_font_reaches_labels_and_legend(self, controller):
        controller.set_font_family("Georgia")

        assert controller.view_settings_model.font_family == "Georgia"
        controller.network_view.set_label_font.assert_called_with("Georgia")
        controller.legend_view.set_font_family.assert_called_with("Georgia")
