"""Controller du diagramme: cycle reconstruction complète à chaque édition."""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional, Tuple

from config.constants import NEW_LAYER, NEW_TYPE_COLOR, NEW_TYPE_NAME
from models.color_map_model import ColorMapModel
from models.layer import Layer
from models.network_layout import NetworkLayout
from models.network_model import NetworkModel
from models.panel_snapshot import PanelSnapshot
from models.view_settings_model import ViewSettingsModel
from services.layout_service import LayoutService
from services.panel_service import PanelService
from utils.helpers import int_to_hex
from views.edit_panel_view import EditPanelView
from views.legend_view import LegendView
from views.network_view import NetworkView


class NetworkController:
    """Synchronise modèles, vue 3D, légende et panneau d'édition."""

    def __init__(
        self,
        *,
        network_model: NetworkModel,
        color_map_model: ColorMapModel,
        view_settings_model: ViewSettingsModel,
        layout_service: LayoutService,
        panel_service: PanelService,
        network_view: NetworkView,
        legend_view: LegendView,
        edit_panel_view: EditPanelView,
        logger: logging.Logger,
    ) -> None:
        self.network_model = network_model
        self.color_map_model = color_map_model
        self.view_settings_model = view_settings_model
        self.layout_service = layout_service
        self.panel_service = panel_service
        self.network_view = network_view
        self.legend_view = legend_view
        self.edit_panel_view = edit_panel_view
        self.logger = logger
        self._layout: Optional[NetworkLayout] = None

        self.edit_panel_view.update_requested.connect(self.on_update_requested)
        self.edit_panel_view.add_layer_requested.connect(self.on_add_layer_requested)
        self.edit_panel_view.add_type_requested.connect(self.on_add_type_requested)

    @property
    def layout(self) -> Optional[NetworkLayout]:
        return self._layout

    # ------------------------------------------------------------------ #
    # Rebuild
    # ------------------------------------------------------------------ #
    def rebuild(self) -> NetworkLayout:
        """Recalcule la géométrie, redessine la scène et la légende, recentre la caméra."""
        settings = self.view_settings_model
        layout = self.layout_service.compute_layout(
            self.network_model.layers, self.color_map_model, settings
        )
        self._layout = layout
        self.network_view.set_layout(
            layout,
            font_size=settings.label_font_size,
            show_label_box=settings.show_label_box,
        )
        self.network_view.set_label_font(settings.font_family)
        self.legend_view.set_entries(self.color_map_model.items())
        self.network_view.focus_on(layout.center)
        self.logger.info(
            "Réseau reconstruit: %d couches, longueur totale %.2f",
            len(layout.blocks),
            layout.total_length,
        )
        return layout

    def apply_diagram(
        self,
        layers: Iterable[Layer],
        color_entries: Iterable[Tuple[str, int]],
        settings: Mapping,
    ) -> None:
        """Remplace tout l'état (légende, réglages, couches) puis reconstruit."""
        self.color_map_model.set_entries(color_entries)
        self.view_settings_model.update(settings)
        self.network_model.replace_layers(layers)
        self.rebuild()

    # ------------------------------------------------------------------ #
    # Edit panel
    # ------------------------------------------------------------------ #
    def open_edit_panel(self) -> None:
        """Ouvre le panneau d'édition, pré-rempli avec l'état courant."""
        self.edit_panel_view.set_layer_rows(self._layer_rows(self.network_model.layers))
        self.edit_panel_view.set_legend_rows(
            (type_name, int_to_hex(color)) for type_name, color in self.color_map_model.items()
        )
        self.edit_panel_view.set_settings(self.view_settings_model.as_dict())
        self.edit_panel_view.show()
        self.edit_panel_view.raise_()
        self.edit_panel_view.activateWindow()

    def on_update_requested(self, snapshot: PanelSnapshot) -> None:
        layers, color_entries, settings = self.panel_service.parse(snapshot)
        self.apply_diagram(layers, color_entries, settings)
        self.edit_panel_view.hide()

    def on_add_layer_requested(self) -> None:
        layer = Layer.from_dict(NEW_LAYER)
        ((name, h, w, c, color),) = self._layer_rows([layer])
        self.edit_panel_view.add_layer_row(name, h, w, c, color)

    def on_add_type_requested(self) -> None:
        self.edit_panel_view.add_legend_row(NEW_TYPE_NAME, NEW_TYPE_COLOR)

    # ------------------------------------------------------------------ #
    # Fonts
    # ------------------------------------------------------------------ #
    def set_font_family(self, family: str) -> None:
        """Applique la police aux labels 3D et à la légende."""
        self.view_settings_model.set_font_family(family)
        self.network_view.set_label_font(family)
        self.legend_view.set_font_family(family)
        self.logger.debug("Police: %s", family)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _layer_rows(self, layers: Iterable[Layer]) -> List[Tuple[str, int, int, int, str]]:
        return [
            (layer.name, layer.H, layer.W, layer.C, int_to_hex(self.color_map_model.resolve_color(layer)))
            for layer in layers
        ]
