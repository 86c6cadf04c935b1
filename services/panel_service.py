"""Lecture des saisies du panneau d'édition, avec valeurs de repli."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from config.constants import (
    DEFAULT_BLOCK_OPACITY,
    DEFAULT_COLOR,
    DEFAULT_GAP,
    DEFAULT_LABEL_DISTANCE,
    DEFAULT_LABEL_FONT_SIZE,
    DEFAULT_MULTIPLIER,
)
from models.layer import Layer
from models.panel_snapshot import LayerRow, LegendRow, PanelSnapshot
from utils.helpers import hex_to_int, parse_leading_float, parse_leading_int

logger = logging.getLogger(__name__)

# Réglages lus avec repli "valeur or défaut" (0 et saisie invalide -> défaut)
_FLOAT_FALLBACKS = {
    "label_distance": DEFAULT_LABEL_DISTANCE,
    "gap": DEFAULT_GAP,
    "height_multiplier": DEFAULT_MULTIPLIER,
    "width_multiplier": DEFAULT_MULTIPLIER,
    "channel_multiplier": DEFAULT_MULTIPLIER,
}


class PanelService:
    """Convertit un PanelSnapshot en couches, légende et réglages."""

    def parse(self, snapshot: PanelSnapshot) -> Tuple[List[Layer], List[Tuple[str, int]], Dict[str, Any]]:
        color_entries = self.parse_legend(snapshot.legend)
        settings = self.parse_settings(snapshot.settings)
        layers = self.parse_layers(snapshot.layers)
        return layers, color_entries, settings

    # ------------------------------------------------------------------ #
    # Layers
    # ------------------------------------------------------------------ #
    def parse_layers(self, rows: Iterable[LayerRow]) -> List[Layer]:
        """Every row becomes a layer carrying an explicit color."""
        layers = []
        for row in rows:
            layers.append(
                Layer(
                    name=str(row.name),
                    H=self.parse_dimension(row.H),
                    W=self.parse_dimension(row.W),
                    C=self.parse_dimension(row.C),
                    color=self.parse_color(row.color),
                )
            )
        return layers

    @staticmethod
    def parse_dimension(value: Any) -> int:
        """Leading integer, or 1 when missing, zero or negative."""
        parsed = parse_leading_int(value)
        if parsed is None or parsed < 1:
            logger.debug("Dimension %r invalide, repli sur 1", value)
            return 1
        return parsed

    @staticmethod
    def parse_color(value: Any, default: int = DEFAULT_COLOR) -> int:
        try:
            return hex_to_int(value)
        except ValueError:
            logger.debug("Couleur %r invalide, repli sur %06x", value, default)
            return default

    # ------------------------------------------------------------------ #
    # Legend
    # ------------------------------------------------------------------ #
    def parse_legend(self, rows: Iterable[LegendRow]) -> List[Tuple[str, int]]:
        """Ordered (type, color) pairs; blank names are dropped, duplicates keep their first slot."""
        colors: Dict[str, int] = {}
        for row in rows:
            type_name = str(row.type_name)
            if not type_name.strip():
                logger.debug("Type de légende vide ignoré")
                continue
            colors[type_name] = self.parse_color(row.color)
        return list(colors.items())

    # ------------------------------------------------------------------ #
    # Settings
    # ------------------------------------------------------------------ #
    def parse_settings(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """Return the settings dict expected by ViewSettingsModel.update."""
        settings: Dict[str, Any] = {}
        for key, default in _FLOAT_FALLBACKS.items():
            settings[key] = self._float_or(raw.get(key), default)

        font_size = parse_leading_int(raw.get("label_font_size"))
        settings["label_font_size"] = font_size or DEFAULT_LABEL_FONT_SIZE

        # L'opacité 0 est une valeur légitime: repli seulement si illisible
        opacity = parse_leading_float(raw.get("block_opacity"))
        settings["block_opacity"] = DEFAULT_BLOCK_OPACITY if opacity is None else opacity

        if "show_label_box" in raw:
            settings["show_label_box"] = bool(raw["show_label_box"])
        return settings

    @staticmethod
    def _float_or(value: Any, default: float) -> float:
        parsed: Optional[float] = parse_leading_float(value)
        return parsed or default
