"""
Sauvegarde et chargement d'un diagramme (couches, légende, réglages) au format JSON.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from config.constants import DEFAULT_COLOR_MAP
from models.layer import Layer
from models.network_model import NetworkModel
from models.view_settings_model import ViewSettingsModel
from utils.helpers import hex_to_int, int_to_hex

FORMAT_VERSION = 1


class DiagramFormatError(ValueError):
    """Document JSON lisible mais qui ne décrit pas un diagramme valide."""


class DiagramDocument:
    """Contenu d'un fichier diagramme, déjà validé."""

    def __init__(
        self,
        layers: List[Layer],
        color_map: List[Tuple[str, int]],
        settings: Dict[str, Any],
    ) -> None:
        self.layers = layers
        self.color_map = color_map
        self.settings = settings


class JsonService:
    """Lit et écrit les diagrammes sur disque."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)

    def save(
        self,
        path,
        layers: List[Layer],
        color_map: Mapping[str, int],
        settings: ViewSettingsModel,
    ) -> Path:
        """
        Écrit le diagramme courant.

        Args:
            path: Fichier de sortie (.json)
            layers: Pile de couches à écrire
            color_map: Légende type -> 0xRRGGBB
            settings: Réglages visuels

        Returns:
            Chemin du fichier écrit
        """
        path = Path(path)
        document = {
            "version": FORMAT_VERSION,
            "layers": [self._layer_to_json(layer) for layer in layers],
            "color_map": {name: int_to_hex(color) for name, color in color_map.items()},
            "settings": settings.as_dict(),
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
        self.logger.info(f"Diagramme sauvegardé: {path} ({len(layers)} couches)")
        return path

    def load(self, path) -> DiagramDocument:
        """
        Charge un diagramme. Les sections absentes reprennent les valeurs par défaut.

        Raises:
            OSError: fichier illisible
            UnicodeDecodeError: fichier non UTF-8
            json.JSONDecodeError: contenu non JSON
            DiagramFormatError: structure invalide
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        document = self.parse(data)
        self.logger.info(f"Diagramme chargé: {path} ({len(document.layers)} couches)")
        return document

    def parse(self, data: Any) -> DiagramDocument:
        if isinstance(data, list):
            # Fichier ne contenant que la liste des couches
            data = {"layers": data}
        if not isinstance(data, dict):
            raise DiagramFormatError("Le document doit être un objet JSON")

        raw_layers = data.get("layers")
        if raw_layers is None:
            layers = NetworkModel.default_layers()
        elif isinstance(raw_layers, list):
            layers = [self._layer_from_json(entry, idx) for idx, entry in enumerate(raw_layers)]
        else:
            raise DiagramFormatError("'layers' doit être une liste")

        raw_colors = data.get("color_map")
        if raw_colors is None:
            color_map = list(DEFAULT_COLOR_MAP.items())
        elif isinstance(raw_colors, dict):
            color_map = [(str(name), self._color_from_json(value)) for name, value in raw_colors.items()]
        else:
            raise DiagramFormatError("'color_map' doit être un objet")

        raw_settings = data.get("settings") or {}
        if not isinstance(raw_settings, dict):
            raise DiagramFormatError("'settings' doit être un objet")
        settings = {key: raw_settings[key] for key in ViewSettingsModel.FIELDS if key in raw_settings}
        for key in ("show_label_box", "show_name_labels"):
            if key in settings and not isinstance(settings[key], bool):
                raise DiagramFormatError(f"Réglage '{key}': booléen attendu, reçu {settings[key]!r}")
        try:
            ViewSettingsModel().update(settings)
        except (TypeError, ValueError, OverflowError) as exc:
            raise DiagramFormatError(f"Réglages invalides: {exc}") from exc

        return DiagramDocument(layers=layers, color_map=color_map, settings=settings)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def _layer_to_json(layer: Layer) -> Dict[str, Any]:
        data = layer.to_dict()
        if layer.color is not None:
            data["color"] = int_to_hex(layer.color)
        return data

    def _layer_from_json(self, entry: Any, index: int) -> Layer:
        if not isinstance(entry, dict):
            raise DiagramFormatError(f"Couche {index}: objet attendu")
        missing = [key for key in ("name", "H", "W", "C") if key not in entry]
        if missing:
            raise DiagramFormatError(f"Couche {index}: champs manquants {missing}")
        color: Optional[int] = None
        if entry.get("color") is not None:
            color = self._color_from_json(entry["color"])
        try:
            layer = Layer(
                name=str(entry["name"]),
                H=int(entry["H"]),
                W=int(entry["W"]),
                C=int(entry["C"]),
                color=color,
            )
        except (TypeError, ValueError, OverflowError) as exc:
            raise DiagramFormatError(f"Couche {index}: dimensions invalides") from exc
        if min(layer.H, layer.W, layer.C) < 1:
            raise DiagramFormatError(f"Couche {index}: dimensions < 1")
        return layer

    @staticmethod
    def _color_from_json(value: Any) -> int:
        if isinstance(value, bool):
            raise DiagramFormatError(f"Couleur invalide: {value!r}")
        if isinstance(value, int):
            return value & 0xFFFFFF
        try:
            return hex_to_int(value)
        except ValueError as exc:
            raise DiagramFormatError(f"Couleur invalide: {value!r}") from exc
