"""
Modèles pour l'architecture MVC de l'application GUI.

- NetworkModel : pile de couches (nom, H, W, C, couleur)
- ColorMapModel : légende type -> couleur
- ViewSettingsModel : paramètres visuels (écarts, labels, opacité, multiplicateurs)
- NetworkLayout : géométrie calculée, consommée par la vue 3D
"""

from .layer import Layer
from .color_map_model import ColorMapModel
from .network_layout import BlockGeometry, LabelAnchor, NetworkLayout
from .network_model import NetworkModel
from .view_settings_model import ViewSettingsModel

__all__ = [
    'Layer',
    'ColorMapModel',
    'BlockGeometry',
    'LabelAnchor',
    'NetworkLayout',
    'NetworkModel',
    'ViewSettingsModel',
]
