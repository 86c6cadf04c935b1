from __future__ import annotations

from typing import Iterable, List, Optional

from config.constants import DEFAULT_LAYERS
from models.layer import Layer


class NetworkModel:
    """Ordered layer stack; order defines placement along the stack axis."""

    def __init__(self, layers: Optional[Iterable[Layer]] = None) -> None:
        if layers is None:
            layers = self.default_layers()
        self._layers: List[Layer] = list(layers)

    @staticmethod
    def default_layers() -> List[Layer]:
        return [Layer.from_dict(entry) for entry in DEFAULT_LAYERS]

    @property
    def layers(self) -> List[Layer]:
        return list(self._layers)

    def replace_layers(self, layers: Iterable[Layer]) -> None:
        """Swap the whole stack (edits are never applied in place)."""
        self._layers = list(layers)
