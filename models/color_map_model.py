from __future__ import annotations

from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from config.constants import DEFAULT_COLOR, DEFAULT_COLOR_MAP, DEFAULT_TYPE, FALLBACK_TYPES
from models.layer import Layer


class ColorMapModel:
    """
    Ordered type-name -> 0xRRGGBB legend.
    Insertion order drives both the legend display and name matching.
    Pure model: no UI, no Qt.
    """

    def __init__(self, entries: Optional[Mapping[str, int]] = None) -> None:
        self._colors: Dict[str, int] = {}
        self.set_entries((entries if entries is not None else DEFAULT_COLOR_MAP).items())

    # ------------------------------------------------------------------ #
    # Entries
    # ------------------------------------------------------------------ #
    def set_entries(self, entries: Iterable[Tuple[str, int]]) -> None:
        """Replace the whole legend; later duplicates overwrite the color in place."""
        colors: Dict[str, int] = {}
        for type_name, color in entries:
            colors[str(type_name)] = int(color) & 0xFFFFFF
        self._colors = colors

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(list(self._colors.items()))

    def as_dict(self) -> Dict[str, int]:
        return dict(self._colors)

    def get(self, type_name: str) -> Optional[int]:
        return self._colors.get(type_name)

    # ------------------------------------------------------------------ #
    # Resolution
    # ------------------------------------------------------------------ #
    def layer_type(self, name: str) -> str:
        """Return the legend type whose name appears in ``name`` (case-insensitive)."""
        lower_name = name.lower()
        for type_name in self._colors:
            if type_name.lower() in lower_name:
                return type_name
        for needle, type_name in FALLBACK_TYPES:
            if needle in lower_name:
                return type_name
        return DEFAULT_TYPE

    def color_for_name(self, name: str) -> int:
        color = self.get(self.layer_type(name))
        return DEFAULT_COLOR if color is None else color

    def resolve_color(self, layer: Layer) -> int:
        """Explicit layer color first, then the legend, then the default gray."""
        if layer.color is not None:
            return layer.color
        return self.color_for_name(layer.name)
