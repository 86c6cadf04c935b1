from typing import Any, Dict, Mapping

from config.constants import (
    DEFAULT_BLOCK_OPACITY,
    DEFAULT_FONT_FAMILY,
    DEFAULT_GAP,
    DEFAULT_LABEL_DISTANCE,
    DEFAULT_LABEL_FONT_SIZE,
    DEFAULT_MULTIPLIER,
)


class ViewSettingsModel:
    """
    Stores the visual parameters of the diagram: spacing, labels, opacity,
    scaling multipliers and font family.
    Pure model: no UI, no Qt, no services.
    """

    FIELDS = (
        "gap",
        "label_distance",
        "label_font_size",
        "block_opacity",
        "show_label_box",
        "show_name_labels",
        "height_multiplier",
        "width_multiplier",
        "channel_multiplier",
        "font_family",
    )

    def __init__(self) -> None:

        # --- Spacing & labels ---
        self.gap: float = DEFAULT_GAP
        self.label_distance: float = DEFAULT_LABEL_DISTANCE
        self.label_font_size: int = DEFAULT_LABEL_FONT_SIZE
        self.show_label_box: bool = True
        self.show_name_labels: bool = True
        self.font_family: str = DEFAULT_FONT_FAMILY

        # --- Blocks ---
        self.block_opacity: float = DEFAULT_BLOCK_OPACITY

        # --- Scaling ---
        self.height_multiplier: float = DEFAULT_MULTIPLIER
        self.width_multiplier: float = DEFAULT_MULTIPLIER
        self.channel_multiplier: float = DEFAULT_MULTIPLIER

    # ------------------------------------------------------------------ #
    # Setters
    # ------------------------------------------------------------------ #
    def set_gap(self, gap: float) -> None:
        self.gap = float(gap)

    def set_label_distance(self, distance: float) -> None:
        self.label_distance = float(distance)

    def set_label_font_size(self, size: int) -> None:
        self.label_font_size = int(size)

    def set_block_opacity(self, opacity: float) -> None:
        """Store opacity clamped to [0, 1]."""
        self.block_opacity = max(0.0, min(1.0, float(opacity)))

    def set_show_label_box(self, visible: bool) -> None:
        self.show_label_box = bool(visible)

    def set_show_name_labels(self, visible: bool) -> None:
        self.show_name_labels = bool(visible)

    def set_font_family(self, family: str) -> None:
        self.font_family = str(family)

    def set_multipliers(self, *, height: float, width: float, channel: float) -> None:
        self.height_multiplier = float(height)
        self.width_multiplier = float(width)
        self.channel_multiplier = float(channel)

    # ------------------------------------------------------------------ #
    # Bulk access
    # ------------------------------------------------------------------ #
    def as_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELDS}

    def update(self, values: Mapping[str, Any]) -> None:
        """Apply known keys from ``values``; unknown keys are ignored."""
        setters = {
            "gap": self.set_gap,
            "label_distance": self.set_label_distance,
            "label_font_size": self.set_label_font_size,
            "block_opacity": self.set_block_opacity,
            "show_label_box": self.set_show_label_box,
            "show_name_labels": self.set_show_name_labels,
            "font_family": self.set_font_family,
        }
        for key, setter in setters.items():
            if key in values:
                setter(values[key])
        if any(key in values for key in ("height_multiplier", "width_multiplier", "channel_multiplier")):
            self.set_multipliers(
                height=values.get("height_multiplier", self.height_multiplier),
                width=values.get("width_multiplier", self.width_multiplier),
                channel=values.get("channel_multiplier", self.channel_multiplier),
            )
