from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Vec3 = Tuple[float, float, float]
Segment = Tuple[Vec3, Vec3]


@dataclass(frozen=True)
class LabelAnchor:
    """Text label pinned to a 3D position, with its callout segment."""

    text: str
    position: Vec3
    callout: Segment


@dataclass(frozen=True)
class BlockGeometry:
    """Box for one layer: center, (x, y, z) size and resolved 0xRRGGBB color."""

    index: int
    name: str
    center: Vec3
    size: Vec3
    color: int
    dimension_label: LabelAnchor
    name_label: Optional[LabelAnchor] = None

    @property
    def z_start(self) -> float:
        return self.center[2] - self.size[2] / 2.0

    @property
    def z_end(self) -> float:
        return self.center[2] + self.size[2] / 2.0


@dataclass(frozen=True)
class NetworkLayout:
    """Result of a layout pass; the view draws it as-is."""

    blocks: Tuple[BlockGeometry, ...] = ()
    connectors: Tuple[Segment, ...] = ()
    total_length: float = 0.0
    opacity: float = 1.0

    @property
    def center(self) -> Vec3:
        return (0.0, 0.0, self.total_length / 2.0)
