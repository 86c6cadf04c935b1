from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from config.constants import CALLOUT_INSET, MIN_CALLOUT_OFFSET
from models.color_map_model import ColorMapModel
from models.layer import Layer
from models.network_layout import BlockGeometry, LabelAnchor, NetworkLayout, Vec3
from models.view_settings_model import ViewSettingsModel

# Triangles (indices dans les 8 sommets de box_corners), deux par face
_BOX_FACES = np.array(
    [
        [0, 1, 2], [0, 2, 3],  # -z
        [4, 6, 5], [4, 7, 6],  # +z
        [0, 4, 5], [0, 5, 1],  # -y
        [3, 2, 6], [3, 6, 7],  # +y
        [0, 3, 7], [0, 7, 4],  # -x
        [1, 5, 6], [1, 6, 2],  # +x
    ],
    dtype=np.uint32,
)

_BOX_EDGES = np.array(
    [
        [0, 1], [1, 2], [2, 3], [3, 0],
        [4, 5], [5, 6], [6, 7], [7, 4],
        [0, 4], [1, 5], [2, 6], [3, 7],
    ],
    dtype=np.uint32,
)


class LayoutService:
    """Calcule la géométrie 3D de la pile de couches (fonction pure, sans Qt)."""

    def compute_layout(
        self,
        layers: Sequence[Layer],
        color_map: ColorMapModel,
        settings: ViewSettingsModel,
    ) -> NetworkLayout:
        """Place layers along +z, each one ``log(C+1) * channel_multiplier`` deep.

        Width and height follow ``log(W+1)`` and ``log(H+1)`` with their own
        multipliers and do not influence placement.
        """
        if not layers:
            return NetworkLayout(opacity=settings.block_opacity)

        sizes = self.visual_sizes(layers, settings)
        depths = sizes[:, 2]
        gap = float(settings.gap)
        # start[i] = somme des profondeurs + écarts des couches précédentes
        starts = np.concatenate(([0.0], np.cumsum(depths + gap)[:-1]))
        centers_z = starts + depths / 2.0
        offset = self.callout_offset(settings.label_distance)

        blocks = []
        for index, layer in enumerate(layers):
            width, height, depth = (float(v) for v in sizes[index])
            z = float(centers_z[index])
            blocks.append(
                BlockGeometry(
                    index=index,
                    name=layer.name,
                    center=(0.0, 0.0, z),
                    size=(width, height, depth),
                    color=color_map.resolve_color(layer),
                    dimension_label=self._anchor(layer.dimension_text, height, z, settings.label_distance, offset, -1.0),
                    name_label=(
                        self._anchor(layer.name, height, z, settings.label_distance, offset, 1.0)
                        if settings.show_name_labels
                        else None
                    ),
                )
            )

        connectors = tuple(
            ((0.0, 0.0, prev.z_end), (0.0, 0.0, cur.z_start))
            for prev, cur in zip(blocks[:-1], blocks[1:])
        )
        total_length = float(depths.sum() + gap * (len(layers) - 1))
        return NetworkLayout(
            blocks=tuple(blocks),
            connectors=connectors,
            total_length=total_length,
            opacity=settings.block_opacity,
        )

    @staticmethod
    def visual_sizes(layers: Sequence[Layer], settings: ViewSettingsModel) -> np.ndarray:
        """Return an (N, 3) array of (x, y, z) box extents."""
        dims = np.array([[layer.W, layer.H, layer.C] for layer in layers], dtype=np.float64).reshape(-1, 3)
        multipliers = np.array(
            [settings.width_multiplier, settings.height_multiplier, settings.channel_multiplier],
            dtype=np.float64,
        )
        return np.log1p(dims) * multipliers

    @staticmethod
    def callout_offset(label_distance: float) -> float:
        """Callout lines stop just short of the label."""
        return max(MIN_CALLOUT_OFFSET, float(label_distance) - CALLOUT_INSET)

    @staticmethod
    def _anchor(
        text: str, height: float, z: float, distance: float, offset: float, direction: float
    ) -> LabelAnchor:
        edge_y = direction * height / 2.0
        return LabelAnchor(
            text=text,
            position=(0.0, edge_y + direction * float(distance), z),
            callout=((0.0, edge_y, z), (0.0, edge_y + direction * offset, z)),
        )


def box_corners(center: Vec3, size: Vec3) -> np.ndarray:
    """Return the 8 corners of an axis-aligned box, shape (8, 3), float32."""
    half = np.asarray(size, dtype=np.float32) / 2.0
    signs = np.array(
        [
            [-1, -1, -1], [1, -1, -1], [1, 1, -1], [-1, 1, -1],
            [-1, -1, 1], [1, -1, 1], [1, 1, 1], [-1, 1, 1],
        ],
        dtype=np.float32,
    )
    return np.asarray(center, dtype=np.float32) + signs * half


def box_mesh(center: Vec3, size: Vec3) -> Tuple[np.ndarray, np.ndarray]:
    """Return (vertices, faces) of a box for a triangle mesh visual."""
    return box_corners(center, size), _BOX_FACES.copy()


def box_edges(center: Vec3, size: Vec3) -> np.ndarray:
    """Return the 12 outline edges as a (24, 3) array of segment endpoints."""
    corners = box_corners(center, size)
    return corners[_BOX_EDGES.reshape(-1)]
