"""
3D view of the layer stack.

The scene is rendered with VisPy inside a Qt frame: one flat-shaded
translucent mesh per layer, black box outlines, grey callout and connector
lines. Text labels are plain Qt widgets laid over the canvas and moved to
the screen projection of their 3D anchor on every redraw, so they keep a
constant pixel size and can carry a border like regular widgets.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QImage
from PyQt6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget
from vispy import scene

from config.constants import (
    BACKGROUND_COLOR,
    CALLOUT_COLOR,
    CALLOUT_WIDTH,
    CAMERA_AZIMUTH,
    CAMERA_ELEVATION,
    DEFAULT_FONT_FAMILY,
    DEFAULT_LABEL_FONT_SIZE,
    FRUSTUM_SIZE,
    LIGHT_DIRECTION,
    OUTLINE_COLOR,
    OUTLINE_WIDTH,
)
from models.network_layout import LabelAnchor, NetworkLayout, Vec3
from services.layout_service import box_edges, box_mesh
from utils.helpers import int_to_hex, int_to_rgba
from views.legend_view import LegendView

_LABEL_STYLE = (
    "QLabel { background-color: rgba(255, 255, 255, 215); color: #000000;"
    " border: 1px solid #333333; border-radius: 3px; padding: 1px 4px; }"
)
_LABEL_STYLE_NO_BORDER = (
    "QLabel { background: transparent; color: #000000; border: none; padding: 1px 4px; }"
)


class NetworkView(QFrame):
    """Displays the layer stack built by the layout service."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        # VisPy canvas and scene
        self._canvas = scene.SceneCanvas(
            keys="interactive", bgcolor=int_to_hex(BACKGROUND_COLOR), show=False
        )
        self._view = self._canvas.central_widget.add_view()
        # fov=0 -> orthographic projection
        self._view.camera = scene.TurntableCamera(
            fov=0.0,
            up="+y",
            azimuth=CAMERA_AZIMUTH,
            elevation=CAMERA_ELEVATION,
            scale_factor=FRUSTUM_SIZE,
        )
        self._network_node = scene.Node(parent=self._view.scene)

        # Qt layout
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._canvas.native, 1)

        self._legend = LegendView(self)
        self._legend.move(12, 12)
        self._legend.raise_()

        # Overlay labels: (widget, 3D anchor)
        self._labels: List[Tuple[QLabel, Vec3]] = []
        self._font_family: str = DEFAULT_FONT_FAMILY
        self._font_size: int = DEFAULT_LABEL_FONT_SIZE
        self._show_label_box: bool = True

        self._canvas.events.draw.connect(self._on_canvas_draw)

    @property
    def legend_view(self) -> LegendView:
        return self._legend

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    def set_layout(
        self,
        layout: NetworkLayout,
        *,
        font_size: int = DEFAULT_LABEL_FONT_SIZE,
        show_label_box: bool = True,
    ) -> None:
        """Replace the whole scene with ``layout``."""
        self._font_size = int(font_size)
        self._show_label_box = bool(show_label_box)
        self.clear()

        outline_segments = []
        callout_segments = []
        for block in layout.blocks:
            vertices, faces = box_mesh(block.center, block.size)
            mesh = scene.visuals.Mesh(
                vertices=vertices,
                faces=faces,
                color=int_to_rgba(block.color, layout.opacity),
                shading="flat",
                parent=self._network_node,
            )
            if mesh.shading_filter is not None:
                mesh.shading_filter.light_dir = LIGHT_DIRECTION
            mesh.set_gl_state("translucent", depth_test=True, cull_face=False)
            outline_segments.append(box_edges(block.center, block.size))

            for anchor in (block.dimension_label, block.name_label):
                if anchor is None:
                    continue
                callout_segments.append(np.asarray(anchor.callout, dtype=np.float32))
                self._add_label(anchor)

        for start, end in layout.connectors:
            callout_segments.append(np.asarray((start, end), dtype=np.float32))

        self._add_segments(outline_segments, OUTLINE_COLOR, OUTLINE_WIDTH)
        self._add_segments(callout_segments, CALLOUT_COLOR, CALLOUT_WIDTH)
        self._canvas.update()

    def clear(self) -> None:
        """Remove every visual and overlay label from the scene."""
        for child in list(self._network_node.children):
            child.parent = None
        for label, _ in self._labels:
            label.setParent(None)
            label.deleteLater()
        self._labels = []

    @property
    def camera(self) -> scene.TurntableCamera:
        return self._view.camera

    def focus_on(self, center: Vec3) -> None:
        """Aim the camera at ``center`` from the default diagonal."""
        camera = self.camera
        camera.center = tuple(float(v) for v in center)
        camera.azimuth = CAMERA_AZIMUTH
        camera.elevation = CAMERA_ELEVATION
        camera.scale_factor = FRUSTUM_SIZE

    def set_label_font(self, family: str) -> None:
        self._font_family = str(family)
        for label, _ in self._labels:
            label.setFont(self._label_font())
            label.adjustSize()
        self._reposition_labels()

    def project(self, points: Sequence[Vec3]) -> np.ndarray:
        """Map scene points to canvas pixel coordinates, shape (N, 2)."""
        positions = np.atleast_2d(np.asarray(points, dtype=np.float32))
        transform = self._view.scene.node_transform(self._canvas.scene)
        mapped = np.atleast_2d(transform.map(positions))
        w = mapped[:, 3:4].copy()
        w[w == 0] = 1.0
        return mapped[:, :2] / w

    def snapshot(self) -> np.ndarray:
        """Grab the view (3D scene + labels + legend) as an (H, W, 4) uint8 array."""
        image = self.grab().toImage().convertToFormat(QImage.Format.Format_RGBA8888)
        width, height = image.width(), image.height()
        ptr = image.constBits()
        ptr.setsize(image.sizeInBytes())
        rows = np.frombuffer(ptr, dtype=np.uint8).reshape(height, image.bytesPerLine())
        return rows[:, : width * 4].reshape(height, width, 4).copy()

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #
    def _add_segments(self, segments: Sequence[np.ndarray], color: int, width: float) -> None:
        if not segments:
            return
        pos = np.concatenate(segments, axis=0).astype(np.float32)
        scene.visuals.Line(
            pos=pos,
            color=int_to_rgba(color),
            width=width,
            connect="segments",
            parent=self._network_node,
        )

    def _add_label(self, anchor: LabelAnchor) -> None:
        label = QLabel(anchor.text, self._canvas.native)
        label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        label.setStyleSheet(_LABEL_STYLE if self._show_label_box else _LABEL_STYLE_NO_BORDER)
        label.setFont(self._label_font())
        label.adjustSize()
        label.show()
        self._labels.append((label, anchor.position))

    def _label_font(self) -> QFont:
        font = QFont(self._font_family)
        font.setPixelSize(max(1, self._font_size))
        return font

    def _on_canvas_draw(self, event) -> None:
        self._reposition_labels()

    def _reposition_labels(self) -> None:
        """Move each overlay label onto the screen projection of its anchor."""
        if not self._labels:
            return
        screen = self.project([pos for _, pos in self._labels])
        for (label, _), (x, y) in zip(self._labels, screen):
            label.move(int(x - label.width() / 2), int(y - label.height() / 2))
