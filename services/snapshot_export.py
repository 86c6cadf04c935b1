from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image


class SnapshotExport:
    """Écrit une capture RGBA du canvas 3D en PNG."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)

    def save_png(self, path, rgba: np.ndarray) -> Path:
        image_array = np.asarray(rgba)
        if image_array.ndim != 3 or image_array.shape[2] not in (3, 4):
            raise ValueError("Snapshot must be an (H, W, 3|4) array.")
        if image_array.dtype != np.uint8:
            image_array = np.clip(image_array, 0, 255).astype(np.uint8)

        path = Path(path)
        if path.suffix.lower() != ".png":
            path = path.with_suffix(".png")
        Image.fromarray(image_array).save(path)
        self.logger.info("Capture exportée: %s (%dx%d)", path, image_array.shape[1], image_array.shape[0])
        return path
