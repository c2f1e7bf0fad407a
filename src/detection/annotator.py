"""
Overlay drawing for detected motion.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from imaging.base import ImageOps
from imaging.opencv_ops import OpenCVImageOps
from models.detection import BoundingBox

# BGR
COLOR_MOTION = (0, 255, 0)


class Annotator:
    """Draw bounding boxes onto a copy of a frame."""

    def __init__(
        self,
        color: Tuple[int, int, int] = COLOR_MOTION,
        thickness: int = 2,
        ops: Optional[ImageOps] = None,
    ) -> None:
        self.color = tuple(int(c) for c in color)
        self.thickness = thickness
        self.ops = ops or OpenCVImageOps()

    def annotate(self, frame: np.ndarray, boxes: Sequence[BoundingBox]) -> np.ndarray:
        """Return a copy of frame with one rectangle outline per box; frame is left untouched."""
        out = frame.copy()
        for box in boxes:
            top_left, bottom_right = box.corners()
            self.ops.draw_rectangle(out, top_left, bottom_right, self.color, self.thickness)
        return out
