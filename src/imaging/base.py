"""
Image operation interfaces.

The motion core only talks to images through this capability, so the
algorithm can be exercised with a fake in tests and with OpenCV at runtime.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np


class ImageOps:
    """Primitive image transforms used by the preprocessor, detector and annotator."""

    def to_gray(self, image: np.ndarray) -> np.ndarray:
        """Luminance-weighted reduction of a BGR image to one channel."""
        raise NotImplementedError

    def blur(self, image: np.ndarray, kernel_size: int, sigma: float = 0.0) -> np.ndarray:
        """Symmetric Gaussian blur with a kernel_size x kernel_size kernel."""
        raise NotImplementedError

    def abs_diff(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def threshold(self, image: np.ndarray, cutoff: float, max_value: float) -> np.ndarray:
        """Binary threshold: pixels > cutoff become max_value, others 0."""
        raise NotImplementedError

    def dilate(self, image: np.ndarray, kernel_size: int, iterations: int) -> np.ndarray:
        """Dilate with a square rectangular structuring element."""
        raise NotImplementedError

    def find_external_contours(self, binary: np.ndarray) -> List[np.ndarray]:
        """Outermost contours only; nested contours are dropped."""
        raise NotImplementedError

    def contour_area(self, contour: np.ndarray) -> float:
        raise NotImplementedError

    def bounding_rect(self, contour: np.ndarray) -> Tuple[int, int, int, int]:
        """Return (x, y, width, height)."""
        raise NotImplementedError

    def draw_rectangle(
        self,
        image: np.ndarray,
        top_left: Tuple[int, int],
        bottom_right: Tuple[int, int],
        color: Tuple[int, int, int],
        thickness: int,
    ) -> None:
        """Draw a rectangle outline in place."""
        raise NotImplementedError
