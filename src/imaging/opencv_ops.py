"""
OpenCV implementation of ImageOps.

cv2.error is translated into ProcessingError here so nothing above this
layer needs to know about OpenCV exceptions.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Tuple

import cv2
import numpy as np

from models.errors import ProcessingError
from .base import ImageOps


@contextmanager
def translate_cv_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except cv2.error as e:
        raise ProcessingError(f"{operation} failed: {e}") from e


class OpenCVImageOps(ImageOps):
    """ImageOps backed by cv2."""

    def to_gray(self, image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            return image
        with translate_cv_errors("grayscale conversion"):
            return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

    def blur(self, image: np.ndarray, kernel_size: int, sigma: float = 0.0) -> np.ndarray:
        with translate_cv_errors("gaussian blur"):
            return cv2.GaussianBlur(image, (kernel_size, kernel_size), sigma)

    def abs_diff(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        with translate_cv_errors("absdiff"):
            return cv2.absdiff(a, b)

    def threshold(self, image: np.ndarray, cutoff: float, max_value: float) -> np.ndarray:
        with translate_cv_errors("threshold"):
            _, binary = cv2.threshold(image, cutoff, max_value, cv2.THRESH_BINARY)
        return binary

    def dilate(self, image: np.ndarray, kernel_size: int, iterations: int) -> np.ndarray:
        with translate_cv_errors("dilate"):
            kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (kernel_size, kernel_size))
            return cv2.dilate(image, kernel, iterations=iterations)

    def find_external_contours(self, binary: np.ndarray) -> List[np.ndarray]:
        with translate_cv_errors("findContours"):
            contours, _ = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        return list(contours)

    def contour_area(self, contour: np.ndarray) -> float:
        with translate_cv_errors("contourArea"):
            return float(cv2.contourArea(contour))

    def bounding_rect(self, contour: np.ndarray) -> Tuple[int, int, int, int]:
        with translate_cv_errors("boundingRect"):
            x, y, w, h = cv2.boundingRect(contour)
        return int(x), int(y), int(w), int(h)

    def draw_rectangle(
        self,
        image: np.ndarray,
        top_left: Tuple[int, int],
        bottom_right: Tuple[int, int],
        color: Tuple[int, int, int],
        thickness: int,
    ) -> None:
        with translate_cv_errors("rectangle"):
            cv2.rectangle(image, top_left, bottom_right, color, thickness)
