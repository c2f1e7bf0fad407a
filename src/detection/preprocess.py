"""
Frame normalization ahead of differencing.

Grayscale first, then blur: the blur runs on the single-channel image.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from imaging.base import ImageOps
from imaging.opencv_ops import OpenCVImageOps
from models.errors import InvalidFrame


def check_frame(frame: Optional[np.ndarray], what: str = "frame") -> None:
    """Raise InvalidFrame unless frame is a non-empty 2-D or 3-D image array."""
    if frame is None:
        raise InvalidFrame(f"{what} is missing")
    if not isinstance(frame, np.ndarray):
        raise InvalidFrame(f"{what} must be a numpy array, got {type(frame).__name__}")
    if frame.ndim not in (2, 3):
        raise InvalidFrame(f"{what} must be a 2-D or 3-D array, got shape {frame.shape}")
    h, w = frame.shape[:2]
    if w == 0 or h == 0:
        raise InvalidFrame(f"{what} has zero size ({w}x{h})")


class Preprocessor:
    """Convert raw BGR frames into smoothed single-channel frames."""

    def __init__(
        self,
        blur_kernel_size: int = 21,
        blur_sigma: float = 0.0,
        ops: Optional[ImageOps] = None,
    ) -> None:
        """
        Args:
            blur_kernel_size: Gaussian kernel side, odd and >= 1.
            blur_sigma: Gaussian sigma; 0 derives it from the kernel size.
            ops: Image primitives; defaults to OpenCV.
        """
        if blur_kernel_size < 1 or blur_kernel_size % 2 == 0:
            raise ValueError(f"blur_kernel_size must be odd and >= 1, got {blur_kernel_size}")
        self.blur_kernel_size = blur_kernel_size
        self.blur_sigma = blur_sigma
        self.ops = ops or OpenCVImageOps()
        logging.debug(f"Preprocessor initialized (kernel={blur_kernel_size}, sigma={blur_sigma})")

    def normalize(self, raw: np.ndarray) -> np.ndarray:
        """
        Normalize a raw frame for differencing.
        
        Args:
            raw: BGR frame (H, W, 3) uint8. Single-channel input skips the conversion.
        
        Returns:
            Blurred grayscale frame (H, W) uint8.
        
        Raises:
            InvalidFrame: If the frame is missing or has zero width/height.
        """
        check_frame(raw, "raw frame")
        gray = self.ops.to_gray(raw)
        return self.ops.blur(gray, self.blur_kernel_size, self.blur_sigma)
