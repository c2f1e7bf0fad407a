"""
Frame-differencing motion detector.

The detector compares each normalized frame against the one before it:
absolute difference, binary threshold, dilation, external contours, then
an area filter before reducing each surviving contour to its bounding box.
The reference is always the immediately preceding frame, so continuous
motion shows up while a change that stops moving disappears after one frame.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

import numpy as np

from imaging.base import ImageOps
from imaging.opencv_ops import OpenCVImageOps
from models.config import MotionConfig
from models.detection import BoundingBox
from models.errors import InvalidFrame
from .preprocess import check_frame


class DetectorState(str, Enum):
    UNINITIALIZED = "uninitialized"
    TRACKING = "tracking"


class MotionDetector:
    """
    Detect moving regions between consecutive normalized frames.
    
    Each instance owns its reference frame; instances must not be shared
    between pipelines.
    """

    def __init__(self, config: Optional[MotionConfig] = None, ops: Optional[ImageOps] = None) -> None:
        self.config = config or MotionConfig()
        self.ops = ops or OpenCVImageOps()
        if self.config.dilation_kernel_size < 1:
            raise ValueError("dilation_kernel_size must be >= 1")
        if self.config.dilation_iterations < 0:
            raise ValueError("dilation_iterations must be >= 0")
        if self.config.min_area < 0:
            raise ValueError("min_area must be >= 0")

        self._reference: Optional[np.ndarray] = None

        logging.info(
            f"Motion detector initialized (threshold={self.config.diff_threshold}, "
            f"min_area={self.config.min_area})"
        )

    @property
    def state(self) -> DetectorState:
        if self._reference is None:
            return DetectorState.UNINITIALIZED
        return DetectorState.TRACKING

    @property
    def has_reference(self) -> bool:
        return self._reference is not None

    def reset(self) -> None:
        """Drop the reference frame; the next call bootstraps again."""
        self._reference = None
        logging.info("Motion detector reset")

    def detect(self, current: np.ndarray) -> List[BoundingBox]:
        """
        Compare current against the reference and return motion boxes.
        
        The first call only stores the reference and returns an empty list.
        Every successful call replaces the reference with current.
        
        Args:
            current: Normalized (grayscale, blurred) frame.
        
        Returns:
            Bounding boxes of regions whose contour area exceeds min_area,
            in contour extraction order.
        
        Raises:
            InvalidFrame: If current is empty or its shape differs from the reference.
            ProcessingError: If an image transform fails.
        """
        check_frame(current, "normalized frame")

        if self._reference is None:
            self._reference = current
            logging.debug(f"Reference frame set ({current.shape[1]}x{current.shape[0]})")
            return []

        if current.shape != self._reference.shape:
            raise InvalidFrame(
                f"Frame shape {current.shape} does not match reference shape {self._reference.shape}"
            )

        boxes = self._find_boxes(self._reference, current)
        self._reference = current
        return boxes

    def _motion_mask(self, reference: np.ndarray, current: np.ndarray) -> np.ndarray:
        cfg = self.config
        delta = self.ops.abs_diff(reference, current)
        binary = self.ops.threshold(delta, cfg.diff_threshold, cfg.binary_value)
        if cfg.dilation_iterations == 0:
            return binary
        return self.ops.dilate(binary, cfg.dilation_kernel_size, cfg.dilation_iterations)

    def _find_boxes(self, reference: np.ndarray, current: np.ndarray) -> List[BoundingBox]:
        mask = self._motion_mask(reference, current)

        boxes: List[BoundingBox] = []
        for contour in self.ops.find_external_contours(mask):
            # Strictly greater: a region exactly at min_area is dropped
            if self.ops.contour_area(contour) <= self.config.min_area:
                continue
            boxes.append(BoundingBox.from_rect(self.ops.bounding_rect(contour)))

        if boxes:
            logging.debug(f"Motion detected: {[b.as_tuple() for b in boxes]}")
        return boxes
