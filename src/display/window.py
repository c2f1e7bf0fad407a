"""
OpenCV HighGUI window sink.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

from imaging.opencv_ops import translate_cv_errors
from .base import FrameSink


class WindowSink(FrameSink):
    """
    Show frames in a cv2 window and report when the quit key is pressed.
    
    The window is created lazily on the first frame so headless callers
    that never show anything do not need a display. HighGUI failures (for
    example an OpenCV build without GUI support) surface as ProcessingError.
    """

    def __init__(self, window_name: str = "Camera Feed", quit_key: str = "q") -> None:
        if len(quit_key) != 1:
            raise ValueError(f"quit_key must be a single character, got {quit_key!r}")
        self.window_name = window_name
        self.quit_key = quit_key
        self._window_open = False

    def show(self, frame: np.ndarray) -> None:
        with translate_cv_errors("imshow"):
            if not self._window_open:
                cv2.namedWindow(self.window_name, cv2.WINDOW_AUTOSIZE)
                self._window_open = True
                logging.info(f"Display window opened: {self.window_name} (press '{self.quit_key}' to quit)")
            cv2.imshow(self.window_name, frame)

    def should_quit(self) -> bool:
        with translate_cv_errors("waitKey"):
            key = cv2.waitKey(1) & 0xFF
        return key == ord(self.quit_key)

    def close(self) -> None:
        if self._window_open:
            self._window_open = False
            with translate_cv_errors("destroyWindow"):
                cv2.destroyWindow(self.window_name)
            logging.info("Display window closed")
