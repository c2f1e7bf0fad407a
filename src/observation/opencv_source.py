"""
OpenCV-based observation source.

Supports:
- USB webcams (device_id as int, e.g., 0)
- Video files (device_id as file path)
- Network streams (device_id as URL)

There is no reconnection: an unreadable frame ends the stream.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import cv2

from models.errors import DeviceUnavailable
from models.frame import FrameData
from .base import ObservationSource, ObservationConfig


@dataclass
class OpenCVSourceConfig(ObservationConfig):
    """
    Configuration for OpenCV-based observation sources.
    
    Attributes:
        device_id: Camera index (int), file path (str) or stream URL (str).
        buffer_size: OpenCV capture buffer size (reduces latency for live feeds).
    """
    device_id: Union[int, str] = 0
    buffer_size: int = 1

    @classmethod
    def from_camera_config(cls, camera_cfg: Dict[str, Any], source_id: str = "camera") -> "OpenCVSourceConfig":
        """
        Adapter: Create OpenCVSourceConfig from the camera section of the config.
        
        Args:
            camera_cfg: Camera configuration dict (from config.yaml).
            source_id: Identifier for this source.
        """
        resolution = camera_cfg.get("resolution")
        if resolution:
            resolution = tuple(resolution)
        
        return cls(
            source_id=source_id,
            resolution=resolution,
            fps=camera_cfg.get("fps"),
            device_id=camera_cfg.get("device_id", 0),
            buffer_size=camera_cfg.get("buffer_size", 1),
        )


class OpenCVSource(ObservationSource):
    """
    Wraps cv2.VideoCapture to provide frames as FrameData objects.
    
    Example:
        config = OpenCVSourceConfig(device_id=0, resolution=(640, 480))
        with OpenCVSource(config) as source:
            for frame_data in source:
                process(frame_data.frame)
    """

    def __init__(self, config: OpenCVSourceConfig):
        super().__init__(config)
        self._opencv_config = config
        self._cap: Optional[cv2.VideoCapture] = None

    @property
    def device_id(self) -> Union[int, str]:
        return self._opencv_config.device_id

    @property
    def is_file(self) -> bool:
        return isinstance(self.device_id, str) and os.path.exists(self.device_id)

    def open(self) -> None:
        """
        Open the capture device.
        
        Raises:
            DeviceUnavailable: If OpenCV cannot open the device.
        """
        if self._is_open:
            return

        self._cap = cv2.VideoCapture(self.device_id)
        if not self._cap.isOpened():
            self._cap.release()
            self._cap = None
            logging.error(f"Could not open device {self.device_id}")
            raise DeviceUnavailable(f"Could not open camera device {self.device_id}")

        # Only USB cameras take capture properties
        if isinstance(self.device_id, int) and self._opencv_config.resolution:
            w, h = self._opencv_config.resolution
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, w)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, h)
            if self._opencv_config.fps:
                self._cap.set(cv2.CAP_PROP_FPS, self._opencv_config.fps)
            self._cap.set(cv2.CAP_PROP_BUFFERSIZE, self._opencv_config.buffer_size)

            actual_w = self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)
            actual_h = self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)
            actual_fps = self._cap.get(cv2.CAP_PROP_FPS)
            logging.info(
                f"Camera actual settings - Resolution: ({actual_w}x{actual_h}), FPS: {actual_fps}"
            )

        self._is_open = True
        self._frame_index = 0
        logging.info(f"OpenCVSource opened: source_id={self.source_id}, device={self.device_id}")

    def read(self) -> Optional[FrameData]:
        """Read the next frame; None on end of file or a failed grab."""
        if not self._is_open or self._cap is None:
            return None

        ret, frame = self._cap.read()
        if not ret or frame is None or frame.size == 0:
            if self.is_file:
                logging.info("End of video file reached")
            else:
                logging.warning(f"Empty frame from device {self.device_id}")
            return None

        self._frame_index += 1
        return FrameData.from_numpy(
            frame,
            timestamp=time.time(),
            frame_index=self._frame_index,
            source=self.source_id,
        )

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        if self._is_open:
            logging.info(f"OpenCVSource closed: source_id={self.source_id}")
        self._is_open = False
