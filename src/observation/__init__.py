"""
Observation layer for frame sources.

This layer abstracts where frames come from (camera, video file, stream)
away from the motion pipeline. Each source implements the ObservationSource
interface and returns FrameData objects.
"""

from typing import Any, Dict

from .base import ObservationSource, ObservationConfig
from .opencv_source import OpenCVSource, OpenCVSourceConfig


def create_source_from_config(camera_cfg: Dict[str, Any], source_id: str = "camera") -> ObservationSource:
    """Build the OpenCV source described by the camera config section."""
    return OpenCVSource(OpenCVSourceConfig.from_camera_config(camera_cfg, source_id=source_id))


__all__ = [
    "ObservationSource",
    "ObservationConfig",
    "OpenCVSource",
    "OpenCVSourceConfig",
    "create_source_from_config",
]
