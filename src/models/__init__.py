"""
Typed models for the motion monitor.

Frames travel as numpy arrays; these models carry the metadata, results,
configuration and error types around them.
"""

from .frame import FrameData
from .detection import BoundingBox
from .errors import (
    MotionMonitorError,
    DeviceUnavailable,
    InvalidFrame,
    ProcessingError,
)
from .config import (
    Config,
    CameraConfig,
    MotionConfig,
    DisplayConfig,
    PipelineSettings,
)

__all__ = [
    # Frame
    "FrameData",
    # Detection
    "BoundingBox",
    # Errors
    "MotionMonitorError",
    "DeviceUnavailable",
    "InvalidFrame",
    "ProcessingError",
    # Config
    "Config",
    "CameraConfig",
    "MotionConfig",
    "DisplayConfig",
    "PipelineSettings",
]
