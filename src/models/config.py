"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class CameraConfig:
    """Frame source configuration."""
    device_id: Union[int, str] = 0
    resolution: Optional[List[int]] = field(default_factory=lambda: [640, 480])
    fps: Optional[int] = 30

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CameraConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            device_id=d.get("device_id", 0),
            resolution=d.get("resolution", [640, 480]),
            fps=d.get("fps", 30),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "device_id": self.device_id,
            "resolution": self.resolution,
            "fps": self.fps,
        }


@dataclass(frozen=True)
class MotionConfig:
    """
    Frame-differencing detector parameters.
    
    Attributes:
        blur_kernel_size: Side of the square Gaussian kernel (odd, >= 1).
        blur_sigma: Gaussian standard deviation; 0 derives it from the kernel size.
        diff_threshold: Delta intensity a pixel must exceed to count as changed (0-255).
        binary_value: Value written for changed pixels in the binary mask.
        dilation_kernel_size: Side of the square structuring element for dilation.
        dilation_iterations: Number of dilation passes.
        min_area: Regions with contour area at or below this are discarded.
    """
    blur_kernel_size: int = 21
    blur_sigma: float = 0.0
    diff_threshold: int = 25
    binary_value: int = 255
    dilation_kernel_size: int = 3
    dilation_iterations: int = 1
    min_area: float = 500.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MotionConfig":
        return cls(
            blur_kernel_size=d.get("blur_kernel_size", 21),
            blur_sigma=d.get("blur_sigma", 0.0),
            diff_threshold=d.get("diff_threshold", 25),
            binary_value=d.get("binary_value", 255),
            dilation_kernel_size=d.get("dilation_kernel_size", 3),
            dilation_iterations=d.get("dilation_iterations", 1),
            min_area=d.get("min_area", 500.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blur_kernel_size": self.blur_kernel_size,
            "blur_sigma": self.blur_sigma,
            "diff_threshold": self.diff_threshold,
            "binary_value": self.binary_value,
            "dilation_kernel_size": self.dilation_kernel_size,
            "dilation_iterations": self.dilation_iterations,
            "min_area": self.min_area,
        }


@dataclass
class DisplayConfig:
    """Window sink and overlay configuration."""
    enabled: bool = True
    window_name: str = "Camera Feed"
    quit_key: str = "q"
    box_color: List[int] = field(default_factory=lambda: [0, 255, 0])
    box_thickness: int = 2

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DisplayConfig":
        return cls(
            enabled=d.get("enabled", True),
            window_name=d.get("window_name", "Camera Feed"),
            quit_key=d.get("quit_key", "q"),
            box_color=d.get("box_color", [0, 255, 0]),
            box_thickness=d.get("box_thickness", 2),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "window_name": self.window_name,
            "quit_key": self.quit_key,
            "box_color": self.box_color,
            "box_thickness": self.box_thickness,
        }


@dataclass
class PipelineSettings:
    """Run loop settings."""
    stats_log_interval: float = 60.0
    max_frames: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PipelineSettings":
        return cls(
            stats_log_interval=d.get("stats_log_interval", 60.0),
            max_frames=d.get("max_frames"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stats_log_interval": self.stats_log_interval,
            "max_frames": self.max_frames,
        }


@dataclass
class Config:
    """
    Complete application configuration.
    
    This is a typed representation of the YAML config structure.
    """
    camera: CameraConfig = field(default_factory=CameraConfig)
    motion: MotionConfig = field(default_factory=MotionConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    pipeline: PipelineSettings = field(default_factory=PipelineSettings)
    log_path: str = "logs/motion_monitor.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            camera=CameraConfig.from_dict(d.get("camera", {}) or {}),
            motion=MotionConfig.from_dict(d.get("motion", {}) or {}),
            display=DisplayConfig.from_dict(d.get("display", {}) or {}),
            pipeline=PipelineSettings.from_dict(d.get("pipeline", {}) or {}),
            log_path=d.get("log_path", "logs/motion_monitor.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary (for saving or logging)."""
        return {
            "camera": self.camera.to_dict(),
            "motion": self.motion.to_dict(),
            "display": self.display.to_dict(),
            "pipeline": self.pipeline.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
