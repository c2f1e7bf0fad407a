"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


WIDTH = 640
HEIGHT = 480


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    
    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
camera:
  device_id: 0
  resolution: [640, 480]
  fps: 30

motion:
  blur_kernel_size: 21
  diff_threshold: 25
  dilation_kernel_size: 3
  dilation_iterations: 1
  min_area: 500

display:
  enabled: true
  window_name: "Camera Feed"
  quit_key: "q"

log_path: "logs/test.log"
log_level: "INFO"
""")
    
    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "camera": {
            "device_id": 0,
            "resolution": [640, 480],
            "fps": 30,
        },
        "motion": {
            "blur_kernel_size": 21,
            "blur_sigma": 0,
            "diff_threshold": 25,
            "binary_value": 255,
            "dilation_kernel_size": 3,
            "dilation_iterations": 1,
            "min_area": 500,
        },
        "display": {
            "enabled": False,
            "window_name": "Camera Feed",
            "quit_key": "q",
            "box_color": [0, 255, 0],
            "box_thickness": 2,
        },
        "pipeline": {
            "stats_log_interval": 60.0,
            "max_frames": None,
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }


@pytest.fixture
def blank_frame():
    """All-black 640x480 BGR frame."""
    return np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)


@pytest.fixture
def block_frame():
    """Factory for a black BGR frame with one white square block."""
    def _make(x=100, y=100, size=40, value=255):
        frame = np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
        frame[y:y + size, x:x + size] = value
        return frame
    return _make


@pytest.fixture
def gray_block():
    """Factory for a normalized (single-channel) frame with one rectangular block."""
    def _make(x=100, y=100, w=40, h=40, value=255):
        frame = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
        frame[y:y + h, x:x + w] = value
        return frame
    return _make
