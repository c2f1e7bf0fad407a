"""
Motion monitor entry point.

Opens a camera (or video file), detects frame-to-frame motion and shows the
feed with motion regions boxed in green until 'q' is pressed or the stream ends.

Usage:
    python src/main.py --config config/config.yaml

Arguments:
    --config: Path to configuration file
    --device: Camera index or video path (overrides camera.device_id)
    --headless: Run without a display window
    --max-frames: Stop after this many frames
"""

import os
import sys
import argparse
import logging
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ops.logging import setup_logging
from pipeline.engine import RunOutcome, create_engine_from_config

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_DEVICE_UNAVAILABLE = 2

_EXIT_CODES = {
    RunOutcome.QUIT_REQUESTED: EXIT_OK,
    RunOutcome.END_OF_STREAM: EXIT_OK,
    RunOutcome.MAX_FRAMES: EXIT_OK,
    RunOutcome.INTERRUPTED: EXIT_OK,
    RunOutcome.PIPELINE_FAILED: EXIT_FAILURE,
    RunOutcome.DEVICE_UNAVAILABLE: EXIT_DEVICE_UNAVAILABLE,
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    
    Raises:
        OSError, yaml.YAMLError: If a present file cannot be read or parsed.
    """
    config_dir = os.path.dirname(config_path)
    merged: Dict[str, Any] = {}

    base_path = os.path.join(config_dir, "default.yaml")
    if os.path.exists(base_path):
        merged = _read_yaml(base_path)

    local_overrides_path = os.path.join(config_dir, "config.yaml")
    if os.path.exists(local_overrides_path):
        merged = _deep_merge(merged, _read_yaml(local_overrides_path))

    if (
        os.path.exists(config_path)
        and os.path.abspath(config_path) != os.path.abspath(local_overrides_path)
        and os.path.abspath(config_path) != os.path.abspath(base_path)
    ):
        merged = _deep_merge(merged, _read_yaml(config_path))

    return merged


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration structure and values.
    
    Args:
        config: Configuration dictionary
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ['camera', 'motion', 'log_path', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Camera
    camera = config.get('camera') or {}
    if 'device_id' not in camera:
        return False, "Missing camera.device_id"
    device_id = camera['device_id']
    if not (_is_int(device_id) or isinstance(device_id, str)):
        return False, "camera.device_id must be an integer (index) or string (path/URL)"
    if _is_int(device_id) and device_id < 0:
        return False, "camera.device_id integer must be non-negative"

    resolution = camera.get('resolution')
    if resolution is not None:
        if not isinstance(resolution, list) or len(resolution) != 2:
            return False, "camera.resolution must be a list of [width, height]"
        if not all(_is_int(x) and x > 0 for x in resolution):
            return False, "camera.resolution values must be positive integers"

    fps = camera.get('fps')
    if fps is not None and (not _is_int(fps) or fps <= 0):
        return False, "camera.fps must be a positive integer"

    # Motion detector
    motion = config.get('motion') or {}
    ksize = motion.get('blur_kernel_size', 21)
    if not _is_int(ksize) or ksize < 1 or ksize % 2 == 0:
        return False, "motion.blur_kernel_size must be an odd integer >= 1"
    sigma = motion.get('blur_sigma', 0)
    if not isinstance(sigma, (int, float)) or sigma < 0:
        return False, "motion.blur_sigma must be a non-negative number"
    for key in ('diff_threshold', 'binary_value'):
        value = motion.get(key, 25 if key == 'diff_threshold' else 255)
        if not isinstance(value, (int, float)) or not (0 <= value <= 255):
            return False, f"motion.{key} must be between 0 and 255"
    dsize = motion.get('dilation_kernel_size', 3)
    if not _is_int(dsize) or dsize < 1:
        return False, "motion.dilation_kernel_size must be a positive integer"
    iterations = motion.get('dilation_iterations', 1)
    if not _is_int(iterations) or iterations < 0:
        return False, "motion.dilation_iterations must be a non-negative integer"
    min_area = motion.get('min_area', 500)
    if not isinstance(min_area, (int, float)) or min_area < 0:
        return False, "motion.min_area must be a non-negative number"

    # Display
    display = config.get('display') or {}
    quit_key = display.get('quit_key', 'q')
    if not isinstance(quit_key, str) or len(quit_key) != 1:
        return False, "display.quit_key must be a single character"
    color = display.get('box_color', [0, 255, 0])
    if not isinstance(color, list) or len(color) != 3 or not all(_is_int(c) and 0 <= c <= 255 for c in color):
        return False, "display.box_color must be a list of three integers 0-255 (BGR)"
    thickness = display.get('box_thickness', 2)
    if not _is_int(thickness) or thickness < 1:
        return False, "display.box_thickness must be a positive integer"

    # Pipeline
    pipeline = config.get('pipeline') or {}
    max_frames = pipeline.get('max_frames')
    if max_frames is not None and (not _is_int(max_frames) or max_frames <= 0):
        return False, "pipeline.max_frames must be a positive integer or null"

    # Logging
    valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if config['log_level'] not in valid_log_levels:
        return False, f"log_level must be one of: {', '.join(valid_log_levels)}"

    return True, None


def _parse_device(value: str):
    """Camera indices arrive as strings on the command line."""
    return int(value) if value.isdigit() else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Motion Monitor - frame-differencing motion detection')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--device', type=_parse_device, default=None,
                        help='Camera index or video file path (overrides camera.device_id)')
    parser.add_argument('--headless', action='store_true',
                        help='Run without a display window')
    parser.add_argument('--max-frames', type=int, default=None,
                        help='Stop after this many frames')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application function; returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Failed to load configuration: {e}")
        return EXIT_FAILURE

    if args.device is not None:
        config.setdefault('camera', {})['device_id'] = args.device
    if args.max_frames is not None:
        config.setdefault('pipeline', {})['max_frames'] = args.max_frames

    is_valid, error_msg = validate_config(config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        return EXIT_FAILURE

    try:
        setup_logging(config['log_path'], config['log_level'])
    except OSError as e:
        logging.error(f"Failed to open log file {config['log_path']}: {e}")
        return EXIT_FAILURE
    logging.info("Starting Motion Monitor")

    engine = create_engine_from_config(config, display=False if args.headless else None)
    result = engine.run()

    print(result.message)
    return _EXIT_CODES[result.outcome]


if __name__ == "__main__":
    sys.exit(main())
