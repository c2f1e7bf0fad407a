"""
Motion Monitor - Detection Module

Normalization, frame-differencing motion detection and box overlays.
"""

from .preprocess import Preprocessor
from .motion import MotionDetector, DetectorState
from .annotator import Annotator

__all__ = ['Preprocessor', 'MotionDetector', 'DetectorState', 'Annotator']
