"""
Imaging layer: the primitive transforms the motion core depends on.
"""

from .base import ImageOps
from .opencv_ops import OpenCVImageOps, translate_cv_errors

__all__ = ["ImageOps", "OpenCVImageOps", "translate_cv_errors"]
