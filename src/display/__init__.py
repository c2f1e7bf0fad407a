"""
Display layer: sinks for annotated frames.
"""

from .base import FrameSink, NullSink
from .window import WindowSink

__all__ = ["FrameSink", "NullSink", "WindowSink"]
