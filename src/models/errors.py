"""
Exception taxonomy for the motion monitor.

End of stream is not an error: sources return None from read().
"""

from __future__ import annotations


class MotionMonitorError(Exception):
    """Base class for all motion monitor failures."""


class DeviceUnavailable(MotionMonitorError):
    """The frame source could not be opened."""


class InvalidFrame(MotionMonitorError):
    """A frame with zero or mismatched dimensions reached the core."""


class ProcessingError(MotionMonitorError):
    """An image transform failed for a reason other than frame geometry."""
