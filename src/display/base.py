"""
Frame sink interfaces.

A sink consumes annotated frames and owns the quit signal for a run.
"""

from __future__ import annotations

import numpy as np


class FrameSink:
    def show(self, frame: np.ndarray) -> None:
        raise NotImplementedError

    def should_quit(self) -> bool:
        """Polled once per frame after show()."""
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class NullSink(FrameSink):
    """Headless sink: discards frames and never asks to quit."""

    def __init__(self) -> None:
        self.frames_shown = 0

    def show(self, frame: np.ndarray) -> None:
        self.frames_shown += 1

    def should_quit(self) -> bool:
        return False

    def close(self) -> None:
        pass
