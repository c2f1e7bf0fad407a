"""
ObservationSource interface for frame sources.

Any producer of sequentially ordered BGR frames (camera, video file,
stream, in-memory list) implements this contract and hands FrameData to
the pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from models.frame import FrameData


@dataclass
class ObservationConfig:
    """
    Base configuration for observation sources.
    
    Attributes:
        source_id: Identifier for this source (e.g., "main-camera").
        resolution: Requested resolution as (width, height). None = source default.
        fps: Requested frames per second. None = source default.
    """
    source_id: str = "default"
    resolution: Optional[Tuple[int, int]] = None
    fps: Optional[int] = None


class ObservationSource(ABC):
    """
    Abstract base class for frame sources.
    
    Lifecycle:
        1. Create instance with config
        2. Call open() to acquire the device
        3. Call read() repeatedly; None means the stream has ended
        4. Call close() to release the device
    
    Can also be used as a context manager:
        with OpenCVSource(config) as source:
            for frame_data in source:
                process(frame_data)
    """

    def __init__(self, config: ObservationConfig):
        self._config = config
        self._is_open = False
        self._frame_index = 0

    @property
    def source_id(self) -> str:
        return self._config.source_id

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def frame_index(self) -> int:
        """Number of frames read since open."""
        return self._frame_index

    @abstractmethod
    def open(self) -> None:
        """
        Acquire the underlying device.
        
        Raises:
            DeviceUnavailable: If the source cannot be opened.
        """

    @abstractmethod
    def read(self) -> Optional[FrameData]:
        """
        Block until the next frame is available.
        
        Returns:
            FrameData, or None when no frame could be read (end of stream).
        """

    @abstractmethod
    def close(self) -> None:
        """Release the device. Safe to call multiple times."""

    def __enter__(self) -> "ObservationSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[FrameData]:
        if not self._is_open:
            raise RuntimeError("Source must be open before iterating")
        
        while True:
            frame_data = self.read()
            if frame_data is None:
                break
            yield frame_data

