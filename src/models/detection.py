"""
Bounding box model for motion regions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class BoundingBox:
    """
    An axis-aligned box in pixel coordinates.
    
    Attributes:
        x: Left edge x coordinate.
        y: Top edge y coordinate.
        width: Box width in pixels.
        height: Box height in pixels.
    """
    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, other: "BoundingBox") -> bool:
        """Whether other lies fully inside this box."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and self.x2 >= other.x2
            and self.y2 >= other.y2
        )

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return as (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    def corners(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Return inclusive ((left, top), (right, bottom)) pixel corners for drawing."""
        return (self.x, self.y), (self.x2 - 1, self.y2 - 1)

    @classmethod
    def from_rect(cls, rect: Sequence[int]) -> "BoundingBox":
        """Create from an (x, y, width, height) rect such as cv2.boundingRect output."""
        x, y, w, h = rect
        return cls(x=int(x), y=int(y), width=int(w), height=int(h))
