"""
Layout block: one slot placed on the integer grid.

A block is created by the assignment step with a placeholder colour, may
have its position moved by the validator, and receives its final colour
from the colorizer.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

PLACEHOLDER_COLOR = "#000000"


@dataclass
class LayoutBlock:
    """A single slot region on the canvas grid."""

    slot_id: str
    x: int
    y: int
    w: int
    h: int
    color: str = PLACEHOLDER_COLOR
    fallback: bool = False     # reuses a leaf already given to another slot

    @property
    def area(self) -> int:
        return self.w * self.h

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Grid cells ``(x, y)`` covered by the block, row-major."""
        for cy in range(self.y, self.bottom):
            for cx in range(self.x, self.right):
                yield cx, cy

    def clamp(self, width: int, height: int) -> None:
        """Pull the block inside a ``width x height`` grid, keeping ``w, h >= 1``."""
        self.x = max(0, min(self.x, width - 1))
        self.y = max(0, min(self.y, height - 1))
        self.w = max(1, min(self.w, width - self.x))
        self.h = max(1, min(self.h, height - self.y))

    def to_dict(self) -> dict:
        """Serialize block to a dictionary."""
        return {
            "id": self.slot_id,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "color": self.color,
        }

    def __repr__(self) -> str:
        return (
            f"LayoutBlock(id='{self.slot_id}', x={self.x}, y={self.y}, "
            f"w={self.w}, h={self.h}, color='{self.color}')"
        )
