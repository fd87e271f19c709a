"""
Binary Space Partitioning of a rectangle into leaf rectangles.

The partition is kept as a flat list of leaves (an arena): the largest
divisible leaf is repeatedly replaced by its two halves until the target
leaf count is reached or nothing can be split any further.  Only the leaf
set is ever needed, so no tree of parent/child nodes is built.
"""

import logging
import math
from typing import List, Tuple

from .seed_random import SeedRandom

logger = logging.getLogger(__name__)


# Aspect-ratio thresholds for choosing the split axis
WIDE_ASPECT = 1.2
TALL_ASPECT = 0.8

# Split position, as a fraction of the dimension being split
MIN_SPLIT_RATIO = 0.3
MAX_SPLIT_RATIO = 0.7

# Smallest extent a child may have along the split axis
MIN_CHILD_SIZE = 1.0


class Rect:
    """Axis-aligned rectangle with its origin at the top-left corner."""

    __slots__ = ("x", "y", "w", "h")

    def __init__(self, x: float, y: float, w: float, h: float):
        self.x, self.y = x, y
        self.w, self.h = w, h

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def area(self) -> float:
        return self.w * self.h

    @property
    def aspect(self) -> float:
        return self.w / self.h

    @property
    def is_divisible(self) -> bool:
        """Both halves of any split can keep at least one unit."""
        return self.w >= 2 * MIN_CHILD_SIZE and self.h >= 2 * MIN_CHILD_SIZE

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.w, self.h)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __repr__(self) -> str:
        return f"Rect(x={self.x:g}, y={self.y:g}, w={self.w:g}, h={self.h:g})"

    # --- splitting --------------------------------------------------------

    def split_stacked(self, cut: float) -> Tuple["Rect", "Rect"]:
        """Cut at ``y = cut``; returns (top, bottom)."""
        top = Rect(self.x, self.y, self.w, cut - self.y)
        bottom = Rect(self.x, cut, self.w, self.bottom - cut)
        return top, bottom

    def split_side_by_side(self, cut: float) -> Tuple["Rect", "Rect"]:
        """Cut at ``x = cut``; returns (left, right)."""
        left = Rect(self.x, self.y, cut - self.x, self.h)
        right = Rect(cut, self.y, self.right - cut, self.h)
        return left, right


# ── Split decisions ───────────────────────────────────────────────────────

def _choose_stacked(rect: Rect, rng: SeedRandom) -> bool:
    """
    True to stack the children (horizontal cut), False for side by side.

    Wide rectangles are always cut vertically and tall ones horizontally;
    only near-square rectangles consume a PRNG draw.
    """
    aspect = rect.aspect
    if aspect > WIDE_ASPECT:
        return False
    if aspect < TALL_ASPECT:
        return True
    return rng.next() < 0.5


def _split_coordinate(start: float, extent: float, rng: SeedRandom, snap: bool) -> float:
    """
    Pick the single cut coordinate along one axis.

    Both children are later built from this one value, so their shared
    edge is identical on each side.
    """
    ratio = MIN_SPLIT_RATIO + rng.next() * (MAX_SPLIT_RATIO - MIN_SPLIT_RATIO)
    cut = start + extent * ratio
    if snap:
        cut = float(math.floor(cut))
    return max(start + MIN_CHILD_SIZE, min(start + extent - MIN_CHILD_SIZE, cut))


def split_leaf(rect: Rect, rng: SeedRandom, snap: bool = True) -> Tuple[Rect, Rect]:
    """Split *rect* in two along the axis its aspect ratio suggests."""
    if _choose_stacked(rect, rng):
        cut = _split_coordinate(rect.y, rect.h, rng, snap)
        return rect.split_stacked(cut)
    cut = _split_coordinate(rect.x, rect.w, rng, snap)
    return rect.split_side_by_side(cut)


# ── Partitioning ──────────────────────────────────────────────────────────

def _largest_divisible(leaves: List[Rect]) -> int:
    """Index of the first divisible leaf after a stable area-descending sort."""
    leaves.sort(key=lambda r: r.area, reverse=True)
    for i, leaf in enumerate(leaves):
        if leaf.is_divisible:
            return i
    return -1


def split_rectangle(
    rect: Rect,
    num_partitions: int,
    rng: SeedRandom,
    snap: bool = True,
) -> List[Rect]:
    """
    Subdivide *rect* into (up to) *num_partitions* disjoint leaves.

    Parameters
    ----------
    rect : Rect
        Region to subdivide.  Its leaves tile it exactly.
    num_partitions : int
        Target leaf count.  Values ``<= 1`` return *rect* unsplit.
    rng : SeedRandom
        Stream consumed for axis and ratio decisions.
    snap : bool
        Floor every cut onto the integer lattice.  With integer input
        dimensions this keeps every leaf integral.

    Returns
    -------
    list[Rect]
        The leaves, in arena order.  Fewer than *num_partitions* are
        returned when no leaf of at least 2x2 units remains.
    """
    leaves: List[Rect] = [rect]
    if num_partitions <= 1:
        return leaves

    while len(leaves) < num_partitions:
        idx = _largest_divisible(leaves)
        if idx < 0:
            logger.debug(
                f"No divisible leaf left: {len(leaves)} of {num_partitions} partitions"
            )
            break
        first, second = split_leaf(leaves.pop(idx), rng, snap=snap)
        leaves.append(first)
        leaves.append(second)

    return leaves


def bsp_partition(
    width: float,
    height: float,
    num_partitions: int,
    rng: SeedRandom,
    snap: bool = True,
) -> List[Rect]:
    """Partition the ``width x height`` canvas anchored at the origin."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas must be positive, got {width}x{height}")
    return split_rectangle(Rect(0.0, 0.0, float(width), float(height)),
                           num_partitions, rng, snap=snap)
