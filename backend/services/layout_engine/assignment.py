"""
Weighted slot assignment.

Slots are ranked by semantic weight and leaves by area; the i-th heaviest
slot gets the i-th largest leaf.  Each pairing is then snapped onto the
integer grid as a :class:`LayoutBlock`.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Mapping, Sequence

from .block import LayoutBlock
from .bsp import Rect
from .catalog import DEFAULT_SLOT_WEIGHT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeightedSlot:
    slot_id: str
    weight: float


def weigh_slots(slot_ids: Sequence[str], weights: Mapping[str, float]) -> List[WeightedSlot]:
    """Attach weights (default 1) and stable-sort heaviest first."""
    weighted = [WeightedSlot(s, weights.get(s, DEFAULT_SLOT_WEIGHT)) for s in slot_ids]
    weighted.sort(key=lambda ws: ws.weight, reverse=True)
    return weighted


def rect_to_block(
    slot_id: str,
    rect: Rect,
    width: int,
    height: int,
    fallback: bool = False,
) -> LayoutBlock:
    """
    Convert a continuous rectangle into an integer block.

    Position is floored and size is ceiled, so rounding can only grow a
    block, never open a gap.  The result is clamped inside the canvas.
    """
    block = LayoutBlock(
        slot_id=slot_id,
        x=math.floor(rect.x),
        y=math.floor(rect.y),
        w=math.ceil(rect.w),
        h=math.ceil(rect.h),
        fallback=fallback,
    )
    block.clamp(width, height)
    return block


def assign_slots(
    slot_ids: Sequence[str],
    leaves: Sequence[Rect],
    weights: Mapping[str, float],
    width: int,
    height: int,
) -> List[LayoutBlock]:
    """
    Pair slots with leaves by rank and emit one block per slot.

    Parameters
    ----------
    slot_ids : sequence[str]
        Slot identifiers in catalog order.
    leaves : sequence[Rect]
        Partition leaves (any order).
    weights : mapping
        ``{slot_id: weight}``; unlisted slots weigh 1.
    width, height : int
        Canvas size used for clamping.

    Returns
    -------
    list[LayoutBlock]
        Heaviest slot first.  When there are more slots than leaves the
        surplus slots reuse the smallest leaves and are marked
        ``fallback=True``; those blocks overlap earlier ones until the
        validator moves them.
    """
    ranked_slots = weigh_slots(slot_ids, weights)
    ranked_leaves = sorted(leaves, key=lambda r: r.area, reverse=True)

    primary = min(len(ranked_slots), len(ranked_leaves))
    blocks = [
        rect_to_block(ranked_slots[i].slot_id, ranked_leaves[i], width, height)
        for i in range(primary)
    ]

    extra = ranked_slots[primary:]
    if extra and ranked_leaves:
        n = len(ranked_leaves)
        # Tail of the ranking; wraps around once the surplus exceeds the leaf count
        start = n - len(extra)
        for i, ws in enumerate(extra):
            leaf = ranked_leaves[(start + i) % n]
            blocks.append(rect_to_block(ws.slot_id, leaf, width, height, fallback=True))
        logger.warning(
            f"{len(extra)} slot(s) reuse existing partitions: "
            f"{', '.join(ws.slot_id for ws in extra)}"
        )

    return blocks
