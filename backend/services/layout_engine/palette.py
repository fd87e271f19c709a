"""Seeded palette colouring of finished blocks."""

import math
from typing import List, Sequence

from .block import LayoutBlock
from .seed_random import SeedRandom


def colorize(blocks: Sequence[LayoutBlock], palette: Sequence[str],
             rng: SeedRandom) -> List[LayoutBlock]:
    """
    Give every block one colour drawn from *palette*.

    One draw per block, in block order, continuing *rng* where the
    partitioner left it.
    """
    if not palette:
        raise ValueError("Palette must contain at least one colour")
    for block in blocks:
        block.color = palette[math.floor(rng.next() * len(palette))]
    return list(blocks)
