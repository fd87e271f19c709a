"""
Grid validation and overlap correction for integer layout blocks.

Rounding continuous partitions onto the grid (and the degraded
slot-reuse fallback) can leave blocks sharing cells.  The corrector walks
the blocks once, in order, over a per-cell ownership grid and moves any
block that collides into the first free window of its own size.

Also provides read-only diagnostics: pairwise overlap detection and a
coverage report for a finished layout.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import box

from .block import LayoutBlock

logger = logging.getLogger(__name__)

FREE = -1


def _window(grid: np.ndarray, x: int, y: int, w: int, h: int) -> np.ndarray:
    """Cells of *grid* under a block, clipped to the grid."""
    rows, cols = grid.shape
    return grid[max(0, y):min(rows, y + h), max(0, x):min(cols, x + w)]


def _is_free(grid: np.ndarray, x: int, y: int, w: int, h: int) -> bool:
    return not (_window(grid, x, y, w, h) != FREE).any()


def find_free_window(grid: np.ndarray, w: int, h: int) -> Optional[Tuple[int, int]]:
    """
    First ``(x, y)`` in row-major order where a ``w x h`` window is unowned.

    Returns ``None`` when the block does not fit anywhere.
    """
    rows, cols = grid.shape
    for y in range(rows - h + 1):
        for x in range(cols - w + 1):
            if _is_free(grid, x, y, w, h):
                return x, y
    return None


def validate_and_fix(
    blocks: Sequence[LayoutBlock],
    width: int,
    height: int,
) -> Tuple[List[LayoutBlock], List[str]]:
    """
    Remove cell overlaps between *blocks* in a single deterministic pass.

    Parameters
    ----------
    blocks : sequence[LayoutBlock]
        Integer blocks in priority order; earlier blocks keep their place.
    width, height : int
        Grid bounds.

    Returns
    -------
    (blocks, unplaced)
        Corrected copies of the blocks in input order (sizes unchanged,
        only positions may differ), and the slot ids of blocks that
        collided but had no free window left.  Those keep their clamped
        original position; for layouts built from a full partition this
        list is empty.
    """
    grid = np.full((height, width), FREE, dtype=np.int32)
    corrected: List[LayoutBlock] = []
    unplaced: List[str] = []

    for idx, original in enumerate(blocks):
        block = replace(original)

        if not _is_free(grid, block.x, block.y, block.w, block.h):
            spot = find_free_window(grid, block.w, block.h)
            if spot is not None:
                logger.debug(
                    f"Relocating '{block.slot_id}' from ({block.x},{block.y}) "
                    f"to {spot}"
                )
                block.x, block.y = spot
            else:
                logger.error(
                    f"No free {block.w}x{block.h} window for '{block.slot_id}' "
                    f"on a {width}x{height} grid; keeping overlapping position"
                )
                unplaced.append(block.slot_id)

        block.clamp(width, height)
        _window(grid, block.x, block.y, block.w, block.h)[...] = idx
        corrected.append(block)

    return corrected, unplaced


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

def detect_overlaps(blocks: Sequence[LayoutBlock],
                    tolerance: float = 0.0) -> List[Tuple[int, int]]:
    """
    Return ``(i, j)`` index pairs of blocks whose interiors intersect.

    Blocks that only share an edge are **not** overlapping.
    """
    shapes = [box(b.x, b.y, b.right, b.bottom) for b in blocks]
    overlaps = []
    for i in range(len(shapes)):
        for j in range(i + 1, len(shapes)):
            if shapes[i].intersection(shapes[j]).area > tolerance:
                overlaps.append((i, j))
    return overlaps


def has_overlaps(blocks: Sequence[LayoutBlock]) -> bool:
    """Quick check: are there *any* overlapping block pairs?"""
    return len(detect_overlaps(blocks)) > 0


def coverage_report(blocks: Sequence[LayoutBlock], width: int, height: int) -> Dict[str, Any]:
    """Verify that the blocks tile the grid: no gaps, no doubly-owned cells."""
    counts = np.zeros((height, width), dtype=np.int32)
    out_of_bounds = []
    for b in blocks:
        if b.x < 0 or b.y < 0 or b.right > width or b.bottom > height or b.w < 1 or b.h < 1:
            out_of_bounds.append(b.slot_id)
        _window(counts, b.x, b.y, b.w, b.h)[...] += 1

    gaps = [(int(x), int(y)) for y, x in np.argwhere(counts == 0)]
    overlap_cells = int((counts > 1).sum())
    total = width * height

    return {
        "valid": not gaps and overlap_cells == 0 and not out_of_bounds,
        "gaps": len(gaps),
        "gap_positions": gaps[:10],
        "overlap_cells": overlap_cells,
        "out_of_bounds": out_of_bounds,
        "total_cells": total,
        "covered_cells": total - len(gaps),
        "coverage": round((1 - len(gaps) / total) * 100, 1),
    }
