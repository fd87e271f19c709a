"""
Main layout generator: public API of the layout engine.

Coordinates seeding, BSP partitioning, weighted slot assignment, grid
validation and palette colouring.  A generation is a pure function of
``(seed, category, subcategory, width, height)`` and the catalog: each
call owns its PRNG and buffers.
"""

import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH

from .assignment import assign_slots
from .block import LayoutBlock
from .bsp import bsp_partition
from .catalog import Catalog, default_catalog, load_catalog
from .palette import colorize
from .seed_random import SeedRandom
from .validation import validate_and_fix

logger = logging.getLogger(__name__)


class CapacityWarning(UserWarning):
    """The canvas was too small to give every slot its own partition."""


@dataclass
class LayoutResult:
    """Blocks of one generation plus what happened while producing them."""

    seed: str
    category: str
    subcategory: str
    width: int
    height: int
    blocks: List[LayoutBlock]
    requested_partitions: int
    produced_partitions: int
    fallback_slots: List[str] = field(default_factory=list)
    unplaced_slots: List[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return self.produced_partitions < self.requested_partitions

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "category": self.category,
            "subcategory": self.subcategory,
            "width": self.width,
            "height": self.height,
            "blocks": [b.to_dict() for b in self.blocks],
            "diagnostics": {
                "requested_partitions": self.requested_partitions,
                "produced_partitions": self.produced_partitions,
                "degraded": self.degraded,
                "fallback_slots": list(self.fallback_slots),
                "unplaced_slots": list(self.unplaced_slots),
            },
        }


class LayoutGenerator:
    """
    Generate seeded page layouts from a content catalog.

    Typical workflow::

        gen = LayoutGenerator(catalog)
        result = gen.generate("2025-12-03", "gastronomia", "c_asia")
    """

    def __init__(self, catalog: Optional[Catalog] = None, snap: bool = True):
        """
        Parameters
        ----------
        catalog : Catalog, optional
            Content catalog; the configured default catalog when omitted.
        snap : bool
            Cut partitions on the integer lattice so that blocks tile the
            grid exactly.
        """
        self.catalog = catalog if catalog is not None else default_catalog()
        self.snap = snap

    @classmethod
    def from_json(cls, catalog_path: Union[str, Path], snap: bool = True) -> "LayoutGenerator":
        """Build a generator around the catalog stored at *catalog_path*."""
        return cls(load_catalog(catalog_path), snap=snap)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(
        self,
        seed: str,
        category: str,
        subcategory: str,
        width: int = DEFAULT_GRID_WIDTH,
        height: int = DEFAULT_GRID_HEIGHT,
    ) -> LayoutResult:
        """
        Generate one layout.

        Parameters
        ----------
        seed : str
            Non-empty seed text; equal seeds give identical layouts.
        category, subcategory : str
            Catalog id or display name.
        width, height : int
            Grid size in cells.

        Raises
        ------
        ConfigurationError
            Unknown category or subcategory, or a category without slots.
        ValueError
            Empty seed or non-positive grid size.
        """
        if not seed:
            raise ValueError("Seed must be a non-empty string")
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")

        rng = SeedRandom(seed)

        cat = self.catalog.find_category(category)
        sub = self.catalog.find_subcategory(subcategory)
        slots = self.catalog.slots_for(cat.id)
        palette = self.catalog.palette_for(sub.id)

        # Phase 1: partition the canvas
        requested = max(len(slots), 1)
        leaves = bsp_partition(width, height, requested, rng, snap=self.snap)
        if len(leaves) < requested:
            msg = (
                f"Only {len(leaves)} of {requested} partitions fit on a "
                f"{width}x{height} grid"
            )
            logger.warning(msg)
            warnings.warn(msg, CapacityWarning, stacklevel=2)

        # Phase 2: heaviest slots onto the largest leaves
        blocks = assign_slots(slots, leaves, self.catalog.slot_weights, width, height)
        fallback = [b.slot_id for b in blocks if b.fallback]

        # Phase 3: remove rounding and fallback overlaps
        blocks, unplaced = validate_and_fix(blocks, width, height)

        # Phase 4: colours continue the same stream
        blocks = colorize(blocks, palette, rng)

        logger.info(
            f"Generated {len(blocks)} blocks for seed={seed!r} "
            f"{cat.id}/{sub.id} on {width}x{height}"
        )
        return LayoutResult(
            seed=seed,
            category=cat.id,
            subcategory=sub.id,
            width=width,
            height=height,
            blocks=blocks,
            requested_partitions=requested,
            produced_partitions=len(leaves),
            fallback_slots=fallback,
            unplaced_slots=unplaced,
        )


def generate_layout(
    seed: str,
    category: str,
    subcategory: str,
    width: int = DEFAULT_GRID_WIDTH,
    height: int = DEFAULT_GRID_HEIGHT,
    catalog: Optional[Catalog] = None,
) -> List[LayoutBlock]:
    """Single-call entry point: the ordered block list for one request."""
    return LayoutGenerator(catalog).generate(seed, category, subcategory, width, height).blocks
