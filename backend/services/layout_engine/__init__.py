"""
Layout Engine for seeded page layouts.

Partitions an integer grid into one rectangular block per content slot
using seeded Binary Space Partitioning, then validates and colours the
blocks.  Output is deterministic for a given seed and catalog selection.
"""

from .block import LayoutBlock
from .bsp import Rect, bsp_partition, split_rectangle
from .catalog import Catalog, ConfigurationError, default_catalog, load_catalog
from .generator import CapacityWarning, LayoutGenerator, LayoutResult, generate_layout
from .seed_random import SeedRandom
from .validation import coverage_report, detect_overlaps, has_overlaps, validate_and_fix

__all__ = [
    "LayoutGenerator",
    "LayoutResult",
    "generate_layout",
    "LayoutBlock",
    "Rect",
    "bsp_partition",
    "split_rectangle",
    "Catalog",
    "ConfigurationError",
    "CapacityWarning",
    "default_catalog",
    "load_catalog",
    "SeedRandom",
    "validate_and_fix",
    "detect_overlaps",
    "has_overlaps",
    "coverage_report",
]
