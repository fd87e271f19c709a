"""Seeded page layout generation and catalog browsing routes."""

import logging
import warnings
from fastapi import APIRouter, HTTPException
from schemas import CategoryOut, GenerateLayoutRequest, GenerateLayoutResponse
from services.layout_engine import (
    CapacityWarning,
    ConfigurationError,
    LayoutGenerator,
    default_catalog,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/layout", tags=["layout"])


@router.post("/generate", response_model=GenerateLayoutResponse)
async def generate(req: GenerateLayoutRequest):
    """
    Generate a deterministic layout for a seed and catalog selection.

    The same request always returns the same blocks.  A canvas too small
    for the category's slots still produces a layout; the shortfall is
    reported under ``diagnostics``.
    """
    try:
        generator = LayoutGenerator(default_catalog())
        with warnings.catch_warnings():
            # Surfaced through diagnostics instead
            warnings.simplefilter("ignore", CapacityWarning)
            result = generator.generate(
                req.seed, req.category, req.subcategory, req.width, req.height
            )
    except ConfigurationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return result.to_dict()


@router.get("/catalog", response_model=list[CategoryOut])
async def list_catalog():
    """Categories with their subcategories, palettes and slot lists."""
    return default_catalog().summary()


@router.get("/catalog/{category}", response_model=CategoryOut)
async def get_category(category: str):
    """A single category by id or name."""
    catalog = default_catalog()
    try:
        cat = catalog.find_category(category)
    except ConfigurationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return next(c for c in catalog.summary() if c["id"] == cat.id)
