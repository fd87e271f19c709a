"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, Field
from typing import Optional

from config import DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH, MAX_GRID_SIZE


# ---------- Layout generation ----------
class GenerateLayoutRequest(BaseModel):
    seed: str = Field(..., min_length=1, description="Any text; equal seeds give equal layouts")
    category: str = Field(..., description="Category id or name")
    subcategory: str = Field(..., description="Subcategory id or name")
    width: int = Field(DEFAULT_GRID_WIDTH, ge=1, le=MAX_GRID_SIZE)
    height: int = Field(DEFAULT_GRID_HEIGHT, ge=1, le=MAX_GRID_SIZE)


class LayoutBlockOut(BaseModel):
    id: str
    x: int
    y: int
    w: int
    h: int
    color: str


class LayoutDiagnostics(BaseModel):
    requested_partitions: int
    produced_partitions: int
    degraded: bool = False
    fallback_slots: list[str] = []
    unplaced_slots: list[str] = []


class GenerateLayoutResponse(BaseModel):
    seed: str
    category: str
    subcategory: str
    width: int
    height: int
    blocks: list[LayoutBlockOut]
    diagnostics: Optional[LayoutDiagnostics] = None


# ---------- Catalog ----------
class SubcategoryOut(BaseModel):
    id: str
    name: str
    palette: list[str]


class CategoryOut(BaseModel):
    id: str
    name: str
    slots: list[str] = []
    subcategories: list[SubcategoryOut] = []
