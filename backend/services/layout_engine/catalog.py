"""
Content catalog: categories, subcategories, palettes, slots and weights.

The catalog is read-only configuration: it is loaded once from JSON into a
frozen :class:`Catalog` value and passed into every generation call, so
the layout engine never reaches for global mutable state.
"""

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_PALETTE: Tuple[str, ...] = ("#cccccc", "#888888", "#444444")
DEFAULT_SLOT_WEIGHT = 1.0


class ConfigurationError(LookupError):
    """A category, subcategory or slot list could not be resolved (NotFound)."""


@dataclass(frozen=True)
class Category:
    id: str
    name: str

    def matches(self, ref: str) -> bool:
        return ref == self.id or ref == self.name


@dataclass(frozen=True)
class Subcategory:
    id: str
    category: str
    name: str

    def matches(self, ref: str) -> bool:
        return ref == self.id or ref == self.name


@dataclass(frozen=True)
class Catalog:
    """Immutable snapshot of the content catalog."""

    categories: Tuple[Category, ...]
    subcategories: Tuple[Subcategory, ...]
    palettes: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    slots: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    slot_weights: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("palettes", "slots", "slot_weights"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_category(self, ref: str) -> Category:
        """Category whose id or name equals *ref*."""
        for category in self.categories:
            if category.matches(ref):
                return category
        raise ConfigurationError(f'Category "{ref}" not found')

    def find_subcategory(self, ref: str) -> Subcategory:
        """Subcategory whose id or name equals *ref*."""
        for sub in self.subcategories:
            if sub.matches(ref):
                return sub
        raise ConfigurationError(f'Subcategory "{ref}" not found')

    def subcategories_of(self, category_id: str) -> Tuple[Subcategory, ...]:
        return tuple(s for s in self.subcategories if s.category == category_id)

    def slots_for(self, category_id: str) -> Tuple[str, ...]:
        """Ordered slot list of a category; empty or missing is an error."""
        slots = self.slots.get(category_id, ())
        if not slots:
            raise ConfigurationError(f'No slots defined for category "{category_id}"')
        return slots

    def palette_for(self, subcategory_id: str) -> Tuple[str, ...]:
        return self.palettes.get(subcategory_id) or DEFAULT_PALETTE

    def weight_of(self, slot_id: str) -> float:
        return self.slot_weights.get(slot_id, DEFAULT_SLOT_WEIGHT)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Catalog":
        """
        Build a catalog from its JSON form.

        Expected keys: ``categories`` (``[{id, name}]``), ``subcategories``
        (``[{id, category, name}]``), ``palettes``, ``slots`` and
        ``slotWeights`` (``slot_weights`` is accepted as well).
        """
        try:
            categories = tuple(Category(c["id"], c["name"]) for c in data["categories"])
            subcategories = tuple(
                Subcategory(s["id"], s["category"], s["name"])
                for s in data["subcategories"]
            )
        except (KeyError, TypeError) as e:
            raise ConfigurationError(f"Malformed catalog entry: {e}") from e

        palettes = {
            sub_id: _string_list("palettes", sub_id, colors)
            for sub_id, colors in _section(data, "palettes").items()
            if colors
        }
        slots = {
            cat_id: _string_list("slots", cat_id, slot_ids)
            for cat_id, slot_ids in _section(data, "slots").items()
        }
        weights_key = "slotWeights" if "slotWeights" in data else "slot_weights"
        weights: Dict[str, float] = {}
        for slot_id, weight in _section(data, weights_key).items():
            if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight <= 0:
                raise ConfigurationError(
                    f'Slot weight for "{slot_id}" must be a positive number, got {weight!r}'
                )
            weights[slot_id] = float(weight)

        return cls(
            categories=categories,
            subcategories=subcategories,
            palettes=palettes,
            slots=slots,
            slot_weights=weights,
        )

    def summary(self) -> list:
        """Categories with their subcategories and slot lists."""
        return [
            {
                "id": c.id,
                "name": c.name,
                "slots": list(self.slots.get(c.id, ())),
                "subcategories": [
                    {"id": s.id, "name": s.name, "palette": list(self.palette_for(s.id))}
                    for s in self.subcategories_of(c.id)
                ],
            }
            for c in self.categories
        ]


def _section(data: Dict[str, Any], key: str) -> Mapping[str, Any]:
    """Optional mapping section of the catalog JSON; absent means empty."""
    if key not in data:
        return {}
    value = data[key]
    if not isinstance(value, Mapping):
        raise ConfigurationError(
            f'Catalog section "{key}" must be an object, got {type(value).__name__}'
        )
    return value


def _string_list(section: str, key: str, value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(
            f'Catalog entry {section}["{key}"] must be a list of strings, got {value!r}'
        )
    return tuple(value)


def load_catalog(path: Union[str, Path]) -> Catalog:
    """Load a catalog from a JSON file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Catalog file {path} is not valid JSON: {e}") from e

    catalog = Catalog.from_dict(data)
    logger.info(
        f"Loaded catalog from {path}: {len(catalog.categories)} categories, "
        f"{len(catalog.subcategories)} subcategories"
    )
    return catalog


@lru_cache(maxsize=None)
def _cached_catalog(path: str) -> Catalog:
    return load_catalog(path)


def default_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """Catalog at *path*, or at the configured ``CATALOG_PATH``; cached per path."""
    if path is None:
        from config import CATALOG_PATH
        path = CATALOG_PATH
    return _cached_catalog(str(Path(path).resolve()))
