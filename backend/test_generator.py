"""
Tests for the end-to-end layout generator.

Covers determinism, grid coverage, non-overlap, bounds, weight/area
ranking and the reference scenarios.
"""
import sys
import os
import warnings

import pytest

sys.path.insert(0, os.path.dirname(__file__))

from services.layout_engine import (
    CapacityWarning,
    Catalog,
    ConfigurationError,
    LayoutGenerator,
    coverage_report,
    default_catalog,
    detect_overlaps,
    generate_layout,
)

CASES = [
    ("2025-12-03", "gastronomia", "c_asia", 12, 20),
    ("hello world", "gaming", "retro", 12, 20),
    ("seed-42", "arte", "vangogh", 8, 8),
    ("ñandú", "historia", "egipto", 16, 9),
    ("another", "Ciencia", "Astronomía", 30, 10),
    ("x", "musica", "jazz", 12, 20),
]

ASIA_PALETTE = {"#FF6B6B", "#FFE66D", "#2EC4B6"}


@pytest.fixture
def single_slot_catalog():
    return Catalog.from_dict({
        "categories": [{"id": "solo", "name": "Solo"}],
        "subcategories": [{"id": "mono", "category": "solo", "name": "Mono"}],
        "palettes": {"mono": ["#111111", "#222222"]},
        "slots": {"solo": ["hero"]},
        "slotWeights": {"hero": 4},
    })


# ============================================================================
# Reference scenarios
# ============================================================================

class TestScenarios:
    def test_scenario_a(self):
        blocks = generate_layout("2025-12-03", "gastronomia", "c_asia", 12, 20)
        assert len(blocks) == 7
        assert {b.slot_id for b in blocks} == {
            "navbar", "hero", "recipe_card", "ingredients", "steps", "gallery", "footer",
        }
        assert coverage_report(blocks, 12, 20)["valid"]
        assert detect_overlaps(blocks) == []
        assert {b.color for b in blocks} <= ASIA_PALETTE

    def test_scenario_a_block_order_follows_weight(self):
        blocks = generate_layout("2025-12-03", "gastronomia", "c_asia")
        assert [b.slot_id for b in blocks] == [
            "hero", "recipe_card", "steps", "gallery", "ingredients", "navbar", "footer",
        ]

    def test_scenario_b_unknown_category(self):
        with pytest.raises(ConfigurationError):
            generate_layout("2025-12-03", "foo", "c_asia")

    def test_unknown_subcategory(self):
        with pytest.raises(ConfigurationError):
            generate_layout("2025-12-03", "gastronomia", "foo")

    def test_scenario_c_single_cell(self, single_slot_catalog):
        blocks = generate_layout("any", "solo", "mono", 1, 1, catalog=single_slot_catalog)
        assert len(blocks) == 1
        b = blocks[0]
        assert (b.slot_id, b.x, b.y, b.w, b.h) == ("hero", 0, 0, 1, 1)
        assert b.color in {"#111111", "#222222"}

    def test_single_slot_fills_canvas(self, single_slot_catalog):
        blocks = generate_layout("any", "solo", "mono", 12, 20, catalog=single_slot_catalog)
        assert [(b.x, b.y, b.w, b.h) for b in blocks] == [(0, 0, 12, 20)]


# ============================================================================
# Properties
# ============================================================================

class TestProperties:
    @pytest.mark.parametrize("seed,category,subcategory,width,height", CASES)
    def test_deterministic(self, seed, category, subcategory, width, height):
        a = generate_layout(seed, category, subcategory, width, height)
        b = generate_layout(seed, category, subcategory, width, height)
        assert [x.to_dict() for x in a] == [y.to_dict() for y in b]

    @pytest.mark.parametrize("seed,category,subcategory,width,height", CASES)
    def test_coverage_and_no_overlap(self, seed, category, subcategory, width, height):
        blocks = generate_layout(seed, category, subcategory, width, height)
        report = coverage_report(blocks, width, height)
        assert report["gaps"] == 0
        assert report["overlap_cells"] == 0
        assert detect_overlaps(blocks) == []

    @pytest.mark.parametrize("seed,category,subcategory,width,height", CASES)
    def test_bounds(self, seed, category, subcategory, width, height):
        for b in generate_layout(seed, category, subcategory, width, height):
            assert all(isinstance(v, int) for v in (b.x, b.y, b.w, b.h))
            assert b.x >= 0 and b.y >= 0
            assert b.w >= 1 and b.h >= 1
            assert b.right <= width and b.bottom <= height

    @pytest.mark.parametrize("seed,category,subcategory,width,height", CASES)
    def test_weight_area_ranking(self, seed, category, subcategory, width, height):
        catalog = default_catalog()
        blocks = generate_layout(seed, category, subcategory, width, height)
        weights = [catalog.weight_of(b.slot_id) for b in blocks]
        areas = [b.area for b in blocks]
        assert weights == sorted(weights, reverse=True)
        assert areas == sorted(areas, reverse=True)

    def test_colors_from_palette(self):
        catalog = default_catalog()
        for seed, category, subcategory, width, height in CASES:
            palette = set(catalog.palette_for(catalog.find_subcategory(subcategory).id))
            blocks = generate_layout(seed, category, subcategory, width, height)
            assert {b.color for b in blocks} <= palette

    def test_seed_changes_layout(self):
        a = [b.to_dict() for b in generate_layout("one", "gastronomia", "c_asia")]
        b = [b.to_dict() for b in generate_layout("two", "gastronomia", "c_asia")]
        assert a != b

    def test_names_resolve_like_ids(self):
        by_id = generate_layout("2025-12-03", "gastronomia", "c_asia")
        by_name = generate_layout("2025-12-03", "Gastronomía", "Cocina Asiática")
        assert [b.to_dict() for b in by_id] == [b.to_dict() for b in by_name]


# ============================================================================
# Generator result and degraded capacity
# ============================================================================

class TestLayoutGenerator:
    def test_result_diagnostics(self):
        result = LayoutGenerator().generate("2025-12-03", "gastronomia", "c_asia")
        assert result.requested_partitions == 7
        assert result.produced_partitions == 7
        assert not result.degraded
        assert result.fallback_slots == []
        assert result.unplaced_slots == []

    def test_to_dict_shape(self):
        data = LayoutGenerator().generate("2025-12-03", "gastronomia", "c_asia").to_dict()
        assert data["category"] == "gastronomia"
        assert data["subcategory"] == "c_asia"
        assert set(data["blocks"][0]) == {"id", "x", "y", "w", "h", "color"}
        assert data["diagnostics"]["degraded"] is False

    def test_capacity_warning_on_tiny_canvas(self):
        with pytest.warns(CapacityWarning):
            result = LayoutGenerator().generate("tiny", "gastronomia", "c_asia", 1, 1)
        assert result.degraded
        assert result.produced_partitions == 1
        assert len(result.blocks) == 7
        assert len(result.fallback_slots) == 6
        assert len(result.unplaced_slots) == 6
        for b in result.blocks:
            assert (b.x, b.y, b.w, b.h) == (0, 0, 1, 1)

    def test_no_warning_when_capacity_suffices(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", CapacityWarning)
            LayoutGenerator().generate("2025-12-03", "gastronomia", "c_asia")

    def test_empty_slot_list(self):
        catalog = Catalog.from_dict({
            "categories": [{"id": "blank", "name": "Blank"}],
            "subcategories": [{"id": "plain", "category": "blank", "name": "Plain"}],
            "slots": {},
        })
        with pytest.raises(ConfigurationError):
            LayoutGenerator(catalog).generate("seed", "blank", "plain")

    def test_empty_seed(self):
        with pytest.raises(ValueError):
            generate_layout("", "gastronomia", "c_asia")

    def test_non_positive_size(self):
        with pytest.raises(ValueError):
            generate_layout("seed", "gastronomia", "c_asia", 0, 20)

    def test_default_palette_when_missing(self):
        catalog = Catalog.from_dict({
            "categories": [{"id": "c", "name": "C"}],
            "subcategories": [{"id": "s", "category": "c", "name": "S"}],
            "slots": {"c": ["hero", "footer"]},
        })
        blocks = generate_layout("seed", "c", "s", catalog=catalog)
        assert {b.color for b in blocks} <= {"#cccccc", "#888888", "#444444"}

    def test_unsnapped_generator_stays_in_bounds(self):
        gen = LayoutGenerator(snap=False)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", CapacityWarning)
            result = gen.generate("2025-12-03", "gastronomia", "c_asia")
        for b in result.blocks:
            assert b.x >= 0 and b.y >= 0
            assert b.right <= 12 and b.bottom <= 20

    def test_default_grid_comes_from_config(self):
        from config import DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH
        result = LayoutGenerator().generate("2025-12-03", "gastronomia", "c_asia")
        assert (result.width, result.height) == (DEFAULT_GRID_WIDTH, DEFAULT_GRID_HEIGHT)
        blocks = generate_layout("2025-12-03", "gastronomia", "c_asia")
        assert coverage_report(blocks, DEFAULT_GRID_WIDTH, DEFAULT_GRID_HEIGHT)["valid"]

    def test_from_json(self):
        from config import CATALOG_PATH
        gen = LayoutGenerator.from_json(CATALOG_PATH)
        result = gen.generate("2025-12-03", "gastronomia", "c_asia")
        assert len(result.blocks) == 7
