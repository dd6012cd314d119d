import random

import pytest

from world.brush import (
    BrushState,
    paint,
    pointer_to_bounds,
    pointer_to_cell,
    reveal_at,
    reveal_in,
    scatter_points,
)
from world.constants import BrushSize, MaterialType
from world.grid import Grid
from world.materials import MaterialCatalog, MaterialDefinition, UnknownMaterialError


def test_pointer_to_cell_divides_and_clamps():
    g = Grid(10, 8)
    assert pointer_to_cell(g, 10, 35, 71) == (3, 7)
    assert pointer_to_cell(g, 10, 500, 500) == (9, 7)
    assert pointer_to_cell(g, 10, -5, -5) == (0, 0)


def test_pointer_to_bounds_clamps_to_grid():
    g = Grid(80, 80)
    assert pointer_to_bounds(g, 10, 400, 400, 8) == (32, 32, 48, 48)
    assert pointer_to_bounds(g, 10, 20, 790, 16) == (0, 63, 18, 79)


@pytest.mark.parametrize("bounds", [(32, 32, 48, 48), (0, 0, 18, 18), (0, 63, 18, 79), (5, 5, 5, 5)])
def test_scatter_points_stay_in_box_and_match_count(bounds):
    x0, y0, x1, y1 = bounds
    area = (x1 - x0 + 1) * (y1 - y0 + 1)
    points = scatter_points(bounds, random.Random(3))
    assert len(points) == int(0.2 * area)
    for x, y in points:
        assert x0 <= x <= x1
        assert y0 <= y <= y1


def test_scatter_is_denser_near_center():
    points = scatter_points((0, 0, 32, 32), random.Random(11))
    near = sum(1 for x, y in points if abs(x - 16) <= 4 and abs(y - 16) <= 4)
    corner = sum(1 for x, y in points if x <= 8 and y <= 8)
    assert near > corner


def test_reveal_copies_material_into_particle(catalog):
    g = Grid(3, 3)
    reveal_at(g, catalog, 2, 1, "water")
    p = g.particle_at(2, 1)
    water = catalog.lookup("water")
    assert p.name == "water"
    assert p.type == MaterialType.LIQUID
    assert p.color == water.initial_color
    assert p.lifetime == water.initial_lifetime
    assert p.can_replace("oil")
    assert p.spread_rules is not water.spread_rules
    assert p.spread_rules.contact_colors is not water.spread_rules.contact_colors


def test_catalog_replacement_does_not_touch_placed_particles(catalog):
    g = Grid(2, 2)
    reveal_at(g, catalog, 0, 0, "water")
    catalog.add(MaterialDefinition("water", MaterialType.GAS, (1, 1, 1)))
    p = g.particle_at(0, 0)
    assert p.type == MaterialType.LIQUID
    assert p.can_replace("oil")


def test_unknown_material_leaves_cell_unchanged(catalog):
    g = Grid(3, 3)
    reveal_at(g, catalog, 1, 1, "sand")
    before = g.particle_at(1, 1)
    with pytest.raises(UnknownMaterialError) as info:
        reveal_at(g, catalog, 1, 1, "unobtainium")
    assert info.value.name == "unobtainium"
    assert g.particle_at(1, 1) is before
    assert isinstance(info.value, KeyError)


def test_unknown_material_big_brush_paints_nothing(catalog, rng):
    g = Grid(40, 40)
    with pytest.raises(UnknownMaterialError):
        reveal_in(g, catalog, (0, 0, 32, 32), "unobtainium", rng)
    assert g.count_by_name() == {"none": 1600}


def test_paint_small_brush_hits_one_cell(catalog, rng):
    g = Grid(10, 10)
    painted = paint(g, catalog, BrushState(BrushSize.SMALL, "sand"), (55, 27), 10, rng)
    assert painted == [(5, 2)]
    assert g.count_by_name()["sand"] == 1


def test_paint_medium_brush_scatters_in_box(catalog, rng):
    g = Grid(80, 80)
    painted = paint(g, catalog, BrushState(BrushSize.MEDIUM, "sand"), (400, 400), 10, rng)
    assert len(painted) == int(0.2 * 17 * 17)
    assert all(32 <= x <= 48 and 32 <= y <= 48 for x, y in painted)
    assert g.count_by_name()["sand"] == len(set(painted))


def test_paint_none_erases(catalog, rng):
    g = Grid(4, 4)
    reveal_at(g, catalog, 1, 1, "sand")
    paint(g, catalog, BrushState(BrushSize.SMALL, "none"), (15, 15), 10, rng)
    assert g.particle_at(1, 1).is_empty


def test_brush_state_is_per_caller():
    cat = MaterialCatalog()
    a, b = BrushState(), BrushState()
    a.material = "sand"
    assert b.material == "none"
    assert cat.names() == ["none"]


@pytest.mark.parametrize("pointer", [(400, 400), (-300, 50), (50, 900), (1000, -1000)])
def test_big_brush_off_grid_pointer_clamps_box(catalog, pointer):
    g = Grid(20, 20)
    for brush in (BrushSize.MEDIUM, BrushSize.BIG):
        x0, y0, x1, y1 = pointer_to_bounds(g, 10, pointer[0], pointer[1], int(brush))
        assert 0 <= x0 <= x1 <= 19
        assert 0 <= y0 <= y1 <= 19
        painted = paint(g, catalog, BrushState(brush, "sand"), pointer, 10, random.Random(5))
        assert painted
        assert all(g.in_bounds(x, y) for x, y in painted)
    assert g.count_by_name()["sand"] > 0
