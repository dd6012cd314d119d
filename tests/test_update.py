import random
from collections import Counter

from world.brush import new_particle
from world.constants import FALLBACK_CONTACT_COLOR
from world.grid import Grid
from world.update import ContactEvent, step


def put(grid, catalog, x, y, name):
    grid.cell_at(x, y).particle = new_particle(catalog.lookup(name))


def names(grid):
    return [[grid.particle_at(x, y).name for x in range(grid.width)] for y in range(grid.height)]


def test_solid_falls_then_rests_on_bottom_row(grid3, catalog, rng):
    put(grid3, catalog, 1, 0, "sand")
    step(grid3, rng)
    assert grid3.particle_at(1, 1).name == "sand"
    step(grid3, rng)
    assert grid3.particle_at(1, 2).name == "sand"
    step(grid3, rng)
    assert grid3.particle_at(1, 2).name == "sand"
    assert grid3.count_by_name() == {"none": 8, "sand": 1}


def test_solid_prefers_below_over_diagonals(grid3, catalog, rng):
    put(grid3, catalog, 1, 1, "sand")
    step(grid3, rng)
    assert grid3.particle_at(1, 2).name == "sand"
    assert grid3.particle_at(0, 2).name == "none"
    assert grid3.particle_at(2, 2).name == "none"


def test_solid_slides_below_left_then_below_right(grid3, catalog, rng):
    put(grid3, catalog, 1, 2, "sand")
    put(grid3, catalog, 1, 1, "sand")
    step(grid3, rng)
    assert names(grid3)[2] == ["sand", "sand", "none"]

    g = Grid(3, 3)
    put(g, catalog, 0, 2, "sand")
    put(g, catalog, 1, 2, "sand")
    put(g, catalog, 1, 1, "sand")
    step(g, rng)
    assert names(g)[2] == ["sand", "sand", "sand"]


def test_solid_never_moves_sideways(catalog, rng):
    g = Grid(3, 2)
    for x in range(3):
        put(g, catalog, x, 1, "sand")
    put(g, catalog, 1, 0, "sand")
    step(g, rng)
    assert names(g)[0] == ["none", "sand", "none"]


def _floor(grid, catalog):
    for x in range(grid.width):
        put(grid, catalog, x, grid.height - 1, "sand")


def test_liquid_moves_left_before_right(grid3, catalog, rng):
    _floor(grid3, catalog)
    put(grid3, catalog, 1, 1, "water")
    step(grid3, rng)
    assert names(grid3)[1] == ["water", "none", "none"]


def test_liquid_moves_right_when_left_blocked(grid3, catalog, rng):
    _floor(grid3, catalog)
    put(grid3, catalog, 0, 1, "sand")
    put(grid3, catalog, 1, 1, "water")
    step(grid3, rng)
    assert names(grid3)[1] == ["sand", "none", "water"]


def test_liquid_prefers_diagonal_over_side(grid3, catalog, rng):
    put(grid3, catalog, 1, 2, "sand")
    put(grid3, catalog, 1, 1, "water")
    step(grid3, rng)
    assert grid3.particle_at(0, 2).name == "water"


def test_liquid_replaces_below_and_takes_contact_color(grid3, catalog, rng):
    _floor(grid3, catalog)
    put(grid3, catalog, 0, 1, "sand")
    put(grid3, catalog, 2, 1, "sand")
    put(grid3, catalog, 1, 1, "oil")
    put(grid3, catalog, 1, 0, "water")
    events = step(grid3, rng)
    water = grid3.particle_at(1, 1)
    assert water.name == "water"
    assert water.color == catalog.lookup("water").spread_rules.contact_colors["oil"]
    assert grid3.particle_at(1, 0).name == "oil"
    assert events == [ContactEvent(1, 1, "water", "oil", "glug")]


def test_replace_without_contact_color_uses_fallback(grid3, catalog, rng):
    _floor(grid3, catalog)
    put(grid3, catalog, 0, 1, "sand")
    put(grid3, catalog, 2, 1, "sand")
    put(grid3, catalog, 1, 1, "tar")
    put(grid3, catalog, 1, 0, "water")
    events = step(grid3, rng)
    assert grid3.particle_at(1, 1).name == "water"
    assert grid3.particle_at(1, 1).color == FALLBACK_CONTACT_COLOR
    assert events[0].sound is None


def test_replace_only_applies_below(grid3, catalog, rng):
    _floor(grid3, catalog)
    put(grid3, catalog, 0, 1, "oil")
    put(grid3, catalog, 2, 1, "sand")
    put(grid3, catalog, 1, 1, "water")
    step(grid3, rng)
    assert names(grid3)[1] == ["oil", "water", "sand"]


def test_moving_into_empty_keeps_color(grid3, catalog, rng):
    put(grid3, catalog, 1, 0, "sand")
    events = step(grid3, rng)
    assert grid3.particle_at(1, 1).color == catalog.lookup("sand").initial_color
    assert events == []


def test_gas_direction_is_uniform():
    from world.materials import MaterialCatalog, MaterialDefinition
    from world.constants import MaterialType

    cat = MaterialCatalog([MaterialDefinition("smoke", MaterialType.GAS, (90, 90, 90))])
    rng = random.Random(42)
    trials = 4000
    landed = Counter()
    for _ in range(trials):
        g = Grid(3, 3)
        put(g, cat, 1, 1, "smoke")
        step(g, rng)
        pos = [(c.x, c.y) for c in g.cells if c.particle.name == "smoke"]
        assert len(pos) == 1
        landed[pos[0]] += 1
    assert set(landed) == {(1, 0), (0, 1), (2, 1), (1, 2)}
    for count in landed.values():
        assert abs(count - trials / 4) < trials * 0.05


def test_gas_in_top_row_moves(catalog, rng):
    g = Grid(3, 1)
    put(g, catalog, 1, 0, "smoke")
    step(g, rng)
    assert g.particle_at(1, 0).name == "none"


def test_particle_moves_once_per_tick_by_default(grid3, catalog, rng):
    _floor(grid3, catalog)
    put(grid3, catalog, 0, 1, "water")
    step(grid3, rng)
    assert names(grid3)[1] == ["none", "water", "none"]
    assert grid3.particle_at(1, 1).updated


def test_double_update_when_allowed(grid3, catalog, rng):
    _floor(grid3, catalog)
    put(grid3, catalog, 0, 1, "water")
    step(grid3, rng, allow_double_update=True)
    # Moved right at x=0, then left again when the scan reached x=1.
    assert names(grid3)[1] == ["water", "none", "none"]


def test_particles_are_conserved(catalog):
    rng = random.Random(7)
    g = Grid(12, 10)
    choices = ["none", "none", "sand", "water", "oil", "tar", "smoke"]
    for cell in g.cells:
        cell.particle = new_particle(catalog.lookup(rng.choice(choices)))
    before = g.count_by_name()
    for _ in range(60):
        step(g, rng)
        assert g.count_by_name() == before
        assert len(g.cells) == 120


def test_gas_replaces_sideways_and_takes_contact_color(catalog):
    steam_color = catalog.lookup("steam").spread_rules.contact_colors["smoke"]
    for seed in range(20):
        g = Grid(3, 1)
        put(g, catalog, 0, 0, "smoke")
        put(g, catalog, 1, 0, "steam")
        put(g, catalog, 2, 0, "smoke")
        events = step(g, random.Random(seed))
        row = names(g)[0]
        assert row in (["steam", "smoke", "smoke"], ["smoke", "smoke", "steam"])
        x = row.index("steam")
        assert g.particle_at(x, 0).color == steam_color
        assert events == [ContactEvent(x, 0, "steam", "smoke", "hiss")]


def test_gas_replaces_upward(catalog, rng):
    g = Grid(1, 2)
    put(g, catalog, 0, 0, "smoke")
    put(g, catalog, 0, 1, "steam")
    events = step(g, rng)
    assert names(g) == [["steam"], ["smoke"]]
    assert events == [ContactEvent(0, 0, "steam", "smoke", "hiss")]


def test_gas_without_replace_rule_stays_boxed_in(catalog, rng):
    g = Grid(3, 1)
    put(g, catalog, 0, 0, "tar")
    put(g, catalog, 1, 0, "steam")
    put(g, catalog, 2, 0, "tar")
    assert step(g, rng) == []
    assert names(g)[0] == ["tar", "steam", "tar"]
