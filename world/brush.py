"""
Brush/reveal: turn a pointer position and brush selection into painted cells.
Small paints the pointer cell. Medium/big pick floor(REVEAL_RATIO * box area) points by
random angle and radius around the box center, so paint is denser near the middle.
"""

import logging
import math
import random
from dataclasses import dataclass

from world.constants import MATERIAL_NAME_NONE, REVEAL_RATIO, BrushSize
from world.grid import Grid, Particle
from world.materials import MaterialCatalog, MaterialDefinition

logger = logging.getLogger(__name__)

Bounds = tuple[int, int, int, int]


@dataclass
class BrushState:
    """Current selection; owned by the caller (UI panel) and passed to paint()."""

    brush: BrushSize = BrushSize.SMALL
    material: str = MATERIAL_NAME_NONE


def pointer_to_cell(grid: Grid, cell_size: int, px: int, py: int) -> tuple[int, int]:
    x = max(0, min(px // cell_size, grid.width - 1))
    y = max(0, min(py // cell_size, grid.height - 1))
    return x, y


def pointer_to_bounds(grid: Grid, cell_size: int, px: int, py: int, extent: int) -> Bounds:
    """Inclusive (x_start, y_start, x_end, y_end) box of half-extent cells, clamped to the grid."""
    cx, cy = pointer_to_cell(grid, cell_size, px, py)
    x_start = max(0, cx - extent)
    y_start = max(0, cy - extent)
    x_end = min(grid.width - 1, cx + extent)
    y_end = min(grid.height - 1, cy + extent)
    return x_start, y_start, x_end, y_end


def scatter_points(bounds: Bounds, rng: random.Random) -> list[tuple[int, int]]:
    """Radial random sample inside bounds; duplicates are kept."""
    x_start, y_start, x_end, y_end = bounds
    area = (x_end - x_start + 1) * (y_end - y_start + 1)
    count = int(area * REVEAL_RATIO)
    center_x = (x_start + x_end) // 2
    center_y = (y_start + y_end) // 2
    max_radius = min(center_x - x_start, center_y - y_start)
    points = []
    for _ in range(count):
        angle = rng.uniform(0.0, 2.0 * math.pi)
        radius = rng.uniform(0.0, max_radius)
        x = int(center_x + radius * math.cos(angle))
        y = int(center_y + radius * math.sin(angle))
        x = max(x_start, min(x, x_end))
        y = max(y_start, min(y, y_end))
        points.append((x, y))
    return points


def new_particle(definition: MaterialDefinition) -> Particle:
    return Particle(
        name=definition.name,
        type=definition.type,
        color=definition.initial_color,
        lifetime=definition.initial_lifetime,
        spread_rules=definition.spread_rules.copy(),
    )


def reveal_at(grid: Grid, catalog: MaterialCatalog, x: int, y: int, material: str) -> None:
    """Paint one cell. Raises UnknownMaterialError (cell untouched) if material is not in the catalog."""
    definition = catalog.lookup(material)
    cell = grid.cell_at(x, y)
    if cell is None:
        return
    cell.particle = new_particle(definition)


def reveal_in(
    grid: Grid,
    catalog: MaterialCatalog,
    bounds: Bounds,
    material: str,
    rng: random.Random,
) -> list[tuple[int, int]]:
    """Scatter-paint inside bounds. Returns the painted points."""
    definition = catalog.lookup(material)
    points = scatter_points(bounds, rng)
    for x, y in points:
        grid.cells[y * grid.width + x].particle = new_particle(definition)
    return points


def paint(
    grid: Grid,
    catalog: MaterialCatalog,
    state: BrushState,
    pointer: tuple[int, int],
    cell_size: int,
    rng: random.Random,
) -> list[tuple[int, int]]:
    """Apply the current brush at a pointer pixel position. Returns the painted cells."""
    px, py = pointer
    if state.brush == BrushSize.SMALL:
        x, y = pointer_to_cell(grid, cell_size, px, py)
        reveal_at(grid, catalog, x, y, state.material)
        return [(x, y)]
    bounds = pointer_to_bounds(grid, cell_size, px, py, int(state.brush))
    return reveal_in(grid, catalog, bounds, state.material, rng)
