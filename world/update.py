"""
Per-tick update: scan rows bottom to top (x left to right) and give every non-empty
particle at most one swap with a neighbor, by its category's priority order.
Solid: below, below-left, below-right. Liquid: those, then left, right. Gas: the four
cardinal neighbors in random order. Only "below" (and any gas direction) may displace a
non-empty neighbor listed in the mover's can_replace; other moves need an empty cell.
"""

import logging
import random
from dataclasses import dataclass

from world.constants import (
    FALLBACK_CONTACT_COLOR,
    GAS_OFFSETS,
    LIQUID_OFFSETS,
    SOLID_OFFSETS,
    MaterialType,
)
from world.grid import Cell, Grid, Particle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContactEvent:
    """A mover displaced a non-empty target; sound is the mover's cue for it, if any."""

    x: int
    y: int
    mover: str
    target: str
    sound: str | None


def contact_color(mover: Particle, target_name: str) -> tuple[int, int, int]:
    rules = mover.spread_rules
    if rules is None:
        return FALLBACK_CONTACT_COLOR
    return rules.contact_colors.get(target_name, FALLBACK_CONTACT_COLOR)


def contact_sound(mover: Particle, target_name: str) -> str | None:
    rules = mover.spread_rules
    if rules is None:
        return None
    return rules.contact_sounds.get(target_name)


def _can_enter(mover: Particle, target: Cell | None, allow_replace: bool) -> bool:
    if target is None:
        return False
    if target.particle.is_empty:
        return True
    return allow_replace and mover.can_replace(target.particle.name)


def _move(grid: Grid, source: Cell, target: Cell, events: list[ContactEvent]) -> None:
    mover = source.particle
    other = target.particle
    if not other.is_empty:
        mover.color = contact_color(mover, other.name)
        sound = contact_sound(mover, other.name)
        if sound is not None:
            logger.debug("Contact %s -> %s at (%d, %d): %s", mover.name, other.name, target.x, target.y, sound)
        events.append(ContactEvent(target.x, target.y, mover.name, other.name, sound))
    mover.updated = True
    grid.swap(source, target)


def _try_offsets(grid: Grid, cell: Cell, offsets, replace_first_only: bool, events: list[ContactEvent]) -> bool:
    mover = cell.particle
    for k, (dx, dy) in enumerate(offsets):
        target = grid.neighbor(cell.x, cell.y, dx, dy)
        allow_replace = k == 0 or not replace_first_only
        if _can_enter(mover, target, allow_replace):
            _move(grid, cell, target, events)
            return True
    return False


def update_solid(grid: Grid, x: int, y: int, events: list[ContactEvent]) -> bool:
    return _try_offsets(grid, grid.cell_at(x, y), SOLID_OFFSETS, True, events)


def update_liquid(grid: Grid, x: int, y: int, events: list[ContactEvent]) -> bool:
    return _try_offsets(grid, grid.cell_at(x, y), LIQUID_OFFSETS, True, events)


def update_gas(grid: Grid, x: int, y: int, events: list[ContactEvent], rng: random.Random) -> bool:
    offsets = list(GAS_OFFSETS)
    rng.shuffle(offsets)
    return _try_offsets(grid, grid.cell_at(x, y), offsets, False, events)


def step(
    grid: Grid,
    rng: random.Random | None = None,
    allow_double_update: bool = False,
) -> list[ContactEvent]:
    """
    One tick over the whole grid, top row included. Unless allow_double_update, a particle
    that already moved this tick is skipped if the scan reaches it again. Returns contact events.
    """
    if rng is None:
        rng = random.Random()
    for cell in grid.cells:
        cell.particle.updated = False
    events: list[ContactEvent] = []
    for y in range(grid.height - 1, -1, -1):
        for x in range(grid.width):
            particle = grid.cells[y * grid.width + x].particle
            if particle.type == MaterialType.NONE:
                continue
            if particle.updated and not allow_double_update:
                continue
            if particle.type == MaterialType.SOLID:
                update_solid(grid, x, y, events)
            elif particle.type == MaterialType.LIQUID:
                update_liquid(grid, x, y, events)
            elif particle.type == MaterialType.GAS:
                update_gas(grid, x, y, events, rng)
    return events
