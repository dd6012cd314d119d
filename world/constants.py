"""Simulation constants. Empty cells hold the "none" material; grid is row-major, y grows downward."""

from enum import IntEnum


class MaterialType(IntEnum):
    """Category of a material; selects which movement rule applies."""

    NONE = 0
    SOLID = 1
    LIQUID = 2
    GAS = 3


class BrushSize(IntEnum):
    """Value is the half-extent of the brush box in cells."""

    SMALL = 1
    MEDIUM = 8
    BIG = 16


MATERIAL_NAME_NONE = "none"
EMPTY_COLOR = (0, 0, 0)
# Mover color on contact when its rules name no color for the target.
FALLBACK_CONTACT_COLOR = (0, 0, 0)

CELL_SIZE = 10
WINDOW_WIDTH, WINDOW_HEIGHT = 800, 800
DEFAULT_WIDTH, DEFAULT_HEIGHT = WINDOW_WIDTH // CELL_SIZE, WINDOW_HEIGHT // CELL_SIZE

# Share of the brush box that a medium/big brush paints per call.
REVEAL_RATIO = 0.2

# Neighbor offsets (dx, dy) in priority order. dy = +1 is below.
SOLID_OFFSETS = [(0, 1), (-1, 1), (1, 1)]
LIQUID_OFFSETS = [(0, 1), (-1, 1), (1, 1), (-1, 0), (1, 0)]
GAS_OFFSETS = [(0, -1), (-1, 0), (1, 0), (0, 1)]
