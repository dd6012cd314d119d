"""
Display colors: grid particle colors packed into an (height, width, 3) uint8 array for
blitting. Cell colors already carry contact tints, so this is a straight copy.
"""

import numpy as np

from world.grid import Grid


def grid_to_rgb(grid: Grid) -> np.ndarray:
    """Returns (height, width, 3) uint8 RGB; row y, column x."""
    flat = np.fromiter(
        (c for cell in grid.cells for c in cell.particle.color),
        dtype=np.uint8,
        count=grid.width * grid.height * 3,
    )
    return flat.reshape(grid.height, grid.width, 3)


def occupancy(grid: Grid) -> np.ndarray:
    """(height, width) bool mask of non-empty cells."""
    mask = np.fromiter(
        (not cell.particle.is_empty for cell in grid.cells),
        dtype=bool,
        count=grid.width * grid.height,
    )
    return mask.reshape(grid.height, grid.width)
