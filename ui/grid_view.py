"""Left area: simulation grid, one cell_size square per cell, plus the brush outline under the pointer."""

import pygame

from ui.colors import grid_to_rgb
from world.constants import BrushSize
from world.grid import Grid

BRUSH_OUTLINE_COLOR = (90, 90, 90)


def cell_rect(x: int, y: int, cell_size: int) -> pygame.Rect:
    return pygame.Rect(x * cell_size, y * cell_size, cell_size, cell_size)


def draw_grid(surface: pygame.Surface, grid: Grid, cell_size: int) -> None:
    """Draw the grid at the surface origin: one image, one pixel per cell, scaled up by cell_size."""
    if grid.width == 0 or grid.height == 0:
        return
    rgb = grid_to_rgb(grid)
    w, h = grid.width, grid.height
    try:
        img = pygame.image.fromstring(rgb.tobytes(), (w, h), "RGB")
    except (TypeError, AttributeError):
        img = pygame.image.frombytes(rgb.tobytes(), (w, h), "RGB")
    scaled = pygame.transform.scale(img, (w * cell_size, h * cell_size))
    surface.blit(scaled, (0, 0))


def draw_brush_outline(
    surface: pygame.Surface, grid: Grid, cell_size: int, pos: tuple[int, int], brush: BrushSize
) -> None:
    cx, cy = pos[0] // cell_size, pos[1] // cell_size
    if not grid.in_bounds(cx, cy):
        return
    extent = 0 if brush == BrushSize.SMALL else int(brush)
    x0, y0 = max(0, cx - extent), max(0, cy - extent)
    x1, y1 = min(grid.width - 1, cx + extent), min(grid.height - 1, cy + extent)
    rect = cell_rect(x0, y0, cell_size).union(cell_rect(x1, y1, cell_size))
    pygame.draw.rect(surface, BRUSH_OUTLINE_COLOR, rect, 1)
