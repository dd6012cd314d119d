"""UI: grid view and control panel."""

from ui.grid_view import draw_grid, draw_brush_outline, cell_rect
from ui.panel import ControlPanel
from ui.colors import grid_to_rgb

__all__ = ["draw_grid", "draw_brush_outline", "cell_rect", "ControlPanel", "grid_to_rgb"]
