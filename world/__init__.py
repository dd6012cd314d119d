"""World: falling-sand grid, material catalog, tick update and brush painting."""

from world.grid import Grid, Cell, Particle
from world.update import step, ContactEvent
from world.brush import BrushState, paint
from world.materials import MaterialCatalog, MaterialCatalogError, UnknownMaterialError, load_catalog
from world.constants import BrushSize, MaterialType, CELL_SIZE, MATERIAL_NAME_NONE

__all__ = [
    "Grid", "Cell", "Particle", "step", "ContactEvent", "BrushState", "paint",
    "MaterialCatalog", "MaterialCatalogError", "UnknownMaterialError", "load_catalog",
    "BrushSize", "MaterialType", "CELL_SIZE", "MATERIAL_NAME_NONE",
]
