"""Fixed-size 2D grid of cells, each holding exactly one particle. Shape (width, height), row-major."""

from typing import TYPE_CHECKING

from world.constants import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    EMPTY_COLOR,
    MATERIAL_NAME_NONE,
    MaterialType,
)

if TYPE_CHECKING:
    from world.materials import SpreadRules


class Particle:
    """Mutable payload of a cell. spread_rules is a per-particle copy taken at paint time."""

    __slots__ = ("name", "type", "color", "lifetime", "updated", "spread_rules")

    def __init__(
        self,
        name: str = MATERIAL_NAME_NONE,
        type: MaterialType = MaterialType.NONE,
        color: tuple[int, int, int] = EMPTY_COLOR,
        lifetime: float = -1.0,
        spread_rules: "SpreadRules | None" = None,
    ) -> None:
        self.name = name
        self.type = MaterialType(type)
        self.color = tuple(color)
        self.lifetime = lifetime
        self.updated = False
        self.spread_rules = spread_rules

    @property
    def is_empty(self) -> bool:
        return self.type == MaterialType.NONE

    def can_replace(self, name: str) -> bool:
        return self.spread_rules is not None and name in self.spread_rules.can_replace

    def __repr__(self) -> str:
        return f"Particle({self.name!r}, {self.type.name}, color={self.color})"


class Cell:
    __slots__ = ("x", "y", "particle")

    def __init__(self, x: int, y: int, particle: Particle | None = None) -> None:
        self.x = x
        self.y = y
        self.particle = particle if particle is not None else Particle()


class Grid:
    """width x height cells; never resized. Out-of-bounds lookups return None."""

    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells = [Cell(i % width, i // width) for i in range(width * height)]

    @classmethod
    def from_surface(cls, surface_width: int, surface_height: int, cell_size: int) -> "Grid":
        """Grid covering a pixel surface at cell_size pixels per cell."""
        return cls(surface_width // cell_size, surface_height // cell_size)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def cell_at(self, x: int, y: int) -> Cell | None:
        if not self.in_bounds(x, y):
            return None
        return self.cells[y * self.width + x]

    def particle_at(self, x: int, y: int) -> Particle | None:
        cell = self.cell_at(x, y)
        return cell.particle if cell is not None else None

    def neighbor(self, x: int, y: int, dx: int, dy: int) -> Cell | None:
        return self.cell_at(x + dx, y + dy)

    @staticmethod
    def swap(a: Cell, b: Cell) -> None:
        """Exchange the full particle payload of two cells."""
        a.particle, b.particle = b.particle, a.particle

    def clear(self) -> None:
        for cell in self.cells:
            cell.particle = Particle()

    def iter_colors(self):
        """Yield (x, y, color) for every cell, row by row."""
        for cell in self.cells:
            yield cell.x, cell.y, cell.particle.color

    def count_by_name(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for cell in self.cells:
            counts[cell.particle.name] = counts.get(cell.particle.name, 0) + 1
        return counts
