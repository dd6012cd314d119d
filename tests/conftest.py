import random

import pytest

from world.constants import MaterialType
from world.grid import Grid
from world.materials import MaterialCatalog, MaterialDefinition, SpreadRules

SAND_COLOR = (194, 178, 128)
WATER_COLOR = (40, 90, 220)
OIL_COLOR = (70, 50, 30)
SMOKE_COLOR = (90, 90, 90)
WATER_ON_OIL = (60, 100, 200)
STEAM_COLOR = (210, 210, 225)
STEAM_ON_SMOKE = (190, 190, 200)


@pytest.fixture
def catalog() -> MaterialCatalog:
    return MaterialCatalog([
        MaterialDefinition("sand", MaterialType.SOLID, SAND_COLOR, -1.0, SpreadRules(can_replace=frozenset({"water"}))),
        MaterialDefinition(
            "water",
            MaterialType.LIQUID,
            WATER_COLOR,
            -1.0,
            SpreadRules(
                can_replace=frozenset({"oil", "tar"}),
                contact_colors={"oil": WATER_ON_OIL},
                contact_sounds={"oil": "glug"},
            ),
        ),
        MaterialDefinition("oil", MaterialType.LIQUID, OIL_COLOR),
        MaterialDefinition("tar", MaterialType.LIQUID, (20, 20, 20)),
        MaterialDefinition("smoke", MaterialType.GAS, SMOKE_COLOR, 90.0),
        MaterialDefinition(
            "steam",
            MaterialType.GAS,
            STEAM_COLOR,
            120.0,
            SpreadRules(
                can_replace=frozenset({"smoke"}),
                contact_colors={"smoke": STEAM_ON_SMOKE},
                contact_sounds={"smoke": "hiss"},
            ),
        ),
    ])


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def grid3() -> Grid:
    return Grid(3, 3)
