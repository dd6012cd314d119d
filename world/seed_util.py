"""Reproducible random generator from a seed. Seed -1 = new random seed each call; the seed used is returned."""

import random
from typing import Tuple


def make_rng(seed: int) -> Tuple[random.Random, int]:
    """
    Return (rng, seed_used). Gas shuffles and brush scatter draw from this one generator,
    so replaying the same input with the same seed gives the same grid.
    """
    if seed == -1:
        seed_used = random.randint(0, 2**31 - 1)
    else:
        seed_used = seed
    return random.Random(seed_used), seed_used
