"""Initial patterns for each rule."""

import logging

import numpy as np

from ..config import RuleSet

logger = logging.getLogger(__name__)

# Center cell plus its six face neighbors.
CROSS_PATTERN = [
    (0, 0, 0),
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
]
NOISE_CELLS = 50
NOISE_SPREAD = 5

FILL_DENSITY = {
    RuleSet.LIFE_5766: 0.2,
    RuleSet.LIFE_25D: 0.3,
}
FILL_MARGIN = 1


def cross_with_noise(size: int, rng: np.random.Generator) -> np.ndarray:
    """Cross at the center plus random cells in a cube around it.

    Noise offsets are drawn from [-5, 4] per axis; cells falling outside
    the lattice are dropped.

    Args:
        size: Lattice edge length.
        rng: Random source.

    Returns:
        (N, N, N) boolean mask of seeded cells.
    """
    mask = np.zeros((size, size, size), dtype=bool)
    center = size // 2
    noise = rng.integers(-NOISE_SPREAD, NOISE_SPREAD, size=(NOISE_CELLS, 3))
    offsets = np.concatenate([np.array(CROSS_PATTERN), noise])

    cells = offsets + center
    inside = np.all((cells >= 0) & (cells < size), axis=1)
    kept = cells[inside]
    mask[kept[:, 0], kept[:, 1], kept[:, 2]] = True
    return mask


def random_fill(size: int, density: float, rng: np.random.Generator) -> np.ndarray:
    """Bernoulli fill of the lattice minus a one-cell border."""
    mask = np.zeros((size, size, size), dtype=bool)
    inner = slice(FILL_MARGIN, size - FILL_MARGIN)
    inner_size = max(0, size - 2 * FILL_MARGIN)
    mask[inner, inner, inner] = rng.random((inner_size,) * 3) < density
    return mask


def seed_mask(rule: RuleSet, size: int, rng: np.random.Generator) -> np.ndarray:
    """Pick the seeding pattern for a rule.

    Args:
        rule: Active rule.
        size: Lattice edge length.
        rng: Random source.

    Returns:
        (N, N, N) boolean mask of cells to activate.
    """
    if rule == RuleSet.GOLXR:
        mask = cross_with_noise(size, rng)
    else:
        mask = random_fill(size, FILL_DENSITY[rule], rng)
    logger.debug("Seeded %d cells for %s", int(mask.sum()), rule.value)
    return mask
