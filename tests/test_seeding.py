import numpy as np

from voxlife.config import RuleSet
from voxlife.core.seeding import CROSS_PATTERN, cross_with_noise, random_fill, seed_mask


def test_cross_is_always_seeded():
    mask = cross_with_noise(20, np.random.default_rng(0))
    for dx, dy, dz in CROSS_PATTERN:
        assert mask[10 + dx, 10 + dy, 10 + dz]
    assert 7 <= mask.sum() <= 57


def test_noise_stays_near_center():
    mask = cross_with_noise(20, np.random.default_rng(1))
    coords = np.argwhere(mask)
    assert coords.min() >= 5
    assert coords.max() <= 14


def test_noise_outside_small_lattice_is_dropped():
    mask = cross_with_noise(4, np.random.default_rng(2))
    assert mask.shape == (4, 4, 4)
    assert mask[2, 2, 2]


def test_random_fill_leaves_border_empty():
    mask = random_fill(10, 0.5, np.random.default_rng(3))
    assert not mask[0].any() and not mask[-1].any()
    assert not mask[:, 0].any() and not mask[:, :, -1].any()
    assert mask[1:-1, 1:-1, 1:-1].any()


def test_fill_density_per_rule():
    rng = np.random.default_rng(4)
    sparse = seed_mask(RuleSet.LIFE_5766, 30, rng)
    dense = seed_mask(RuleSet.LIFE_25D, 30, rng)
    inner = 28**3
    assert abs(sparse.sum() / inner - 0.2) < 0.02
    assert abs(dense.sum() / inner - 0.3) < 0.02
