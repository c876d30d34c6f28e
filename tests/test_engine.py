import math

import numpy as np
import pytest

from voxlife import ConfigError, Engine, EngineConfig, RuleSet
from voxlife.core.grid import NEVER_ACTIVATED
from voxlife.core.neighbors import count_neighbors
from voxlife.core.rules import Life5766Rule


def place(engine, cells, now_ms):
    """Replace the live cells with ``cells``, stamped at ``now_ms``."""
    engine.grid.current.fill(0)
    mask = np.zeros(engine.grid.shape, dtype=bool)
    for x, y, z in cells:
        mask[x, y, z] = True
    engine.grid.activate_mask(mask, now_ms)


def make_engine(**kwargs):
    kwargs.setdefault("seed", 1234)
    return Engine(EngineConfig(**kwargs))


def test_rejects_empty_lattice():
    with pytest.raises(ConfigError):
        Engine(EngineConfig(grid_size=0))


@pytest.mark.parametrize("rule", list(RuleSet))
def test_initial_seed_is_alive_and_timestamped(rule):
    engine = Engine(EngineConfig(rule=rule, grid_size=12, seed=5), now_ms=500.0)
    alive = engine.alive == 1

    assert engine.live_count > 0
    assert np.all(engine.grid.ages_3d()[alive] == 500.0)
    assert np.all(engine.opacity == 0.0)


def test_advance_gates_logic_but_always_fades():
    engine = make_engine(rule="LIFE_5766", grid_size=10)

    assert engine.advance(16.0) is False
    assert engine.ticks == 0
    assert engine.opacity.max() == pytest.approx(0.05)

    assert engine.advance(70.0) is True
    assert engine.advance(80.0) is False
    assert engine.ticks == 1


def test_at_most_one_tick_per_frame():
    engine = make_engine(rule="LIFE_5766", grid_size=8)
    engine.advance(60_000.0)
    assert engine.ticks == 1


def test_life_5766_is_deterministic():
    first = make_engine(rule="LIFE_5766", grid_size=10, seed=99)
    second = make_engine(rule="LIFE_5766", grid_size=10, seed=99)
    for now in range(100, 1000, 100):
        first.advance(float(now))
        second.advance(float(now))
    np.testing.assert_array_equal(first.alive, second.alive)


def test_buffer_isolation():
    engine = make_engine(rule="LIFE_5766", grid_size=10)
    snapshot = engine.alive.copy()
    read_buffer = engine.grid.current

    engine.tick(100.0)

    expected = count_neighbors(snapshot)
    np.testing.assert_array_equal(engine.last_stats.total, expected.total)
    # The old readable buffer became scratch; the new one is a different array.
    assert engine.grid.scratch is read_buffer
    if engine.reseeds == 0:
        np.testing.assert_array_equal(
            engine.alive, Life5766Rule().next_state(snapshot, expected)
        )


def test_extinction_triggers_reseed():
    engine = make_engine(rule="LIFE_5766", grid_size=10)
    place(engine, [(2, 2, 2), (7, 7, 7)], now_ms=0.0)

    engine.tick(100.0)

    assert engine.reseeds == 1
    assert engine.live_count > 0


def test_extinction_without_reseed_stays_empty():
    engine = make_engine(rule="LIFE_5766", grid_size=10, auto_reseed_on_extinction=False)
    place(engine, [(4, 4, 4)], now_ms=0.0)

    engine.tick(100.0)

    assert engine.reseeds == 0
    assert engine.live_count == 0


def test_reseed_does_not_reset_opacity():
    engine = make_engine(rule="LIFE_5766", grid_size=10)
    place(engine, [(2, 2, 2)], now_ms=0.0)
    engine.fade.opacity[:] = 0.0
    engine.fade.opacity_3d()[2, 2, 2] = 0.6

    engine.tick(100.0)

    assert engine.reseeds == 1
    assert engine.opacity_at(2, 2, 2) == 0.6


def test_age_gate_keeps_lonely_cell_alive():
    engine = make_engine(grid_size=10, spawner_radius=0.0, cell_memory_ms=700.0)
    place(engine, [(5, 5, 5)], now_ms=1000.0)

    for now in range(1000, 1700, 66):
        engine.tick(float(now))
        assert engine.is_alive(5, 5, 5)
        assert engine.last_stats.total[5, 5, 5] == 0


def test_spawner_captures_dead_cells():
    engine = make_engine(grid_size=20, spawner_radius=0.02)
    place(engine, [], now_ms=0.0)
    target = engine.spawner.capture_mask(engine.spawner.position_at(1.0))
    assert target.any()

    assert engine.advance(1000.0) is True

    assert np.all(engine.alive[target] == 1)


def test_spawner_inert_outside_golxr():
    engine = make_engine(rule="LIFE_25D", grid_size=10, spawner_radius=1.0)
    place(engine, [(1, 1, 1)], now_ms=0.0)
    engine.tick(100.0)

    # Nothing was injected, so the lone cell died and the lattice was reseeded.
    assert engine.reseeds == 1
    np.testing.assert_allclose(engine.spawner_position, engine.spawner.position_at(0.1))


def test_spawner_position_follows_clock():
    engine = make_engine(rule="LIFE_5766", grid_size=6)
    engine.advance(2500.0)
    t = 2.5
    np.testing.assert_allclose(
        engine.spawner_position,
        [math.sin(t) * 0.05, math.cos(0.7 * t) * 0.05, math.sin(0.5 * t) * 0.05],
    )


def test_opacity_reaches_one_for_persistent_cells():
    engine = make_engine(grid_size=8, spawner_radius=0.0, cell_memory_ms=10_000.0)
    frames = math.ceil(1 / engine.config.fade_speed)
    seeded = engine.alive == 1

    for frame in range(1, frames + 1):
        engine.advance(frame * 16.0)

    assert np.all(engine.opacity[seeded] == 1.0)


def test_instances_snapshot():
    engine = make_engine(rule="LIFE_5766", grid_size=10)
    assert engine.instances().count == 0

    engine.advance(16.0)
    snapshot = engine.instances()

    assert snapshot.count == engine.visible_count == engine.live_count
    assert snapshot.positions.shape == (snapshot.count, 3)
    assert np.all(snapshot.opacities > engine.config.visibility_epsilon)
    np.testing.assert_array_equal(snapshot.indices, engine.visible_cells())
    x, y, z = snapshot.indices[0]
    np.testing.assert_allclose(
        snapshot.positions[0], (np.array([x, y, z]) - 5) * engine.config.cell_spacing
    )


def test_injected_rng_is_used():
    rng = np.random.default_rng(77)
    engine = Engine(EngineConfig(grid_size=10), rng=rng)
    assert engine.rng is rng


class FixedDraws:
    """Random source that returns the same value for every draw."""

    def __init__(self, value):
        self.value = value

    def random(self, size):
        return np.full(size, self.value)


@pytest.mark.parametrize("rule", ["LIFE_5766", "LIFE_25D"])
@pytest.mark.parametrize("grid_size", [3, 4])
def test_reseed_on_small_lattice_is_never_empty(rule, grid_size):
    for seed in range(50):
        engine = make_engine(rule=rule, grid_size=grid_size, seed=seed)
        assert engine.live_count > 0

        place(engine, [(1, 1, 1)], now_ms=0.0)
        engine.tick(100.0)

        assert engine.reseeds == 1
        assert engine.live_count > 0


FACE_NEIGHBORS = [(4, 5, 5), (6, 5, 5), (5, 4, 5), (5, 6, 5), (5, 5, 4), (5, 5, 6)]


def test_rule_birth_leaves_age_untouched():
    engine = make_engine(rule="LIFE_5766", grid_size=10, spawner_radius=0.0)
    place(engine, FACE_NEIGHBORS, now_ms=0.0)

    engine.tick(100.0)

    assert engine.last_stats.total[5, 5, 5] == 6
    assert engine.is_alive(5, 5, 5)
    assert engine.grid.ages_3d()[5, 5, 5] == NEVER_ACTIVATED


def test_golxr_birth_leaves_age_untouched():
    engine = make_engine(grid_size=10, spawner_radius=0.0)
    place(engine, FACE_NEIGHBORS[:4], now_ms=0.0)
    # Clears the 4-neighbor birth line and stays under the old-age line.
    engine.rng = FixedDraws(0.8)

    engine.tick(1000.0)

    assert engine.last_stats.total[5, 5, 5] == 4
    assert engine.is_alive(5, 5, 5)
    assert engine.grid.ages_3d()[5, 5, 5] == NEVER_ACTIVATED


def test_seed_uses_construction_clock():
    start = 1_000_000.0
    engine = Engine(
        EngineConfig(grid_size=10, spawner_radius=0.0, seed=8), now_ms=start
    )
    seeded = engine.alive == 1

    assert engine.advance(start + 66.0) is True

    assert np.all(engine.grid.ages_3d()[seeded] == start)
    assert np.all(engine.alive[seeded] == 1)
