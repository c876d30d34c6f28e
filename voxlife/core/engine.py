"""Simulation engine tying the lattice, rule, spawner and fade together."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import EngineConfig
from .bias import derive_offsets
from .fade import FadeTracker
from .grid import GridStore
from .neighbors import NeighborStats, count_neighbors
from .rules import age_gate, get_rule
from .scheduler import TickScheduler
from .seeding import seed_mask
from .spawner import Spawner, cell_positions

logger = logging.getLogger(__name__)


@dataclass
class RenderSnapshot:
    """Visible cells for a renderer.

    Attributes:
        positions: (K, 3) world-space centers of visible cells.
        opacities: (K,) opacity of each visible cell.
        indices: (K, 3) lattice coordinates of each visible cell.
    """

    positions: np.ndarray
    opacities: np.ndarray
    indices: np.ndarray

    @property
    def count(self) -> int:
        return len(self.opacities)


class Engine:
    """3D cellular automaton driven one frame at a time.

    Call ``advance`` once per frame with the current time in milliseconds.
    A logic tick runs when the update interval has elapsed; opacities fade
    on every call. Every timestamp passed in, including ``now_ms`` at
    construction, must come from the same clock.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[np.random.Generator] = None,
        now_ms: float = 0.0,
    ):
        """Initialize and seed the engine.

        Args:
            config: Simulation constants (defaults to EngineConfig()).
            rng: Random source; defaults to one seeded from ``config.seed``.
            now_ms: Construction time on the clock later passed to
                ``advance``. Stamped on the seeded cells and used as the
                scheduler's reference point; a mismatched clock would put
                the seed outside its memory window.
        """
        self.config = config or EngineConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.rule = get_rule(self.config.rule)

        size = self.config.grid_size
        self.size = size
        self.grid = GridStore(size)
        self.fade = FadeTracker(size, self.config.fade_speed, self.config.visibility_epsilon)
        self.scheduler = TickScheduler(self.config.update_interval_ms, start_ms=now_ms)
        self.spawner = Spawner(
            size,
            self.config.cell_spacing,
            self.config.spawner_radius,
            self.config.spawner_amplitude,
        )
        self._positions = cell_positions(size, self.config.cell_spacing)

        self.reseeds = 0
        self.last_stats: Optional[NeighborStats] = None
        self.spawner.update(now_ms)
        self.seed(now_ms)
        logger.debug(
            "Engine initialized: rule=%s size=%d live=%d",
            self.config.rule.value,
            size,
            self.live_count,
        )

    # -- lifecycle -----------------------------------------------------

    def seed(self, now_ms: float) -> int:
        """Activate the rule's seeding pattern.

        Randomly filled patterns can come out empty on small lattices, so
        the draw is repeated until at least one cell is seeded.

        Returns:
            Number of cells activated.
        """
        mask = seed_mask(self.config.rule, self.size, self.rng)
        while not mask.any():
            mask = seed_mask(self.config.rule, self.size, self.rng)
        return self.grid.activate_mask(mask, now_ms)

    def advance(self, now_ms: float) -> bool:
        """Per-frame entry point.

        Args:
            now_ms: Current time in milliseconds.

        Returns:
            True if a logic tick ran during this call.
        """
        self.spawner.update(now_ms)
        ticked = self.scheduler.poll(now_ms)
        if ticked:
            self.tick(now_ms)
        self.fade.step(self.grid.current)
        return ticked

    def tick(self, now_ms: float) -> None:
        """Run one logic tick unconditionally.

        Spawner injection, rule evaluation, buffer swap and the extinction
        check, in that order. The rule returns a new array that is copied
        into scratch; only the promotion of scratch to current is a swap.
        """
        current = self.grid.current_3d()
        ages = self.grid.ages_3d()

        self.spawner.update(now_ms)
        if self.rule.uses_spawner:
            captured = self.spawner.inject(current, ages, now_ms)
            if captured:
                logger.debug("Spawner activated %d cells", captured)

        stats = count_neighbors(current, split=self.rule.split_neighbors)
        if self.rule.uses_memory:
            gated = age_gate(ages, now_ms, self.config.cell_memory_ms)
        else:
            gated = np.zeros(current.shape, dtype=bool)
        bias = derive_offsets(self.config.bias)

        self.grid.scratch_3d()[...] = self.rule.next_state(
            current, stats, gated, bias, self.rng
        )
        self.grid.swap()
        self.last_stats = stats

        if self.config.auto_reseed_on_extinction and self.live_count == 0:
            seeded = self.seed(now_ms)
            self.reseeds += 1
            logger.debug("All cells extinct, reseeded %d cells", seeded)

    # -- read surface --------------------------------------------------

    @property
    def ticks(self) -> int:
        return self.scheduler.ticks

    @property
    def live_count(self) -> int:
        return self.grid.live_count()

    @property
    def alive(self) -> np.ndarray:
        """(N, N, N) view of the current cell states."""
        return self.grid.current_3d()

    @property
    def opacity(self) -> np.ndarray:
        """(N, N, N) view of the cell opacities."""
        return self.fade.opacity_3d()

    @property
    def visible_count(self) -> int:
        return int(np.count_nonzero(self.fade.visible()))

    @property
    def spawner_position(self) -> np.ndarray:
        """Current spawner position in world units.

        Tracked under every rule; only GOLXR injects cells with it.
        """
        return self.spawner.position.copy()

    def is_alive(self, x: int, y: int, z: int) -> bool:
        return self.grid.get(x, y, z) == 1

    def opacity_at(self, x: int, y: int, z: int) -> float:
        return float(self.opacity[x, y, z])

    def visible_cells(self) -> np.ndarray:
        """(K, 3) lattice coordinates of cells above the visibility epsilon."""
        return np.argwhere(self.fade.visible().reshape(self.grid.shape))

    def instances(self) -> RenderSnapshot:
        """Positions and opacities of every visible cell."""
        visible = self.fade.visible().reshape(self.grid.shape)
        return RenderSnapshot(
            positions=self._positions[visible],
            opacities=self.opacity[visible].copy(),
            indices=np.argwhere(visible),
        )
