"""Transition rules for the 3D automaton.

Each rule is a small class with the same ``next_state`` signature, so the
engine dispatches once per tick and the rule bodies stay independent:

    GOLXR       Probabilistic life with cell memory and bias
    LIFE_5766   Classic 3D life, survive on 5-7 neighbors, birth on 6
    LIFE_25D    Layered life, counts split into same-layer and cross-layer
"""

from typing import Protocol

import numpy as np

from ..config import RuleSet
from .bias import NO_BIAS, BiasOffsets
from .neighbors import NeighborStats


def age_gate(ages: np.ndarray, now_ms: float, memory_ms: float) -> np.ndarray:
    """Mask of cells still inside their memory window.

    Args:
        ages: Last activation time per cell (ms).
        now_ms: Current time (ms).
        memory_ms: Length of the memory window (ms).

    Returns:
        Boolean array, True where ``now - age < memory``.
    """
    return (now_ms - ages) < memory_ms


class Rule(Protocol):
    """Protocol for transition rules."""

    name: RuleSet
    split_neighbors: bool
    uses_memory: bool
    uses_spawner: bool

    def next_state(
        self,
        current: np.ndarray,
        stats: NeighborStats,
        gated: np.ndarray,
        bias: BiasOffsets,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Compute the next state of every cell.

        Args:
            current: Current 0/1 states.
            stats: Neighbor counts shaped like ``current``.
            gated: Boolean age-gate mask shaped like ``current``.
            bias: Offsets derived for this tick.
            rng: Random source for probabilistic rules.

        Returns:
            Next 0/1 states, same shape as ``current``.
        """
        ...


class GolxrRule:
    """Probabilistic life with memory-gated survival.

    Gated cells are alive no matter what. Everything else draws against
    neighbor-count thresholds, then every cell left alive faces a separate
    old-age draw, including cells born this tick.
    """

    name = RuleSet.GOLXR
    split_neighbors = False
    uses_memory = True
    uses_spawner = True

    def next_state(self, current, stats, gated, bias=NO_BIAS, rng=None):
        if rng is None:
            rng = np.random.default_rng()
        neighbors = stats.total
        alive = current == 1

        draws = rng.random(current.shape)
        survival_threshold = np.where(
            neighbors == 4,
            0.1,
            np.where((neighbors == 3) | (neighbors == 5), 0.4, 0.99),
        )
        survives = draws > (survival_threshold - bias.survival)

        born = ((neighbors == 4) & (draws > (0.7 - bias.birth))) | (
            (neighbors == 3) & (draws > (0.95 - bias.birth / 2))
        )

        next_alive = np.where(alive, survives, born)

        # Old-age attrition
        death_draws = rng.random(current.shape)
        next_alive &= ~(death_draws > (0.95 + bias.survival))

        next_alive |= gated
        return next_alive.astype(np.uint8)


class Life5766Rule:
    """Deterministic 3D life: survive on 5-7 neighbors, birth on exactly 6."""

    name = RuleSet.LIFE_5766
    split_neighbors = False
    uses_memory = False
    uses_spawner = False

    def next_state(self, current, stats, gated=None, bias=NO_BIAS, rng=None):
        neighbors = stats.total
        survives = (current == 1) & (neighbors >= 5) & (neighbors <= 7)
        born = (current == 0) & (neighbors == 6)
        return (survives | born).astype(np.uint8)


class Life25DRule:
    """Layered life: 2D life in each z layer, vetoed by busy adjacent layers."""

    name = RuleSet.LIFE_25D
    split_neighbors = True
    uses_memory = False
    uses_spawner = False

    def next_state(self, current, stats, gated=None, bias=NO_BIAS, rng=None):
        plane, cross = stats.plane, stats.cross
        if plane is None or cross is None:
            raise ValueError("LIFE_25D needs split neighbor counts")
        quiet_cross = cross <= 1
        survives = (current == 1) & ((plane == 2) | (plane == 3)) & quiet_cross
        born = (current == 0) & (plane == 3) & quiet_cross
        return (survives | born).astype(np.uint8)


RULES = {
    RuleSet.GOLXR: GolxrRule,
    RuleSet.LIFE_5766: Life5766Rule,
    RuleSet.LIFE_25D: Life25DRule,
}


def get_rule(name: "RuleSet | str") -> Rule:
    """Instantiate the rule for a rule identifier."""
    return RULES[RuleSet.parse(name)]()
