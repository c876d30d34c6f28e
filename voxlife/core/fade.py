"""Per-cell visibility that eases toward the logic state every frame."""

import numpy as np

SNAP = 1e-9


class FadeTracker:
    """Opacity per cell in [0, 1].

    Alive cells gain ``fade_speed`` per frame up to 1, dead cells lose it
    down to 0. Runs every frame, so the view stays smooth between ticks.
    """

    def __init__(self, size: int, fade_speed: float = 0.05, epsilon: float = 0.01):
        self.size = size
        self.fade_speed = fade_speed
        self.epsilon = epsilon
        self.opacity = np.zeros(size**3, dtype=np.float64)

    def opacity_3d(self) -> np.ndarray:
        return self.opacity.reshape((self.size, self.size, self.size))

    def step(self, alive: np.ndarray) -> bool:
        """Advance every cell one frame.

        Args:
            alive: Flat or (N, N, N) array of 0/1 states.

        Returns:
            True if any opacity changed.
        """
        alive = np.asarray(alive).reshape(-1) == 1
        rising = alive & (self.opacity < 1.0)
        falling = ~alive & (self.opacity > 0.0)
        raised = self.opacity[rising] + self.fade_speed
        lowered = self.opacity[falling] - self.fade_speed
        # Snap accumulated float error so the ends are reached exactly.
        self.opacity[rising] = np.where(raised >= 1.0 - SNAP, 1.0, raised)
        self.opacity[falling] = np.where(lowered <= SNAP, 0.0, lowered)
        return bool(rising.any() or falling.any())

    def visible(self) -> np.ndarray:
        """Flat boolean mask of cells a renderer should draw."""
        return self.opacity > self.epsilon
