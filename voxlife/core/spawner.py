"""Moving point source that forces cells alive."""

import math

import numpy as np


def cell_positions(size: int, spacing: float) -> np.ndarray:
    """World-space centers of every lattice cell.

    Cells are centered on the origin: coordinate ``i`` maps to
    ``(i - size / 2) * spacing`` on each axis.

    Args:
        size: Lattice edge length.
        spacing: Distance between neighboring cell centers.

    Returns:
        (size, size, size, 3) float array indexed (x, y, z).
    """
    axis = (np.arange(size, dtype=np.float64) - size / 2) * spacing
    xs, ys, zs = np.meshgrid(axis, axis, axis, indexing="ij")
    return np.stack([xs, ys, zs], axis=-1)


class Spawner:
    """Point on a closed-form Lissajous path with a capture radius.

    The position is a pure function of time, so it is recomputed from the
    clock rather than integrated.
    """

    def __init__(self, size: int, spacing: float, radius: float, amplitude: float = 0.05):
        """Initialize the spawner.

        Args:
            size: Lattice edge length.
            spacing: Cell spacing in world units.
            radius: Capture radius in world units.
            amplitude: Path amplitude in world units.
        """
        self.radius = radius
        self.amplitude = amplitude
        self._cells = cell_positions(size, spacing)
        self.position = self.position_at(0.0)

    def position_at(self, t: float) -> np.ndarray:
        """Spawner position at ``t`` seconds."""
        a = self.amplitude
        return np.array(
            [math.sin(t) * a, math.cos(t * 0.7) * a, math.sin(t * 0.5) * a],
            dtype=np.float64,
        )

    def update(self, now_ms: float) -> np.ndarray:
        """Move to the position for ``now_ms`` and return it."""
        self.position = self.position_at(now_ms * 0.001)
        return self.position

    def capture_mask(self, position: np.ndarray | None = None) -> np.ndarray:
        """Cells whose centers lie strictly within the radius.

        Args:
            position: Point to test against (defaults to current position).

        Returns:
            (N, N, N) boolean mask.
        """
        if position is None:
            position = self.position
        distances = np.linalg.norm(self._cells - position, axis=-1)
        return distances < self.radius

    def inject(self, grid: np.ndarray, ages: np.ndarray, now_ms: float) -> int:
        """Force dead cells near the spawner alive.

        Args:
            grid: (N, N, N) state array, modified in place.
            ages: (N, N, N) activation times, modified in place.
            now_ms: Current time, written to captured cells' ages.

        Returns:
            Number of cells brought to life.
        """
        captured = self.capture_mask() & (grid == 0)
        grid[captured] = 1
        ages[captured] = now_ms
        return int(np.count_nonzero(captured))
