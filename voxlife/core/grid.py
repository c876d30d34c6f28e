"""Double-buffered voxel lattice and per-cell activation ages."""

import numpy as np

# Age of a cell that was never force-activated; outside any memory window.
NEVER_ACTIVATED = -np.inf


def linear_index(x: int, y: int, z: int, size: int) -> int:
    """Flatten a lattice coordinate to its dense-array index."""
    return x * size * size + y * size + z


class GridStore:
    """Cubic lattice of 0/1 cell states with a scratch buffer.

    States live in flat arrays indexed by ``x*N*N + y*N + z``. Readers use
    ``current``; a logic tick writes ``scratch`` and then calls ``swap`` so
    nobody ever sees a half-updated lattice.
    """

    def __init__(self, size: int):
        """Allocate an all-dead lattice.

        Args:
            size: Edge length N of the lattice.
        """
        self.size = size
        self._current = np.zeros(size**3, dtype=np.uint8)
        self._scratch = np.zeros(size**3, dtype=np.uint8)
        # Last force-activation time per cell, ms.
        self.ages = np.full(size**3, NEVER_ACTIVATED, dtype=np.float64)

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.size, self.size, self.size)

    @property
    def current(self) -> np.ndarray:
        """Flat view of the readable buffer."""
        return self._current

    @property
    def scratch(self) -> np.ndarray:
        """Flat view of the buffer the next tick writes into."""
        return self._scratch

    def current_3d(self) -> np.ndarray:
        """3D view (x, y, z) of the readable buffer."""
        return self._current.reshape(self.shape)

    def scratch_3d(self) -> np.ndarray:
        """3D view (x, y, z) of the scratch buffer."""
        return self._scratch.reshape(self.shape)

    def ages_3d(self) -> np.ndarray:
        return self.ages.reshape(self.shape)

    def swap(self) -> None:
        """Promote scratch to current without copying."""
        self._current, self._scratch = self._scratch, self._current

    def get(self, x: int, y: int, z: int) -> int:
        return int(self._current[linear_index(x, y, z, self.size)])

    def activate_mask(self, mask: np.ndarray, now_ms: float) -> int:
        """Force every cell in a boolean mask alive.

        Args:
            mask: Boolean array, flat or (N, N, N).
            now_ms: Activation timestamp.

        Returns:
            Number of cells activated.
        """
        flat = np.asarray(mask, dtype=bool).reshape(-1)
        self._current[flat] = 1
        self.ages[flat] = now_ms
        return int(np.count_nonzero(flat))

    def live_count(self) -> int:
        return int(np.count_nonzero(self._current))
