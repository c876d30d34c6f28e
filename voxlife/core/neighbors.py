"""Moore-neighborhood statistics over a bounded 3D lattice."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

MOORE_OFFSETS = [
    (dx, dy, dz)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    for dz in (-1, 0, 1)
    if not (dx == 0 and dy == 0 and dz == 0)
]


@dataclass
class NeighborStats:
    """Neighbor counts for every cell of a lattice.

    Attributes:
        total: Live cells among the 26 Moore neighbors.
        plane: Live neighbors sharing the cell's z layer (``dz == 0``).
            Only filled in when a split count was requested.
        cross: Live neighbors on the layers above and below.
    """

    total: np.ndarray
    plane: Optional[np.ndarray] = None
    cross: Optional[np.ndarray] = None


def _shifted_sum(padded: np.ndarray, offsets, size: int) -> np.ndarray:
    counts = np.zeros((size, size, size), dtype=np.int16)
    for dx, dy, dz in offsets:
        counts += padded[
            1 + dx : 1 + dx + size,
            1 + dy : 1 + dy + size,
            1 + dz : 1 + dz + size,
        ]
    return counts


def count_neighbors(grid: np.ndarray, split: bool = False) -> NeighborStats:
    """Count live Moore neighbors for every cell.

    The lattice is padded with a dead border, so cells outside [0, N)
    never contribute.

    Args:
        grid: (N, N, N) array of 0/1 states indexed (x, y, z).
        split: Also compute plane/cross counts.

    Returns:
        NeighborStats with arrays shaped like ``grid``.
    """
    size = grid.shape[0]
    padded = np.pad(grid.astype(np.int16), 1, mode="constant", constant_values=0)

    if not split:
        return NeighborStats(total=_shifted_sum(padded, MOORE_OFFSETS, size))

    plane = _shifted_sum(padded, [o for o in MOORE_OFFSETS if o[2] == 0], size)
    cross = _shifted_sum(padded, [o for o in MOORE_OFFSETS if o[2] != 0], size)
    return NeighborStats(total=plane + cross, plane=plane, cross=cross)
