"""Bias scalar to survival/birth threshold offsets."""

from dataclasses import dataclass

MAX_BIAS_OFFSET = 0.9


@dataclass(frozen=True)
class BiasOffsets:
    """Per-tick threshold offsets.

    Attributes:
        survival: Subtracted from survival thresholds, added to the
            old-age death threshold.
        birth: Subtracted from birth thresholds.
    """

    survival: float = 0.0
    birth: float = 0.0


NO_BIAS = BiasOffsets()


def derive_offsets(bias: float) -> BiasOffsets:
    """Map a bias in [0, 1] to clamped offsets.

    0.5 is neutral; anything at or below it yields zero offsets, and the
    offsets grow linearly to 0.4 at a bias of 1.0.

    Args:
        bias: Bias scalar.

    Returns:
        BiasOffsets with both values clamped to [0, 0.9].
    """
    multiplier = (bias - 0.5) * 2
    survival = max(0.0, min(MAX_BIAS_OFFSET, multiplier * 0.4))
    birth = max(0.0, min(MAX_BIAS_OFFSET, multiplier * 0.4))
    return BiasOffsets(survival=survival, birth=birth)
