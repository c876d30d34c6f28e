"""Wall-clock gate between frames and logic ticks."""


class TickScheduler:
    """Decide whether a frame also runs a logic tick.

    At most one tick fires per call; late frames never replay missed ticks.
    """

    def __init__(self, interval_ms: float = 66.0, start_ms: float = 0.0):
        self.interval_ms = interval_ms
        self.last_tick_ms = start_ms
        self.ticks = 0

    def due(self, now_ms: float) -> bool:
        return now_ms - self.last_tick_ms >= self.interval_ms

    def poll(self, now_ms: float) -> bool:
        """Check the gate and, if open, record a tick at ``now_ms``.

        Returns:
            True if the caller should run a logic tick.
        """
        if not self.due(now_ms):
            return False
        self.last_tick_ms = now_ms
        self.ticks += 1
        return True
