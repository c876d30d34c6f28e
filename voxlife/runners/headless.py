"""Headless frame-loop runner."""

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from tqdm import tqdm

from ..config import SimulationConfig
from ..core.engine import Engine
from ..logging_config import setup_logging


@dataclass
class FrameStats:
    """Population sample taken after a frame."""

    frame: int
    time_ms: float
    live: int
    visible: int
    ticks: int


@dataclass
class RunSummary:
    """Outcome of a headless run."""

    frames: int = 0
    ticks: int = 0
    reseeds: int = 0
    peak_live: int = 0
    final_live: int = 0
    final_visible: int = 0
    samples: List[FrameStats] = field(default_factory=list)


def simulated_clock(frame_ms: float, start_ms: float = 0.0) -> Callable[[], float]:
    """Clock that moves forward ``frame_ms`` on every read."""
    now = start_ms

    def clock() -> float:
        nonlocal now
        now += frame_ms
        return now

    return clock


def wall_clock() -> float:
    """Monotonic wall clock in milliseconds."""
    return time.monotonic() * 1000.0


def run_headless(
    config: SimulationConfig,
    engine: Optional[Engine] = None,
    progress: bool = True,
) -> RunSummary:
    """Drive an engine for a fixed number of frames.

    Args:
        config: Simulation configuration.
        engine: Engine to drive (built from ``config.engine`` if omitted).
        progress: Show a progress bar.

    Returns:
        RunSummary with population statistics.
    """
    setup_logging(config.log_level)
    run = config.run

    if run.realtime:
        clock = wall_clock
        start_ms = clock()
    else:
        start_ms = 0.0
        clock = simulated_clock(run.frame_ms, start_ms)

    if engine is None:
        engine = Engine(config.engine, now_ms=start_ms)

    summary = RunSummary(peak_live=engine.live_count)

    for frame in tqdm(range(run.frames), desc="Simulating", disable=not progress):
        now_ms = clock()
        engine.advance(now_ms)

        live = engine.live_count
        summary.peak_live = max(summary.peak_live, live)
        if frame % run.stats_every == 0:
            summary.samples.append(
                FrameStats(
                    frame=frame,
                    time_ms=now_ms - start_ms,
                    live=live,
                    visible=engine.visible_count,
                    ticks=engine.ticks,
                )
            )

        if run.realtime:
            # Sleep off the rest of the frame budget.
            remaining = run.frame_ms - (clock() - now_ms)
            if remaining > 0:
                time.sleep(remaining / 1000.0)

    summary.frames = run.frames
    summary.ticks = engine.ticks
    summary.reseeds = engine.reseeds
    summary.final_live = engine.live_count
    summary.final_visible = engine.visible_count
    return summary


def print_summary(config: SimulationConfig, summary: RunSummary) -> None:
    """Print a run summary to stdout."""
    print(
        f"Rule {config.engine.rule.value} on a {config.engine.grid_size}^3 lattice: "
        f"{summary.frames} frames, {summary.ticks} ticks, {summary.reseeds} reseeds"
    )
    for sample in summary.samples:
        print(
            f"  frame {sample.frame:>6}  t={sample.time_ms / 1000.0:8.2f}s  "
            f"ticks={sample.ticks:>5}  live={sample.live:>5}  visible={sample.visible:>5}"
        )
    print(
        f"Peak live cells: {summary.peak_live}, final live: {summary.final_live}, "
        f"final visible: {summary.final_visible}"
    )
