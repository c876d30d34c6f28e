"""Command-line interface for voxlife."""

import argparse

from . import __version__
from .config import RULE_NAMES, ConfigError, SimulationConfig
from .logging_config import LOG_LEVELS

EPILOG = """\
Examples:
  voxlife --frames 1200
  voxlife --rule LIFE_5766 --grid-size 30 --seed 7
  voxlife --rule GOLXR --bias 0.8 --memory 1000 --realtime

Rules:
  GOLXR      Probabilistic life with cell memory, bias and a moving spawner
  LIFE_5766  Classic 3D life (B6/S567), deterministic
  LIFE_25D   Layered life: 2D B3/S23 per layer, vetoed by busy adjacent layers
"""


def parse_args(args=None) -> SimulationConfig:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv).

    Returns:
        SimulationConfig with parsed options.
    """
    parser = argparse.ArgumentParser(
        prog="voxlife",
        description="Run a 3D cellular automaton headlessly and report population stats.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--rule",
        type=str.upper,
        default="GOLXR",
        choices=RULE_NAMES,
        metavar="RULE",
        help="Transition rule: GOLXR, LIFE_5766, LIFE_25D (default: GOLXR)",
    )

    parser.add_argument(
        "--grid-size",
        type=int,
        default=20,
        help="Lattice edge length in cells (default: 20)",
    )

    parser.add_argument(
        "--interval",
        type=float,
        default=66.0,
        help="Milliseconds between logic ticks (default: 66)",
    )

    parser.add_argument(
        "--memory",
        type=float,
        default=700.0,
        help="GOLXR: milliseconds a force-activated cell is kept alive (default: 700)",
    )

    parser.add_argument(
        "--bias",
        type=float,
        default=0.59,
        help="GOLXR: survival/birth bias, 0.5 = neutral, 1.0 = most lively (default: 0.59)",
    )

    parser.add_argument(
        "--fade-speed",
        type=float,
        default=0.05,
        help="Opacity change per frame (default: 0.05)",
    )

    parser.add_argument(
        "--spawner-radius",
        type=float,
        default=0.01,
        help="GOLXR: spawner capture radius in world units (default: 0.01)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible runs",
    )

    parser.add_argument(
        "--no-reseed",
        action="store_true",
        help="Do not reseed the lattice when every cell dies",
    )

    # Run arguments
    parser.add_argument(
        "--frames",
        type=int,
        default=600,
        help="Number of frames to simulate (default: 600)",
    )

    parser.add_argument(
        "--frame-ms",
        type=float,
        default=16.0,
        help="Simulated frame duration in milliseconds (default: 16)",
    )

    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Pace frames with the wall clock instead of a simulated clock",
    )

    parser.add_argument(
        "--stats-every",
        type=int,
        default=60,
        help="Record population stats every N frames (default: 60)",
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING)",
    )

    parsed = parser.parse_args(args)

    try:
        return SimulationConfig.from_args(
            rule=parsed.rule,
            grid_size=parsed.grid_size,
            update_interval_ms=parsed.interval,
            cell_memory_ms=parsed.memory,
            bias=parsed.bias,
            fade_speed=parsed.fade_speed,
            spawner_radius=parsed.spawner_radius,
            seed=parsed.seed,
            auto_reseed=not parsed.no_reseed,
            frames=parsed.frames,
            frame_ms=parsed.frame_ms,
            realtime=parsed.realtime,
            stats_every=parsed.stats_every,
            log_level=parsed.log_level,
        )
    except ConfigError as e:
        parser.error(str(e))
