"""Configuration dataclasses for voxlife."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ConfigError(ValueError):
    """Raised when a configuration value would produce a degenerate simulation."""


class RuleSet(str, Enum):
    """Transition rule variants."""

    GOLXR = "GOLXR"
    LIFE_5766 = "LIFE_5766"
    LIFE_25D = "LIFE_25D"

    @classmethod
    def parse(cls, name: "str | RuleSet") -> "RuleSet":
        """Look up a rule by name, ignoring case.

        Args:
            name: Rule name or RuleSet member.

        Returns:
            Matching RuleSet member.

        Raises:
            ConfigError: If the name is not a known rule.
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).upper())
        except ValueError:
            known = ", ".join(rule.value for rule in cls)
            raise ConfigError(f"Unknown rule: {name!r} (expected one of {known})") from None


RULE_NAMES = [rule.value for rule in RuleSet]


@dataclass
class EngineConfig:
    """Simulation constants, fixed for the lifetime of an engine."""

    grid_size: int = 20
    update_interval_ms: float = 66.0
    cell_memory_ms: float = 700.0
    bias: float = 0.59
    fade_speed: float = 0.05
    spawner_radius: float = 0.01
    rule: RuleSet = RuleSet.GOLXR
    spawner_amplitude: float = 0.05
    cell_spacing: float = 0.011
    visibility_epsilon: float = 0.01
    auto_reseed_on_extinction: bool = True
    seed: Optional[int] = None

    def __post_init__(self):
        self.rule = RuleSet.parse(self.rule)
        if self.grid_size < 1:
            raise ConfigError(f"grid_size must be at least 1, got {self.grid_size}")
        if self.rule != RuleSet.GOLXR and self.grid_size < 3:
            # Filled seeding leaves a one-cell border, nothing would be seeded.
            raise ConfigError(
                f"{self.rule.value} needs grid_size of at least 3, got {self.grid_size}"
            )
        if self.update_interval_ms <= 0:
            raise ConfigError(
                f"update_interval_ms must be positive, got {self.update_interval_ms}"
            )
        if self.cell_memory_ms < 0:
            raise ConfigError(f"cell_memory_ms must be >= 0, got {self.cell_memory_ms}")
        if not 0.0 <= self.bias <= 1.0:
            raise ConfigError(f"bias must be between 0.0 and 1.0, got {self.bias}")
        if not 0.0 < self.fade_speed <= 1.0:
            raise ConfigError(f"fade_speed must be in (0.0, 1.0], got {self.fade_speed}")
        if self.spawner_radius < 0:
            raise ConfigError(f"spawner_radius must be >= 0, got {self.spawner_radius}")
        if self.cell_spacing <= 0:
            raise ConfigError(f"cell_spacing must be positive, got {self.cell_spacing}")
        if not 0.0 <= self.visibility_epsilon < 1.0:
            raise ConfigError(
                f"visibility_epsilon must be in [0.0, 1.0), got {self.visibility_epsilon}"
            )


@dataclass
class RunConfig:
    """Configuration for a headless run."""

    frames: int = 600
    frame_ms: float = 16.0
    realtime: bool = False
    stats_every: int = 60

    def __post_init__(self):
        if self.frames < 0:
            raise ConfigError(f"frames must be >= 0, got {self.frames}")
        if self.frame_ms <= 0:
            raise ConfigError(f"frame_ms must be positive, got {self.frame_ms}")
        if self.stats_every < 1:
            raise ConfigError(f"stats_every must be at least 1, got {self.stats_every}")


@dataclass
class SimulationConfig:
    """Combined configuration for a simulation run."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    run: RunConfig = field(default_factory=RunConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_args(
        cls,
        rule: str = "GOLXR",
        grid_size: int = 20,
        update_interval_ms: float = 66.0,
        cell_memory_ms: float = 700.0,
        bias: float = 0.59,
        fade_speed: float = 0.05,
        spawner_radius: float = 0.01,
        seed: Optional[int] = None,
        auto_reseed: bool = True,
        # Run config
        frames: int = 600,
        frame_ms: float = 16.0,
        realtime: bool = False,
        stats_every: int = 60,
        log_level: str = "WARNING",
    ) -> "SimulationConfig":
        """Create SimulationConfig from CLI arguments."""
        return cls(
            engine=EngineConfig(
                grid_size=grid_size,
                update_interval_ms=update_interval_ms,
                cell_memory_ms=cell_memory_ms,
                bias=bias,
                fade_speed=fade_speed,
                spawner_radius=spawner_radius,
                rule=RuleSet.parse(rule),
                auto_reseed_on_extinction=auto_reseed,
                seed=seed,
            ),
            run=RunConfig(
                frames=frames,
                frame_ms=frame_ms,
                realtime=realtime,
                stats_every=stats_every,
            ),
            log_level=log_level.upper(),
        )
