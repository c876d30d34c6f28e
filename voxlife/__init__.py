"""3D cellular automaton simulation engine."""

__version__ = "0.1.0"

from .config import ConfigError, EngineConfig, RuleSet
from .core.engine import Engine, RenderSnapshot

__all__ = [
    "ConfigError",
    "Engine",
    "EngineConfig",
    "RenderSnapshot",
    "RuleSet",
]
