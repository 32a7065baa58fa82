"""
Search Configuration - Build-time constants for one decision engine.

Every constant the engine recognizes lives on a single immutable value
that is threaded into the repository builder, the executor and the
search engine. There is no module-level mutable state.

Environment overrides (all optional):
    CAULDRON_TIMEOUT_MS   Per-turn wall-clock budget in milliseconds
    CAULDRON_MAX_DEPTH    Maximum search depth
    CAULDRON_STRATEGY     breadth_first | best_first
    CAULDRON_WEIGHTS      Scoring preset name (balanced, greedy, patient)
    CAULDRON_LOG_LEVEL    Logging level for the CLI (default WARNING)
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
import os

from .errors import ConfigError


class SearchStrategy(str, Enum):
    """Frontier disciplines supported by the search engine."""
    BREADTH_FIRST = "breadth_first"
    BEST_FIRST = "best_first"


@dataclass(frozen=True)
class SearchConfig:
    """
    Immutable engine configuration.

    Defaults match the puzzle's rules: a 50 ms turn budget, an inventory
    holding at most 10 ingredients, and a shallow lookahead of 5 actions.
    Repeatable spells are explored cast once or twice per turn.
    """
    timeout_ms: int = 50
    max_depth: int = 5
    max_ingredients: int = 10

    # Largest `times` explored for a repeatable spell
    max_cast_repeat: int = 2

    # Reserved action ids
    rest_id: int = -50
    no_action_id: int = -1

    strategy: SearchStrategy = SearchStrategy.BREADTH_FIRST
    weights_preset: str = "balanced"

    # Upper bound on the number of pending states in the frontier
    max_frontier: int = 200_000

    def __post_init__(self):
        if self.timeout_ms < 0:
            raise ConfigError(f"timeout_ms must be >= 0, got {self.timeout_ms}")
        if self.max_depth < 1:
            raise ConfigError(f"max_depth must be >= 1, got {self.max_depth}")
        if self.max_ingredients < 0:
            raise ConfigError(f"max_ingredients must be >= 0, got {self.max_ingredients}")
        if self.max_frontier < 1:
            raise ConfigError(f"max_frontier must be >= 1, got {self.max_frontier}")
        if self.max_cast_repeat < 1:
            raise ConfigError(f"max_cast_repeat must be >= 1, got {self.max_cast_repeat}")
        if self.rest_id == self.no_action_id:
            raise ConfigError("rest_id and no_action_id must differ")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def with_overrides(self, **kwargs) -> SearchConfig:
        """Return a copy with some fields replaced."""
        return replace(self, **kwargs)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> SearchConfig:
        """Build a config from CAULDRON_* environment variables."""
        env = os.environ if environ is None else environ
        overrides: dict = {}

        timeout = env.get("CAULDRON_TIMEOUT_MS")
        if timeout:
            overrides["timeout_ms"] = _parse_int("CAULDRON_TIMEOUT_MS", timeout)

        depth = env.get("CAULDRON_MAX_DEPTH")
        if depth:
            overrides["max_depth"] = _parse_int("CAULDRON_MAX_DEPTH", depth)

        strategy = env.get("CAULDRON_STRATEGY")
        if strategy:
            try:
                overrides["strategy"] = SearchStrategy(strategy.strip().lower())
            except ValueError:
                raise ConfigError(f"Unknown search strategy: {strategy}")

        weights = env.get("CAULDRON_WEIGHTS")
        if weights:
            overrides["weights_preset"] = weights.strip().lower()

        return cls(**overrides)


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


DEFAULT_CONFIG = SearchConfig()
