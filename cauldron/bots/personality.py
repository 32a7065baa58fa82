"""
Scoring Personalities - Named weight presets for the evaluator.

The exact weighting constants are tunable, so presets give the common
play styles a name that can be chosen from configuration:
- balanced: the default weights
- greedy: chases orders that are brewable right now
- patient: pulls harder toward enabling expensive orders
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import random

from ..errors import ConfigError
from .evaluator import ScoringWeights


@dataclass(frozen=True)
class Personality:
    """A named set of scoring weights."""
    name: str
    description: str = ""
    weights: ScoringWeights = field(default_factory=ScoringWeights)


# ============================================================================
# Predefined Personalities
# ============================================================================

BALANCED = Personality(
    name="balanced",
    description="Default weights, rewards progress toward every open order",
)


GREEDY = Personality(
    name="greedy",
    description="Strongly prefers positions where an order can be brewed now",
    weights=ScoringWeights(
        affordable_order_weight=1.0,
        distance_weight=0.05,
    ),
)


PATIENT = Personality(
    name="patient",
    description="Penalizes shortfalls harder, favoring expensive orders",
    weights=ScoringWeights(
        affordable_order_weight=0.2,
        distance_weight=0.25,
    ),
)


PERSONALITIES: dict[str, Personality] = {
    "balanced": BALANCED,
    "greedy": GREEDY,
    "patient": PATIENT,
}


def get_personality(name: str) -> Personality:
    """Look up a preset by name (case-insensitive)."""
    try:
        return PERSONALITIES[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(PERSONALITIES))
        raise ConfigError(f"Unknown scoring preset {name!r} (known: {known})")


def create_random_personality(
    name: str = "random",
    seed: int | None = None,
) -> Personality:
    """
    Create a personality with jittered open-order weights.

    Completion and rupee weights are kept, so a completed order still
    dominates every other term.
    """
    rng = random.Random(seed)
    base = ScoringWeights()
    weights = replace(
        base,
        affordable_order_weight=base.affordable_order_weight * rng.uniform(0.5, 2.0),
        distance_weight=base.distance_weight * rng.uniform(0.5, 2.0),
    )
    return Personality(
        name=name,
        description="Randomly jittered weights",
        weights=weights,
    )
