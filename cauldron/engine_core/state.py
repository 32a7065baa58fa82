"""
Search State - One reachable position in the turn's search tree.

Design principles:
- Immutable: every transition returns a new State
- No aliasing: the id sets are frozensets, so branches never share
  mutable structure
- Score is stamped once, right after construction, via with_score()
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from .action import Ingredients


@dataclass(frozen=True)
class State:
    """
    A position reached during the search.

    `root_action_id` is the action taken at depth 1 of the branch; it is
    None only for the turn's initial state. `root_times` is how many times
    that action was cast.
    """
    ingredients: Ingredients
    rupees: int = 0

    # Spells exhausted until the next REST
    disabled: frozenset[int] = field(default_factory=frozenset)
    # Tome spells learned during this branch
    learned: frozenset[int] = field(default_factory=frozenset)
    # Orders brewed during this branch (never re-enabled)
    completed: frozenset[int] = field(default_factory=frozenset)

    depth: int = 0
    root_action_id: int | None = None
    root_times: int = 1
    score: float | None = None

    @property
    def is_scored(self) -> bool:
        return self.score is not None

    def is_active(self, action_id: int) -> bool:
        """An action is active if learned, or neither disabled nor completed."""
        return action_id in self.learned or (
            action_id not in self.disabled and action_id not in self.completed
        )

    def with_score(self, score: float) -> State:
        """Return a copy carrying the cached heuristic score."""
        if self.score is not None:
            raise ValueError("State score is already set")
        return replace(self, score=score)

    @classmethod
    def initial(
        cls,
        ingredients: Ingredients,
        rupees: int = 0,
        disabled: frozenset[int] | set[int] = frozenset(),
    ) -> State:
        """Root state of a turn: depth 0, no root action."""
        return cls(
            ingredients=tuple(ingredients),
            rupees=rupees,
            disabled=frozenset(disabled),
        )
