"""
Heuristic Evaluator - Scores search states for the decision engine.

The evaluator assigns a numeric score to a position based on:
- Rupees held (the currency the game is ultimately about)
- Completed orders (dominant reward, proportional to price)
- Open orders (bonus when affordable now, graduated penalty by shortfall)

It knows nothing about the search: the score depends only on the state
and the repository, never on depth or on the path that reached the state.
Weights can be adjusted to create different play styles.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.action import Action, Ingredients
    from ..engine_core.repository import ActionRepository
    from ..engine_core.state import State


@dataclass(frozen=True)
class ScoringWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    # Currency
    rupee_weight: float = 10.0

    # Completed orders: price * weight, dominates every other term
    completed_order_weight: float = 100.0
    # Per-tier tie-break rewarding orders that consumed costlier ingredients
    completed_cost_weights: tuple[float, float, float, float] = (0.5, 1.0, 2.0, 3.0)

    # Open orders
    affordable_order_weight: float = 0.3  # Price * weight when brewable now
    distance_weight: float = 0.1  # Shortfall * price * weight (shortfall <= 0)


@dataclass
class StateEvaluation:
    """
    Result of evaluating a state, with the per-feature breakdown.
    """
    total_score: float
    feature_breakdown: dict[str, float] = field(default_factory=dict)


class StateEvaluator(ABC):
    """Interface for state scoring functions."""

    @abstractmethod
    def score(self, state: State, repo: ActionRepository) -> float:
        """Return the desirability of a state."""
        pass

    def get_name(self) -> str:
        return self.__class__.__name__


class HeuristicEvaluator(StateEvaluator):
    """
    Evaluates states using weighted order-progress heuristics.

    Used by the search engine: every child state is scored once, right
    after the executor produces it.
    """

    def __init__(self, weights: ScoringWeights | None = None):
        self.weights = weights or ScoringWeights()

    def score(self, state: State, repo: ActionRepository) -> float:
        return self.evaluate(state, repo).total_score

    def evaluate(self, state: State, repo: ActionRepository) -> StateEvaluation:
        """Evaluate a state and report where the score came from."""
        features = {
            "rupees": state.rupees * self.weights.rupee_weight,
            "completed_orders": 0.0,
            "affordable_orders": 0.0,
            "order_distance": 0.0,
        }

        for order_id in repo.order_ids():
            order = repo.get(order_id)
            if order is None:
                continue

            if order_id in state.completed:
                features["completed_orders"] += self._completion_reward(order)
                continue

            distance = order_distance(state.ingredients, order.delta)
            if distance >= 0:
                features["affordable_orders"] += order.price * self.weights.affordable_order_weight
            features["order_distance"] += distance * order.price * self.weights.distance_weight

        return StateEvaluation(
            total_score=sum(features.values()),
            feature_breakdown=features,
        )

    def _completion_reward(self, order: Action) -> float:
        reward = order.price * self.weights.completed_order_weight
        # Order deltas are non-positive, so this is a bonus for what was spent
        for change, weight in zip(order.delta, self.weights.completed_cost_weights):
            reward -= change * weight
        return reward


class RupeeEvaluator(StateEvaluator):
    """
    Baseline evaluator: scores only the rupees held.

    Used for:
    - Testing
    - Baseline comparison
    """

    def score(self, state: State, repo: ActionRepository) -> float:
        return float(state.rupees)


def order_distance(ingredients: Ingredients, requirement: Ingredients) -> int:
    """
    Sum of unmet shortfalls for an order.

    Each term is <= 0; the total is 0 exactly when the order is
    affordable with the given ingredients.
    """
    return sum(min(0, have + need) for have, need in zip(ingredients, requirement))
