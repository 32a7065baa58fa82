"""
Bot Policy - Interface for per-turn decision-making.

A BotPolicy takes the turn's repository and initial state and returns a
decision. Decisions include:
- Which action to take (or the no-action sentinel)
- Explanation (for logging/debugging)
- Search statistics when a search was run
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any
import random

from ..config import SearchConfig, DEFAULT_CONFIG
from ..engine_core.action import ActionKind
from ..engine_core.executor import ActionExecutor
from ..engine_core.repository import ActionRepository
from ..engine_core.state import State
from .evaluator import StateEvaluator
from .search import SearchEngine


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    `kind` is None when `action_id` is the no-action sentinel.
    """
    action_id: int
    kind: ActionKind | None = None
    times: int = 1
    explanation: str = ""

    # Search details (for debugging)
    evaluated_nodes: int = 0
    best_score: float | None = None
    timed_out: bool = False
    evaluation_details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_wait(self) -> bool:
        return self.kind is None


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    Implementations range from trivial baselines to the time-boxed
    search used in play.
    """

    def __init__(self, config: SearchConfig = DEFAULT_CONFIG):
        self.config = config

    @abstractmethod
    def select_action(self, repo: ActionRepository, state: State) -> BotDecision:
        """
        Select an action for this turn.

        Args:
            repo: The turn's action repository
            state: The turn's initial state

        Returns:
            BotDecision with the selected action id
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__

    def _decision(self, repo: ActionRepository, action_id: int, **kwargs) -> BotDecision:
        action = repo.get(action_id)
        return BotDecision(
            action_id=action_id if action is not None else self.config.no_action_id,
            kind=action.kind if action is not None else None,
            **kwargs,
        )

    def _legal_action_ids(self, repo: ActionRepository, state: State) -> list[int]:
        executor = ActionExecutor(config=self.config)
        return [
            action_id
            for action_id in repo.all_ids()
            if state.is_active(action_id)
            and executor.execute(repo, state, action_id) is not None
        ]


class SearchPolicy(BotPolicy):
    """
    Search policy - runs the time-boxed state-space search.

    This is the policy used in play.
    """

    def __init__(
        self,
        config: SearchConfig = DEFAULT_CONFIG,
        evaluator: StateEvaluator | None = None,
        engine: SearchEngine | None = None,
    ):
        super().__init__(config)
        self.engine = engine or SearchEngine(config=config, evaluator=evaluator)

    def select_action(self, repo: ActionRepository, state: State) -> BotDecision:
        result = self.engine.run(repo, state)

        if result.action_id == self.config.no_action_id:
            explanation = "No action found"
        else:
            explanation = (
                f"Best root action {result.action_id} "
                f"(score: {result.score:.1f}, nodes: {result.nodes_evaluated})"
            )

        return self._decision(
            repo,
            result.action_id,
            explanation=explanation,
            times=result.times,
            evaluated_nodes=result.nodes_evaluated,
            best_score=result.score,
            timed_out=result.timed_out,
            evaluation_details={
                "max_depth_reached": result.max_depth_reached,
                "elapsed_ms": result.elapsed_ms,
                "root_actions": len(result.scoreboard),
            },
        )

    def get_name(self) -> str:
        return f"SearchPolicy({self.config.strategy.value})"


class RandomPolicy(BotPolicy):
    """
    Random policy - selects a legal action uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, config: SearchConfig = DEFAULT_CONFIG, seed: int | None = None):
        super().__init__(config)
        self.rng = random.Random(seed)

    def select_action(self, repo: ActionRepository, state: State) -> BotDecision:
        legal = self._legal_action_ids(repo, state)
        if not legal:
            return self._decision(repo, self.config.no_action_id, explanation="No legal action")

        return self._decision(
            repo,
            self.rng.choice(legal),
            explanation="Selected randomly",
            evaluated_nodes=len(legal),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - brews the first brewable order, else the first
    other legal action.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_action(self, repo: ActionRepository, state: State) -> BotDecision:
        legal = self._legal_action_ids(repo, state)
        if not legal:
            return self._decision(repo, self.config.no_action_id, explanation="No legal action")

        for action_id in legal:
            if repo.get(action_id).is_order:
                return self._decision(repo, action_id, explanation="Brewing first brewable order")

        return self._decision(repo, legal[0], explanation="Selected first legal action")
