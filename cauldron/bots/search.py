"""
Search Engine - Time-boxed exploration of the turn's state space.

The engine expands states from a frontier until the frontier is empty,
the depth limit stops every branch, or the wall-clock deadline passes.
Each scored state is attributed to the root action of its branch (the
action taken at depth 1), and the best root action is returned.

Design:
- Two interchangeable frontier disciplines: breadth-first (FIFO) and
  best-first (highest cached score first)
- The deadline is polled at the loop head and before every candidate
  action, never preemptively
- Deadline expiry is a normal termination: the scoreboard accumulated
  so far is always a valid answer
- Repeatable spells are expanded once per allowed repeat count; the
  scoreboard remembers the count of the best observation
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterator
import heapq
import itertools
import logging
import time

from ..config import SearchConfig, SearchStrategy, DEFAULT_CONFIG
from ..engine_core.executor import ActionExecutor
from ..engine_core.repository import ActionRepository
from ..engine_core.state import State
from .evaluator import StateEvaluator, HeuristicEvaluator

logger = logging.getLogger(__name__)


Clock = Callable[[], float]


# ============================================================================
# Frontiers
# ============================================================================

class Frontier(ABC):
    """Working set of states that are not yet expanded."""

    @abstractmethod
    def push(self, state: State) -> None:
        pass

    @abstractmethod
    def pop(self) -> State:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class FifoFrontier(Frontier):
    """Breadth-first: states are expanded in the order they were found."""

    def __init__(self):
        self._queue: deque[State] = deque()

    def push(self, state: State) -> None:
        self._queue.append(state)

    def pop(self) -> State:
        return self._queue.popleft()

    def __len__(self) -> int:
        return len(self._queue)


class BestFirstFrontier(Frontier):
    """
    Best-first: the highest cached score is expanded first.

    Equal scores pop in insertion order, so runs are reproducible.
    """

    def __init__(self):
        self._heap: list[tuple[float, int, State]] = []
        self._counter = itertools.count()

    def push(self, state: State) -> None:
        if state.score is None:
            raise ValueError("Best-first frontier requires scored states")
        heapq.heappush(self._heap, (-state.score, next(self._counter), state))

    def pop(self) -> State:
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)


def make_frontier(strategy: SearchStrategy) -> Frontier:
    if strategy is SearchStrategy.BEST_FIRST:
        return BestFirstFrontier()
    return FifoFrontier()


# ============================================================================
# Scoreboard
# ============================================================================

@dataclass(frozen=True)
class ScoreEntry:
    """Best (depth, score) observed for one root action, and its repeat count."""
    depth: int
    score: float
    times: int = 1


class Scoreboard:
    """
    Per-root-action record of the best observed descendant.

    An entry is overwritten when the new observation is shallower, or
    when its score is strictly greater. Iteration follows the order in
    which root actions were first recorded.
    """

    def __init__(self):
        self._entries: dict[int, ScoreEntry] = {}

    def record(self, root_action_id: int, depth: int, score: float, times: int = 1) -> bool:
        """Record an observation. Returns True if the entry changed."""
        current = self._entries.get(root_action_id)
        if current is None or depth < current.depth or score > current.score:
            self._entries[root_action_id] = ScoreEntry(depth=depth, score=score, times=times)
            return True
        return False

    def get(self, root_action_id: int) -> ScoreEntry | None:
        return self._entries.get(root_action_id)

    def best(self) -> tuple[int, ScoreEntry] | None:
        """First root action with the strictly greatest score, or None."""
        best: tuple[int, ScoreEntry] | None = None
        for action_id, entry in self._entries.items():
            if best is None or entry.score > best[1].score:
                best = (action_id, entry)
        return best

    def as_dict(self) -> dict[int, ScoreEntry]:
        return dict(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


# ============================================================================
# Engine
# ============================================================================

@dataclass
class SearchResult:
    """
    Outcome of one search.

    `action_id` is the configured no-action sentinel when nothing was
    attributed to a root action. `times` is the repeat count to cast it with.
    """
    action_id: int
    times: int = 1
    score: float | None = None
    nodes_evaluated: int = 0
    max_depth_reached: int = 0
    timed_out: bool = False
    frontier_truncated: bool = False
    elapsed_ms: float = 0.0
    scoreboard: dict[int, ScoreEntry] = field(default_factory=dict)


class SearchEngine:
    """
    Time-boxed search over the states reachable this turn.

    Usage:
        engine = SearchEngine(config)
        result = engine.run(repo, State.initial(ingredients, rupees, disabled))
        print(result.action_id)
    """

    def __init__(
        self,
        config: SearchConfig = DEFAULT_CONFIG,
        evaluator: StateEvaluator | None = None,
        clock: Clock = time.perf_counter,
    ):
        self.config = config
        self.evaluator = evaluator or HeuristicEvaluator()
        self.executor = ActionExecutor(config=config)
        self.clock = clock

    def run(self, repo: ActionRepository, root: State) -> SearchResult:
        """Search from `root` and return the best root action found."""
        config = self.config
        started = self.clock()
        deadline = started + config.timeout_seconds

        frontier = make_frontier(config.strategy)
        scoreboard = Scoreboard()
        result = SearchResult(action_id=config.no_action_id)

        if not root.is_scored:
            root = root.with_score(self.evaluator.score(root, repo))
        frontier.push(root)

        while frontier:
            if self.clock() >= deadline:
                result.timed_out = True
                break

            state = frontier.pop()
            score = state.score if state.score is not None else self.evaluator.score(state, repo)
            result.nodes_evaluated += 1
            result.max_depth_reached = max(result.max_depth_reached, state.depth)

            if state.root_action_id is not None:
                scoreboard.record(state.root_action_id, state.depth, score, state.root_times)

            if state.depth >= config.max_depth:
                continue

            for action_id, times in self.executor.moves(repo, state):
                if self.clock() >= deadline:
                    result.timed_out = True
                    break

                child = self.executor.execute(repo, state, action_id, times)
                if child is None:
                    continue

                if len(frontier) >= config.max_frontier:
                    if not result.frontier_truncated:
                        logger.debug("Frontier full at %d states, dropping children", len(frontier))
                    result.frontier_truncated = True
                    break

                frontier.push(child.with_score(self.evaluator.score(child, repo)))

            if result.timed_out:
                break

        best = scoreboard.best()
        if best is not None:
            result.action_id, entry = best
            result.score = entry.score
            result.times = entry.times

        result.scoreboard = scoreboard.as_dict()
        result.elapsed_ms = (self.clock() - started) * 1000.0

        logger.debug(
            "Evaluated %d nodes, depth %d, timed out: %s, best action %d (score %s)",
            result.nodes_evaluated,
            result.max_depth_reached,
            result.timed_out,
            result.action_id,
            result.score,
        )
        return result

    def search(self, repo: ActionRepository, root: State) -> int:
        """Search and return only the chosen action id."""
        return self.run(repo, root).action_id


def search(
    repo: ActionRepository,
    root: State,
    config: SearchConfig = DEFAULT_CONFIG,
    evaluator: StateEvaluator | None = None,
) -> int:
    """
    Convenience function to pick the best action for a turn.

    Creates a SearchEngine and runs it.
    """
    return SearchEngine(config=config, evaluator=evaluator).search(repo, root)
