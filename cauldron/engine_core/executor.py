"""
Action Executor - Applies one action to a search state.

The executor is the single point of state transition during the search.

Design principles:
- Pure function: (repo, state, action id, times) -> new State or None
- Affordability is checked before any side effect is applied
- None means "pruned": unaffordable, over capacity, unknown id, or a
  repeat count the action does not allow
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterator

from ..config import SearchConfig, DEFAULT_CONFIG
from ..errors import UnknownActionError
from .action import Action, ActionKind, Ingredients
from .repository import ActionRepository
from .state import State


Move = tuple[int, int]


@dataclass(frozen=True)
class ActionExecutor:
    """
    Executes actions against states.

    With `strict=True` an unknown action id raises UnknownActionError
    instead of being pruned. The search never asks for ids outside the
    repository, so strict mode is for tests.
    """
    config: SearchConfig = DEFAULT_CONFIG
    strict: bool = False

    def execute(
        self,
        repo: ActionRepository,
        state: State,
        action_id: int,
        times: int = 1,
    ) -> State | None:
        action = repo.get(action_id)
        if action is None:
            if self.strict:
                raise UnknownActionError(action_id)
            return None

        is_new_learn = action.kind is ActionKind.LEARN and action_id not in state.learned
        if times != 1 and not 1 <= times <= self.max_times(action, is_new_learn):
            return None

        if state.root_action_id is None:
            root_action_id, root_times = action_id, times
        else:
            root_action_id, root_times = state.root_action_id, state.root_times

        if action.kind is ActionKind.REST:
            return replace(
                state,
                disabled=frozenset(),
                depth=state.depth + 1,
                root_action_id=root_action_id,
                root_times=root_times,
                score=None,
            )

        delta = self._effective_delta(action, is_new_learn, times)

        ingredients = [have + change for have, change in zip(state.ingredients, delta)]
        if any(count < 0 for count in ingredients):
            return None

        total = sum(ingredients)
        if total > self.config.max_ingredients:
            return None

        rupees = state.rupees
        learned = state.learned
        disabled = state.disabled
        completed = state.completed

        if action.kind is ActionKind.BREW:
            rupees += action.price
            completed = completed | {action_id}
        elif is_new_learn:
            ingredients[0] += min(action.tax_gain, self.config.max_ingredients - total)
            learned = learned | {action_id}
        else:
            disabled = disabled | {action_id}

        return State(
            ingredients=tuple(ingredients),
            rupees=rupees,
            disabled=disabled,
            learned=learned,
            completed=completed,
            depth=state.depth + 1,
            root_action_id=root_action_id,
            root_times=root_times,
        )

    def max_times(self, action: Action, is_new_learn: bool = False) -> int:
        """Largest repeat count allowed for an action in its current form."""
        if not action.repeatable or is_new_learn:
            return 1
        if action.kind not in (ActionKind.CAST, ActionKind.LEARN):
            return 1
        return self.config.max_cast_repeat

    def moves(self, repo: ActionRepository, state: State) -> Iterator[Move]:
        """
        Yield (action id, times) for every active action of a state.

        Repeatable spells yield one move per repeat count, once first.
        Affordability is not checked here.
        """
        for action_id in repo.all_ids():
            if not state.is_active(action_id):
                continue
            action = repo.get(action_id)
            is_new_learn = action.kind is ActionKind.LEARN and action_id not in state.learned
            for times in range(1, self.max_times(action, is_new_learn) + 1):
                yield action_id, times

    def children(self, repo: ActionRepository, state: State) -> list[State]:
        """Every non-rejected successor of a state."""
        successors = []
        for action_id, times in self.moves(repo, state):
            child = self.execute(repo, state, action_id, times)
            if child is not None:
                successors.append(child)
        return successors

    @staticmethod
    def _effective_delta(action: Action, is_new_learn: bool, times: int) -> Ingredients:
        if is_new_learn:
            return action.learn_delta()
        return action.cast_delta(times)


def execute(
    repo: ActionRepository,
    state: State,
    action_id: int,
    config: SearchConfig = DEFAULT_CONFIG,
    times: int = 1,
) -> State | None:
    """
    Convenience function to execute a single action.

    Creates an ActionExecutor and runs the action.
    """
    return ActionExecutor(config=config).execute(repo, state, action_id, times)
