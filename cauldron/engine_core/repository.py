"""
Action Repository - The turn's actions, indexed by id.

Built once per turn from the parsed action lines and never mutated
afterwards. Every state produced during one search shares the same
repository by reference.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable
import logging

from ..config import SearchConfig, DEFAULT_CONFIG
from ..errors import DuplicateActionError
from .action import Action, ActionDescriptor, ActionKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionRepository:
    """
    Read-only mapping from action id to Action.

    A synthetic REST action under `config.rest_id` is always present.
    Iteration order of `all_ids()` follows insertion order but callers
    must not rely on it for tie-breaking.
    """
    actions: dict[int, Action]
    orders: tuple[int, ...] = ()
    learnables: tuple[int, ...] = ()
    casts: tuple[int, ...] = ()
    rest_id: int = DEFAULT_CONFIG.rest_id

    def get(self, action_id: int) -> Action | None:
        return self.actions.get(action_id)

    def all_ids(self) -> tuple[int, ...]:
        return tuple(self.actions)

    def order_ids(self) -> tuple[int, ...]:
        """Ids of every BREW action."""
        return self.orders

    def learnable_ids(self) -> tuple[int, ...]:
        """Ids of every LEARN action."""
        return self.learnables

    def cast_ids(self) -> tuple[int, ...]:
        """Ids of every already-learned spell."""
        return self.casts

    def __contains__(self, action_id: object) -> bool:
        return action_id in self.actions

    def __len__(self) -> int:
        return len(self.actions)

    @classmethod
    def build(
        cls,
        actions: Iterable[Action],
        config: SearchConfig = DEFAULT_CONFIG,
    ) -> ActionRepository:
        """
        Build a repository from already-typed actions.

        Raises DuplicateActionError if two actions share an id, including
        the reserved rest id.
        """
        table: dict[int, Action] = {config.rest_id: Action.rest(config.rest_id)}
        orders: list[int] = []
        learnables: list[int] = []
        casts: list[int] = []

        for action in actions:
            if action.action_id in table:
                raise DuplicateActionError(action.action_id)
            table[action.action_id] = action

            if action.kind is ActionKind.BREW:
                orders.append(action.action_id)
            elif action.kind is ActionKind.LEARN:
                learnables.append(action.action_id)
            elif action.kind is ActionKind.CAST:
                casts.append(action.action_id)

        return cls(
            actions=table,
            orders=tuple(orders),
            learnables=tuple(learnables),
            casts=tuple(casts),
            rest_id=config.rest_id,
        )

    @classmethod
    def from_descriptors(
        cls,
        descriptors: Iterable[ActionDescriptor],
        config: SearchConfig = DEFAULT_CONFIG,
    ) -> tuple[ActionRepository, frozenset[int]]:
        """
        Build a repository from parsed action lines.

        Returns (repository, initially disabled spell ids). Casts whose
        `castable` flag is false start the turn disabled.
        """
        actions: list[Action] = []
        disabled: set[int] = set()

        for descriptor in descriptors:
            action = descriptor.to_action()
            if action is None:
                logger.debug("Skipping %s action %d", descriptor.kind, descriptor.action_id)
                continue

            actions.append(action)
            if action.kind is ActionKind.CAST and not descriptor.castable:
                disabled.add(action.action_id)

        return cls.build(actions, config), frozenset(disabled)


@dataclass
class RepositoryStats:
    """Counts per action kind, for logging."""
    counts: dict[str, int] = field(default_factory=dict)

    @classmethod
    def of(cls, repo: ActionRepository) -> RepositoryStats:
        counts: dict[str, int] = {}
        for action_id in repo.all_ids():
            kind = repo.actions[action_id].kind.value
            counts[kind] = counts.get(kind, 0) + 1
        return cls(counts=counts)

    def __str__(self) -> str:
        return ", ".join(f"{kind}={count}" for kind, count in sorted(self.counts.items()))
