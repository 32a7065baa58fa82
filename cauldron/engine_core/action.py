"""
Action Model - Immutable descriptions of the transformations available in a turn.

An action is a tagged variant: the kind decides which payload fields mean
something, and the executor matches on the kind instead of asking what
concrete class it holds.

    REST   No ingredient change. Re-enables every disabled spell.
    CAST   A learned spell. Fixed delta; disabled until the next REST. A
           repeatable spell may be cast several times in one action, its
           delta scaled by the count.
    LEARN  A tome spell. Learning costs `tome_index` tier-0 ingredients and
           pays back `tax_gain` tier-0 ingredients; once learned it casts
           like a CAST.
    BREW   A potion order. Fixed (non-positive) delta and a rupee price;
           completed permanently once brewed.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


Ingredients = tuple[int, int, int, int]

NO_INGREDIENT_CHANGE: Ingredients = (0, 0, 0, 0)


class ActionKind(Enum):
    """The four action categories the engine can choose from."""
    REST = "rest"
    CAST = "cast"
    LEARN = "learn"
    BREW = "brew"


@dataclass(frozen=True)
class Action:
    """
    One action in the turn's repository.

    Kind-specific payload:
    - BREW: `price` (rupees earned)
    - LEARN: `tome_index` (tier-0 cost of learning) and `tax_gain`
      (tier-0 bonus received when learning)
    - CAST, LEARN: `repeatable` (may be cast several times at once)
    """
    action_id: int
    kind: ActionKind
    delta: Ingredients = NO_INGREDIENT_CHANGE

    price: int = 0
    tome_index: int = 0
    tax_gain: int = 0
    repeatable: bool = False

    @property
    def is_rest(self) -> bool:
        return self.kind is ActionKind.REST

    @property
    def is_order(self) -> bool:
        return self.kind is ActionKind.BREW

    def learn_delta(self) -> Ingredients:
        """Ingredient change of learning this spell (only the tier-0 tax)."""
        return (-self.tome_index, 0, 0, 0)

    def cast_delta(self, times: int = 1) -> Ingredients:
        """Ingredient change of casting this spell `times` times."""
        return tuple(change * times for change in self.delta)

    @classmethod
    def rest(cls, action_id: int) -> Action:
        """Factory for the synthetic rest action."""
        return cls(action_id=action_id, kind=ActionKind.REST)

    @classmethod
    def cast(cls, action_id: int, delta: Ingredients, repeatable: bool = False) -> Action:
        """Factory for a learned spell."""
        return cls(
            action_id=action_id,
            kind=ActionKind.CAST,
            delta=tuple(delta),
            repeatable=repeatable,
        )

    @classmethod
    def learn(
        cls,
        action_id: int,
        delta: Ingredients,
        tome_index: int = 0,
        tax_gain: int = 0,
        repeatable: bool = False,
    ) -> Action:
        """Factory for a tome spell that can be learned."""
        return cls(
            action_id=action_id,
            kind=ActionKind.LEARN,
            delta=tuple(delta),
            tome_index=tome_index,
            tax_gain=tax_gain,
            repeatable=repeatable,
        )

    @classmethod
    def brew(cls, action_id: int, delta: Ingredients, price: int) -> Action:
        """Factory for a potion order."""
        return cls(action_id=action_id, kind=ActionKind.BREW, delta=tuple(delta), price=price)


@dataclass(frozen=True)
class ActionDescriptor:
    """
    One parsed action line, before it becomes an Action.

    `kind` is the raw protocol tag (CAST, OPPONENT_CAST, LEARN, BREW).
    `castable` is only meaningful for CAST: a false value means the spell
    is exhausted and starts the turn disabled.
    """
    action_id: int
    kind: str
    delta: Ingredients
    price: int = 0
    tome_index: int = 0
    tax_gain: int = 0
    castable: bool = True
    repeatable: bool = False

    def to_action(self) -> Action | None:
        """Convert to an Action, or None for kinds the engine ignores."""
        kind = self.kind.upper()
        if kind == "CAST":
            return Action.cast(self.action_id, self.delta, repeatable=self.repeatable)
        if kind == "LEARN":
            return Action.learn(
                self.action_id,
                self.delta,
                tome_index=self.tome_index,
                tax_gain=self.tax_gain,
                repeatable=self.repeatable,
            )
        if kind == "BREW":
            return Action.brew(self.action_id, self.delta, self.price)
        return None
