"""
Engine Core - Deterministic action model and state transitions.

The engine core is the rules layer that:
1. Models the turn's actions as tagged variants
2. Indexes them in a read-only repository
3. Represents reachable positions as immutable states
4. Applies actions via the executor
"""

from .action import Action, ActionKind, ActionDescriptor, Ingredients, NO_INGREDIENT_CHANGE
from .repository import ActionRepository, RepositoryStats
from .state import State
from .executor import ActionExecutor, execute

__all__ = [
    "Action",
    "ActionKind",
    "ActionDescriptor",
    "Ingredients",
    "NO_INGREDIENT_CHANGE",
    "ActionRepository",
    "RepositoryStats",
    "State",
    "ActionExecutor",
    "execute",
]
