"""
Session module - Turn loop orchestration.

Provides:
- GameLoop: reads turns, asks the policy, writes commands
- TurnResult: outcome of one turn
"""

from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "GameLoop",
    "LoopState",
    "TurnResult",
]
